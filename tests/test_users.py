import pytest
from pydantic import ValidationError

from ticketdesk.application.results import ResultStatus
from ticketdesk.domain.entities.user import UserRole


def new_user(**overrides):
    data = {
        "name": "Ada Lovelace",
        "email": "ada@company.com",
        "password": "engine",
        "role": "user",
        "department_id": "2",
    }
    data.update(overrides)
    return data


async def test_create_user(store):
    result = await store.create_user(new_user())

    assert result.ok
    assert result.value.id
    assert result.value.role == UserRole.USER
    assert result.value.department_name == "Customer Service"
    assert await store.login("ada@company.com", "engine")


async def test_create_user_duplicate_email(store):
    result = await store.create_user(new_user(email="john@company.com"))
    assert result.status == ResultStatus.CONFLICT


async def test_create_user_unknown_department(store):
    result = await store.create_user(new_user(department_id="missing"))
    assert result.status == ResultStatus.INVALID


async def test_create_user_invalid_email(store):
    with pytest.raises(ValidationError):
        await store.create_user(new_user(email="not-an-email"))


async def test_one_sub_admin_per_department(store):
    taken = await store.create_user(new_user(role="sub-admin", department_id="1"))
    assert taken.status == ResultStatus.CONFLICT

    free = await store.create_user(new_user(role="sub-admin", department_id="3"))
    assert free.ok


async def test_sub_admin_needs_department(store):
    result = await store.create_user(new_user(role="sub-admin", department_id=None))
    assert result.status == ResultStatus.INVALID


async def test_promote_to_sub_admin_checks_leader(store):
    result = await store.update_user("4", {"role": "sub-admin"})
    assert result.ok

    result = await store.update_user("3", {"role": "sub-admin"})
    assert result.status == ResultStatus.CONFLICT


async def test_update_user(store):
    result = await store.update_user("4", {"name": "Jane Doe", "email": "jane.doe@company.com"})

    assert result.ok
    assert result.value.name == "Jane Doe"
    assert result.value.email == "jane.doe@company.com"


async def test_update_user_email_conflict(store):
    result = await store.update_user("4", {"email": "john@company.com"})
    assert result.status == ResultStatus.CONFLICT


async def test_update_missing_user(store):
    result = await store.update_user("missing", {"name": "X"})
    assert result.status == ResultStatus.NOT_FOUND


async def test_assign_user_to_department(store):
    result = await store.assign_user_to_department("4", "3")

    assert result.ok
    assert result.value.department_id == "3"
    assert result.value.department_name == "Sales"


async def test_detach_user_from_department(store):
    result = await store.assign_user_to_department("4", None)
    assert result.ok
    assert result.value.department_id is None


async def test_delete_user_is_idempotent(store):
    first = await store.delete_user("4")
    count = len(await store.get_users())

    second = await store.delete_user("4")

    assert first.ok
    assert second.status == ResultStatus.NOT_FOUND
    assert len(await store.get_users()) == count


async def test_delete_user_clears_assignments(admin_store):
    await admin_store.update_ticket("1", {"assigned_user_id": "3"})

    await admin_store.delete_user("3")

    ticket = await admin_store.get_ticket("1")
    assert ticket.assigned_user_id is None
    assert ticket.created_by == "1"


async def test_deleting_session_user_logs_out(store):
    await store.login("jane@company.com", "password")
    await store.delete_user("4")
    assert store.user is None


async def test_list_users_by_role(store):
    sub_admins = await store.get_users(role=UserRole.SUB_ADMIN)
    assert [u.email for u in sub_admins] == ["subadmin@company.com"]


async def test_email_is_stored_as_given(store):
    result = await store.create_user(new_user(email="Bob@Example.COM"))

    assert result.value.email == "Bob@Example.COM"
    assert await store.login("Bob@Example.COM", "engine") is True
    assert await store.login("Bob@example.com", "engine") is False


async def test_create_user_rejects_long_password(store):
    count = len(await store.get_users())
    with pytest.raises(ValidationError):
        await store.create_user(new_user(password="x" * 80))
    assert len(await store.get_users()) == count


async def test_update_user_long_password_changes_nothing(store, storage, test_settings):
    before = storage.get_item(test_settings.STORE_NAME)
    with pytest.raises(ValidationError):
        await store.update_user("4", {"name": "Renamed", "password": "y" * 80})

    assert (await store.get_user("4")).name == "Jane Smith"
    assert storage.get_item(test_settings.STORE_NAME) == before
    assert await store.login("jane@company.com", "password")
