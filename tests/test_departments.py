from ticketdesk.application.results import ResultStatus
from ticketdesk.domain.entities.user import UserRole


async def test_seeded_departments(store):
    departments = await store.get_departments()
    by_name = {d.name: d for d in departments}

    assert set(by_name) == {"Technical Support", "Customer Service", "Sales"}
    support = by_name["Technical Support"]
    assert support.user_count == 2
    assert support.ticket_count == 1
    assert support.leader_name == "Sub Admin"
    assert by_name["Sales"].leader_id is None


async def test_create_department(store):
    result = await store.create_department("Billing", "Invoices and refunds")

    assert result.ok
    assert result.value.name == "Billing"
    assert result.value.description == "Invoices and refunds"
    assert result.value.user_count == 0
    assert len(await store.get_departments()) == 4


async def test_create_department_strips_and_checks_name(store):
    assert (await store.create_department("   ")).status == ResultStatus.INVALID
    assert (await store.create_department(" sales ")).status == ResultStatus.CONFLICT


async def test_update_department(store):
    result = await store.update_department("3", {"name": "Sales & Partnerships"})

    assert result.ok
    assert result.value.name == "Sales & Partnerships"
    assert result.value.description.startswith("Responsible")


async def test_rename_keeps_references(store):
    await store.update_department("1", {"name": "IT Support"})

    ticket = await store.get_ticket("1")
    user = await store.get_user("3")
    assert ticket.department_name == "IT Support"
    assert user.department_name == "IT Support"


async def test_update_department_conflict_and_missing(store):
    assert (await store.update_department("3", {"name": "Customer Service"})).status == ResultStatus.CONFLICT
    assert (await store.update_department("missing", {"name": "X"})).status == ResultStatus.NOT_FOUND


async def test_delete_unreferenced_department(store):
    result = await store.delete_department("3")

    assert result.ok
    assert await store.get_department("3") is None
    assert (await store.delete_department("3")).status == ResultStatus.NOT_FOUND


async def test_delete_referenced_department_is_refused(store):
    result = await store.delete_department("1")

    assert result.status == ResultStatus.CONFLICT
    assert await store.get_department("1") is not None


async def test_department_users(store):
    members = await store.get_department_users("1", role=UserRole.USER)
    assert [m.name for m in members] == ["John Doe"]

    everyone = await store.get_department_users("1")
    assert {m.role for m in everyone} == {UserRole.USER, UserRole.SUB_ADMIN}
