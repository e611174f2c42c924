from ticketdesk.application.results import ResultStatus
from ticketdesk.domain.entities.user import UserRole

from tests.conftest import ADMIN_EMAIL, MEMBER_EMAIL, PASSWORD


async def test_login_with_seeded_admin(store):
    assert await store.login(ADMIN_EMAIL, PASSWORD) is True
    assert store.user.email == ADMIN_EMAIL
    assert store.user.role == UserRole.ADMIN

    current = await store.current_user()
    assert current.name == "Admin User"


async def test_login_wrong_password_returns_false(store):
    assert await store.login(ADMIN_EMAIL, "wrong") is False
    assert store.user is None


async def test_login_email_is_case_sensitive(store):
    assert await store.login("Admin@company.com", PASSWORD) is False


async def test_failed_login_keeps_previous_session(store):
    assert await store.login(MEMBER_EMAIL, PASSWORD)
    assert await store.login(ADMIN_EMAIL, "nope") is False
    assert store.user.email == MEMBER_EMAIL


async def test_unknown_email_returns_false(store):
    assert await store.login("nobody@company.com", PASSWORD) is False


async def test_logout_clears_session(admin_store):
    await admin_store.logout()
    assert admin_store.user is None
    assert await admin_store.current_user() is None


async def test_logout_without_session_is_harmless(store):
    await store.logout()
    assert store.user is None


async def test_set_user(store):
    result = await store.set_user("3")
    assert result.ok
    assert result.value.name == "John Doe"
    assert result.value.department_name == "Technical Support"
    assert store.user.id == "3"


async def test_set_user_unknown_id(store):
    result = await store.set_user("missing")
    assert result.status == ResultStatus.NOT_FOUND
    assert store.user is None


async def test_login_after_password_change(admin_store):
    result = await admin_store.update_user("3", {"password": "s3cret"})
    assert result.ok

    assert await admin_store.login(MEMBER_EMAIL, PASSWORD) is False
    assert await admin_store.login(MEMBER_EMAIL, "s3cret") is True
