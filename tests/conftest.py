import pytest

from ticketdesk.application.store import TicketStore
from ticketdesk.infrastructure.config.settings import Settings
from ticketdesk.infrastructure.persistence.storage import MemoryStorage

ADMIN_EMAIL = "admin@company.com"
SUB_ADMIN_EMAIL = "subadmin@company.com"
MEMBER_EMAIL = "john@company.com"
PASSWORD = "password"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        BCRYPT_ROUNDS=4,
        STORAGE_BACKEND="memory",
        STORAGE_DIR=str(tmp_path / "storage"),
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
async def store(test_settings, storage):
    ticket_store = TicketStore(storage, test_settings)
    await ticket_store.load()
    return ticket_store


@pytest.fixture
async def admin_store(store):
    assert await store.login(ADMIN_EMAIL, PASSWORD)
    return store


def ticket_payload(**overrides):
    payload = {
        "name": "Grace Hopper",
        "phone": "+15550100",
        "email": "grace@example.com",
        "company_section": "Development",
        "source": "Email",
        "subject": "Printer jammed",
        "message": "The third floor printer keeps jamming on duplex jobs.",
        "priority": "high",
        "department_id": "1",
    }
    payload.update(overrides)
    return payload
