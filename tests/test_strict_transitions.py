import pytest

from ticketdesk.application.results import ResultStatus
from ticketdesk.application.store import TicketStore
from ticketdesk.domain.entities.ticket import TicketStatus
from ticketdesk.infrastructure.config.settings import Settings
from ticketdesk.infrastructure.persistence.storage import MemoryStorage


@pytest.fixture
async def strict_store():
    settings = Settings(BCRYPT_ROUNDS=4, STRICT_STATUS_TRANSITIONS=True)
    store = TicketStore(MemoryStorage(), settings)
    await store.load()
    assert await store.login("admin@company.com", "password")
    return store


async def test_forward_workflow(strict_store):
    for status in ("in-progress", "paused", "completed", "in-progress"):
        result = await strict_store.update_ticket("1", {"status": status})
        assert result.ok, status


async def test_skipping_ahead_is_rejected(strict_store):
    before = await strict_store.get_ticket("1")

    result = await strict_store.update_ticket("1", {"status": "completed"})

    assert result.status == ResultStatus.INVALID
    after = await strict_store.get_ticket("1")
    assert after.status == TicketStatus.NEW
    assert len(after.log_trail) == len(before.log_trail)


async def test_resolve_new_ticket_rejected(strict_store):
    result = await strict_store.resolve_ticket("1", "done")
    assert result.status == ResultStatus.INVALID


async def test_same_status_allowed(strict_store):
    result = await strict_store.update_ticket("1", {"status": "new"})
    assert result.ok
