import json

import pytest

from ticketdesk.application.store import TicketStore
from ticketdesk.infrastructure.config.settings import Settings
from ticketdesk.infrastructure.persistence.storage import FileStorage, MemoryStorage
from ticketdesk.main import create_store

from tests.conftest import ADMIN_EMAIL, PASSWORD, ticket_payload


@pytest.fixture
def file_settings(tmp_path):
    return Settings(BCRYPT_ROUNDS=4, STORAGE_BACKEND="file", STORAGE_DIR=str(tmp_path / "state"))


async def test_every_mutation_writes_snapshot(store, storage, test_settings):
    await store.create_department("Billing")

    raw = json.loads(storage.get_item(test_settings.STORE_NAME))
    assert raw["version"] == test_settings.STORE_VERSION
    assert "Billing" in [d["name"] for d in raw["state"]["departments"]]
    assert raw["state"]["user"] is None


async def test_passwords_are_not_persisted_in_plaintext(store, storage, test_settings):
    raw = json.loads(storage.get_item(test_settings.STORE_NAME))
    for user in raw["state"]["users"]:
        assert "password" not in user
        assert user["password_hash"].startswith("$2")


async def test_file_round_trip(file_settings):
    first = await create_store(file_settings)
    assert await first.login(ADMIN_EMAIL, PASSWORD)
    department = (await first.create_department("Billing")).value
    ticket = (await first.create_ticket(ticket_payload(department_id=department.id))).value
    await first.update_ticket(ticket.id, {"status": "paused"})

    second = await create_store(file_settings)

    assert second.user is not None
    assert second.user.email == ADMIN_EMAIL
    restored = await second.get_ticket(ticket.id)
    assert restored.department_name == "Billing"
    assert [e.action for e in restored.log_trail] == ["Ticket Created", "Ticket Updated"]
    assert restored.updated_at == (await first.get_ticket(ticket.id)).updated_at
    assert await second.login("john@company.com", PASSWORD)


async def test_logout_is_persisted(file_settings):
    first = await create_store(file_settings)
    await first.login(ADMIN_EMAIL, PASSWORD)
    await first.logout()

    second = await create_store(file_settings)
    assert second.user is None


async def test_version_mismatch_falls_back_to_seed(file_settings):
    first = await create_store(file_settings)
    await first.create_department("Billing")

    bumped = file_settings.model_copy(update={"STORE_VERSION": file_settings.STORE_VERSION + 1})
    second = await create_store(bumped)

    names = [d.name for d in await second.get_departments()]
    assert "Billing" not in names
    assert len(names) == 3


async def test_corrupt_snapshot_falls_back_to_seed(test_settings):
    storage = MemoryStorage()
    storage.set_item(test_settings.STORE_NAME, "{not json")

    store = TicketStore(storage, test_settings)
    await store.load()

    assert len(await store.get_tickets()) == 2
    assert json.loads(storage.get_item(test_settings.STORE_NAME))["version"] == test_settings.STORE_VERSION


async def test_reset_store_restores_seed(admin_store, storage, test_settings):
    await admin_store.create_department("Billing")
    await admin_store.delete_ticket("1")

    await admin_store.reset_store()

    assert admin_store.user is None
    assert len(await admin_store.get_departments()) == 3
    assert len(await admin_store.get_tickets()) == 2
    assert await admin_store.login(ADMIN_EMAIL, PASSWORD) is True
    assert admin_store.user.id == "1"


async def test_failed_operation_does_not_write(store, storage, test_settings):
    before = storage.get_item(test_settings.STORE_NAME)
    await store.update_ticket("1", {"status": "paused"})
    assert storage.get_item(test_settings.STORE_NAME) == before


def test_file_storage_rejects_path_keys(tmp_path):
    storage = FileStorage(str(tmp_path))
    with pytest.raises(ValueError):
        storage.set_item("../escape", "{}")


def test_file_storage_remove(tmp_path):
    storage = FileStorage(str(tmp_path))
    storage.set_item("slot", "{}")
    assert storage.get_item("slot") == "{}"
    storage.remove_item("slot")
    assert storage.get_item("slot") is None
    storage.remove_item("slot")


async def test_undecodable_snapshot_falls_back_to_seed(file_settings):
    slot = FileStorage(file_settings.STORAGE_DIR).ensure_dir() / f"{file_settings.STORE_NAME}.json"
    slot.write_bytes(b"\xff\xfe garbage")

    store = await create_store(file_settings)

    assert len(await store.get_tickets()) == 2
    assert json.loads(slot.read_text(encoding="utf-8"))["version"] == file_settings.STORE_VERSION
