"""Ticket desk composition root"""
import logging
from typing import Optional
from ticketdesk.application.store import TicketStore
from ticketdesk.infrastructure.config.logging_config import configure_logging
from ticketdesk.infrastructure.config.settings import Settings, settings as default_settings
from ticketdesk.infrastructure.persistence.storage import FileStorage, KeyValueStorage, MemoryStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the storage backend named by settings"""
    if settings.STORAGE_BACKEND == "memory":
        return MemoryStorage()
    if settings.STORAGE_BACKEND == "file":
        storage = FileStorage(settings.STORAGE_DIR)
        storage.ensure_dir()
        return storage
    raise ValueError(f"Unsupported storage backend: {settings.STORAGE_BACKEND}")


async def create_store(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> TicketStore:
    """Build a store and rehydrate it from storage (or seed it)"""
    settings = settings or default_settings
    configure_logging(settings)
    logger.info("Starting %s %s", settings.APP_NAME, settings.APP_VERSION)

    store = TicketStore(storage or create_storage(settings), settings)
    await store.load()
    return store
