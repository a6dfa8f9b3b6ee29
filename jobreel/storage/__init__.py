"""
Storage module - repository interface and its backends.

Usage:
    from jobreel.storage import get_storage

    @router.get("/things")
    async def route(storage: Storage = Depends(get_storage)):
        ...
"""

import logging
from functools import lru_cache

from jobreel.core.config import get_settings
from jobreel.storage.base import DuplicateError, Storage
from jobreel.storage.memory import MemStorage

logger = logging.getLogger(__name__)


def create_storage(backend: str, seed: bool = False, session_factory=None) -> Storage:
    """
    Build a storage backend by name ("memory" or "sql").

    Demo data only ever goes into the in-memory store. A SQL database is
    left as migrations made it.
    """
    if backend == "memory":
        storage: Storage = MemStorage()
    elif backend == "sql":
        # Imported lazily, the in-memory backend needs no database driver
        from jobreel.storage.sql import SqlStorage
        storage = SqlStorage(session_factory)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    if seed and backend == "memory":
        from jobreel.storage.seed import seed_demo_data
        seed_demo_data(storage)
    elif seed:
        logger.warning("SEED_DEMO_DATA ignored for the %s backend", backend)
    return storage


@lru_cache()
def get_storage() -> Storage:
    """FastAPI dependency - the process-wide store chosen by settings."""
    settings = get_settings()
    logger.info("Using %s storage backend", settings.storage_backend)
    return create_storage(settings.storage_backend, seed=settings.seed_demo_data)


__all__ = ["DuplicateError", "MemStorage", "Storage", "create_storage", "get_storage"]
