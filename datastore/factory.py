from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from datastore.base import RecordStore
from datastore.cosmos import CosmosRecordStore
from datastore.memory import InMemoryRecordStore
from settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def build_default_store() -> RecordStore:
    settings = get_settings()
    if settings.store_backend == "memory":
        path = Path(settings.memory_store_path) if settings.memory_store_path else None
        logger.info("Using in-memory record store", extra={"backend": "memory"})
        return InMemoryRecordStore(persistence_path=path)

    return CosmosRecordStore(
        endpoint=settings.cosmos_endpoint,
        key=settings.cosmos_key,
        database=settings.cosmos_database,
        container=settings.cosmos_container,
    )
