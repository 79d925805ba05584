from __future__ import annotations

from typing import List, Protocol

from models.records import SensorWindowRecord


class StorageUnavailable(RuntimeError):
    """The document store could not be reached or rejected a query."""


class RecordStore(Protocol):
    """Read-only access to sensor window documents."""

    async def query_by_location(self, slug: str) -> List[SensorWindowRecord]:
        ...

    async def query_all(self) -> List[SensorWindowRecord]:
        ...

    async def close(self) -> None:
        ...
