from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Iterable, List, Optional

from datastore.base import StorageUnavailable
from models.records import SensorWindowRecord


class InMemoryRecordStore:
    """Record store holding documents in process memory.

    Documents can be seeded directly or loaded from a JSON file containing a
    list of objects. Queries return deep copies.
    """

    def __init__(
        self,
        records: Optional[Iterable[SensorWindowRecord]] = None,
        persistence_path: Optional[Path] = None,
    ) -> None:
        self._records: List[SensorWindowRecord] = [dict(record) for record in records or ()]
        self.persistence_path = persistence_path
        if persistence_path:
            self._load_from_disk()

    async def query_by_location(self, slug: str) -> List[SensorWindowRecord]:
        return [
            copy.deepcopy(record)
            for record in self._records
            if record.get("location") == slug
        ]

    async def query_all(self) -> List[SensorWindowRecord]:
        return [copy.deepcopy(record) for record in self._records]

    async def close(self) -> None:
        return None

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailable(
                f"Could not load records from {self.persistence_path}: {exc}"
            ) from exc

        if not isinstance(data, list):
            raise StorageUnavailable(
                f"Expected a JSON list of records in {self.persistence_path}."
            )
        self._records.extend(item for item in data if isinstance(item, dict))
