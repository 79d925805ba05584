"""Azure Cosmos DB backed record store."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.aio import ContainerProxy, CosmosClient

from datastore.base import StorageUnavailable
from models.records import SensorWindowRecord

logger = logging.getLogger(__name__)

LOCATION_QUERY = "SELECT * FROM c WHERE c.location = @location"
ALL_QUERY = "SELECT * FROM c"

ClientFactory = Callable[[str, str], CosmosClient]


def _default_client_factory(endpoint: str, key: str) -> CosmosClient:
    return CosmosClient(endpoint, credential=key)


class CosmosRecordStore:
    """Queries a single Cosmos DB container.

    The SDK client is created on the first query so the application can start
    (and report health) without connection settings.
    """

    def __init__(
        self,
        endpoint: Optional[str],
        key: Optional[str],
        database: Optional[str],
        container: Optional[str],
        client_factory: ClientFactory = _default_client_factory,
    ) -> None:
        self.endpoint = endpoint
        self.database = database
        self.container = container
        self._key = key
        self._client_factory = client_factory
        self._client: Optional[CosmosClient] = None
        self._container: Optional[ContainerProxy] = None

    async def query_by_location(self, slug: str) -> List[SensorWindowRecord]:
        return await self._query(
            LOCATION_QUERY,
            parameters=[{"name": "@location", "value": slug}],
        )

    async def query_all(self) -> List[SensorWindowRecord]:
        return await self._query(ALL_QUERY)

    async def close(self) -> None:
        client, self._client, self._container = self._client, None, None
        if client is not None:
            await client.close()

    def _get_container(self) -> ContainerProxy:
        if self._container is not None:
            return self._container

        missing = [
            name
            for name, value in (
                ("endpoint", self.endpoint),
                ("key", self._key),
                ("database", self.database),
                ("container", self.container),
            )
            if not value
        ]
        if missing:
            raise StorageUnavailable(
                f"Cosmos DB settings are incomplete: missing {', '.join(missing)}."
            )

        try:
            client = self._client_factory(self.endpoint, self._key)  # type: ignore[arg-type]
        except (AzureError, ValueError) as exc:
            raise StorageUnavailable(f"Could not create Cosmos DB client: {exc}") from exc

        self._client = client
        self._container = client.get_database_client(self.database).get_container_client(
            self.container
        )
        logger.info(
            "Cosmos DB client created for %s/%s",
            self.database,
            self.container,
            extra={"backend": "cosmos"},
        )
        return self._container

    async def _query(
        self,
        query: str,
        parameters: Optional[List[Dict[str, Any]]] = None,
    ) -> List[SensorWindowRecord]:
        container = self._get_container()
        try:
            return [
                item
                async for item in container.query_items(query=query, parameters=parameters)
            ]
        except AzureError as exc:
            raise StorageUnavailable(f"Cosmos DB query failed: {exc}") from exc
