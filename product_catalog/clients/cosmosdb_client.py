"""Azure Cosmos DB client for product document storage."""

import logging
from typing import Any, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.aio import CosmosClient
from azure.cosmos.aio._container import ContainerProxy
from azure.cosmos.aio._database import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

logger = logging.getLogger(__name__)


class StoreFailure(Exception):
    """Raised when the document database rejects or fails an operation."""

    pass


class CosmosDBClient:
    """Async Cosmos DB client with connection management.

    Uses the NoSQL API for inserting and reading product documents.
    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        endpoint: str,
        key: str,
        database_name: str,
        container_name: str,
        partition_key_path: str = "/id",
    ):
        """Initialize the Cosmos DB client.

        Args:
            endpoint: Cosmos DB account endpoint URL
            key: Cosmos DB account key
            database_name: Name of the database to use
            container_name: Name of the container to use
            partition_key_path: Path to the partition key field (default: /id)
        """
        self._endpoint = endpoint
        self._key = key
        self._database_name = database_name
        self._container_name = container_name
        self._partition_key_path = partition_key_path

        self._client: Optional[CosmosClient] = None
        self._database: Optional[DatabaseProxy] = None
        self._container: Optional[ContainerProxy] = None

    async def connect(self) -> None:
        """Establish connection and ensure database/container exist.

        Raises:
            StoreFailure: If the account cannot be reached or the
                database/container cannot be created.
        """
        try:
            self._client = CosmosClient(url=self._endpoint, credential=self._key)
            await self._client.__aenter__()

            # Get or create database
            try:
                self._database = self._client.get_database_client(self._database_name)
                # Verify database exists by reading it
                await self._database.read()
            except CosmosResourceNotFoundError:
                logger.info(f"Creating Cosmos DB database: {self._database_name}")
                self._database = await self._client.create_database(self._database_name)

            # Get or create container
            try:
                self._container = self._database.get_container_client(self._container_name)
                # Verify container exists by reading it
                await self._container.read()
            except CosmosResourceNotFoundError:
                logger.info(f"Creating Cosmos DB container: {self._container_name}")
                self._container = await self._database.create_container(
                    id=self._container_name,
                    partition_key={"paths": [self._partition_key_path], "kind": "Hash"},
                )
        except AzureError as e:
            await self.close()
            raise StoreFailure(
                f"Failed to connect to Cosmos DB container {self._container_name}: {e}"
            ) from e

        logger.info(
            f"Connected to Cosmos DB {self._database_name}/{self._container_name}"
        )

    async def close(self) -> None:
        """Close the Cosmos DB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._container = None

    async def __aenter__(self) -> "CosmosDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    def _require_container(self) -> ContainerProxy:
        if self._container is None:
            raise StoreFailure("CosmosDB client not connected. Call connect() first.")
        return self._container

    async def insert_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Insert a new item into the container.

        Args:
            item: Dictionary containing the item data. Must include the 'id'
                  field; it is persisted as given.

        Returns:
            The stored item with any system-generated fields.

        Raises:
            StoreFailure: If client is not connected or the insert fails.
        """
        container = self._require_container()

        try:
            result = await container.create_item(body=item)
        except AzureError as e:
            raise StoreFailure(f"Failed to insert item {item.get('id')}: {e}") from e
        return dict(result)

    async def read_all_items(self) -> list[dict[str, Any]]:
        """Read every item in the container.

        Items are returned in the order Cosmos DB yields them.

        Returns:
            List of all items.

        Raises:
            StoreFailure: If client is not connected or the read fails.
        """
        container = self._require_container()

        items = []
        try:
            async for item in container.read_all_items():
                items.append(dict(item))
        except AzureError as e:
            raise StoreFailure(f"Failed to read items: {e}") from e

        return items
