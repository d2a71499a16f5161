"""Unit tests for CosmosDBClient with the Azure SDK mocked out.

These tests verify:
- Database and container get-or-create on connect
- Insert and read-all delegation
- Wrapping of Azure errors into StoreFailure
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from product_catalog.clients import CosmosDBClient, StoreFailure


class _AsyncItems:
    """Minimal async iterator standing in for AsyncItemPaged."""

    def __init__(self, items, error=None):
        self._items = iter(items)
        self._error = error

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._error is not None:
            raise self._error
        try:
            return next(self._items)
        except StopIteration:
            raise StopAsyncIteration


@pytest.fixture
def sdk():
    """Patch the Cosmos SDK client and expose its database/container mocks."""
    container = MagicMock()
    container.read = AsyncMock(return_value={"id": "products"})

    database = MagicMock()
    database.read = AsyncMock(return_value={"id": "catalog"})
    database.get_container_client.return_value = container
    database.create_container = AsyncMock(return_value=container)

    client = MagicMock()
    client.get_database_client.return_value = database
    client.create_database = AsyncMock(return_value=database)
    client.close = AsyncMock()

    with patch(
        "product_catalog.clients.cosmosdb_client.CosmosClient", return_value=client
    ) as cosmos_cls:
        yield {"cls": cosmos_cls, "client": client, "database": database, "container": container}


def _make_client() -> CosmosDBClient:
    return CosmosDBClient(
        endpoint="https://test.documents.azure.com:443/",
        key="test-key",
        database_name="catalog",
        container_name="products",
    )


class TestConnect:
    """Test connection setup."""

    @pytest.mark.asyncio
    async def test_connect_uses_existing_resources(self, sdk):
        client = _make_client()
        await client.connect()

        sdk["cls"].assert_called_once_with(
            url="https://test.documents.azure.com:443/", credential="test-key"
        )
        sdk["client"].create_database.assert_not_awaited()
        sdk["database"].create_container.assert_not_awaited()
        assert client._container is sdk["container"]

    @pytest.mark.asyncio
    async def test_connect_creates_missing_database_and_container(self, sdk):
        sdk["database"].read.side_effect = CosmosResourceNotFoundError(
            status_code=404, message="missing"
        )
        sdk["container"].read.side_effect = CosmosResourceNotFoundError(
            status_code=404, message="missing"
        )

        client = _make_client()
        await client.connect()

        sdk["client"].create_database.assert_awaited_once_with("catalog")
        sdk["database"].create_container.assert_awaited_once_with(
            id="products",
            partition_key={"paths": ["/id"], "kind": "Hash"},
        )

    @pytest.mark.asyncio
    async def test_connect_failure_raises_store_failure(self, sdk):
        sdk["database"].read.side_effect = CosmosHttpResponseError(
            status_code=401, message="unauthorized"
        )

        with pytest.raises(StoreFailure):
            await _make_client().connect()

    @pytest.mark.asyncio
    async def test_connect_failure_closes_sdk_client(self, sdk):
        sdk["container"].read.side_effect = CosmosHttpResponseError(
            status_code=503, message="unavailable"
        )

        client = _make_client()
        with pytest.raises(StoreFailure):
            await client.connect()

        sdk["client"].close.assert_awaited_once()
        assert client._client is None
        assert client._container is None

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self, sdk):
        async with _make_client() as client:
            assert client._container is not None

        sdk["client"].close.assert_awaited_once()
        assert client._container is None


class TestInsertItem:
    """Test document inserts."""

    @pytest.mark.asyncio
    async def test_insert_returns_stored_document(self, sdk):
        document = {"id": "p-1", "name": "Chair"}
        sdk["container"].create_item = AsyncMock(return_value=dict(document, _ts=1))

        async with _make_client() as client:
            result = await client.insert_item(document)

        sdk["container"].create_item.assert_awaited_once_with(body=document)
        assert result == {"id": "p-1", "name": "Chair", "_ts": 1}

    @pytest.mark.asyncio
    async def test_insert_failure_raises_store_failure(self, sdk):
        sdk["container"].create_item = AsyncMock(side_effect=AzureError("quota exceeded"))

        async with _make_client() as client:
            with pytest.raises(StoreFailure):
                await client.insert_item({"id": "p-1"})

    @pytest.mark.asyncio
    async def test_insert_without_connection_raises(self):
        with pytest.raises(StoreFailure, match="not connected"):
            await _make_client().insert_item({"id": "p-1"})


class TestReadAllItems:
    """Test full-collection reads."""

    @pytest.mark.asyncio
    async def test_read_all_returns_items_in_store_order(self, sdk):
        items = [{"id": "b"}, {"id": "a"}]
        sdk["container"].read_all_items.return_value = _AsyncItems(items)

        async with _make_client() as client:
            result = await client.read_all_items()

        assert result == items

    @pytest.mark.asyncio
    async def test_read_all_empty(self, sdk):
        sdk["container"].read_all_items.return_value = _AsyncItems([])

        async with _make_client() as client:
            assert await client.read_all_items() == []

    @pytest.mark.asyncio
    async def test_read_failure_raises_store_failure(self, sdk):
        sdk["container"].read_all_items.return_value = _AsyncItems(
            [], error=AzureError("connection reset")
        )

        async with _make_client() as client:
            with pytest.raises(StoreFailure):
                await client.read_all_items()

    @pytest.mark.asyncio
    async def test_read_without_connection_raises(self):
        with pytest.raises(StoreFailure, match="not connected"):
            await _make_client().read_all_items()
