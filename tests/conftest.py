"""Shared fixtures: in-memory stand-ins for the Azure clients."""

from typing import Any

import pytest

from product_catalog.clients import StoreFailure, UploadFailure
from product_catalog.services import ProductService


class FakeBlobStorageClient:
    """Records uploads and returns predictable URLs."""

    base_url = "https://teststorage.blob.core.windows.net/product-images"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: list[dict[str, Any]] = []

    async def upload_image(self, data: bytes, content_type: str, filename: str) -> str:
        if self.fail:
            raise UploadFailure("simulated upload failure")
        self.uploads.append(
            {"data": data, "content_type": content_type, "filename": filename}
        )
        return f"{self.base_url}/{len(self.uploads)}-{filename}"


class FakeCosmosDBClient:
    """Keeps documents in a list and mimics Cosmos system fields."""

    def __init__(self, fail_insert: bool = False, fail_read: bool = False):
        self.fail_insert = fail_insert
        self.fail_read = fail_read
        self.items: list[dict[str, Any]] = []

    async def insert_item(self, item: dict[str, Any]) -> dict[str, Any]:
        if self.fail_insert:
            raise StoreFailure("simulated insert failure")
        stored = dict(item, _rid="rid", _etag='"etag"', _ts=1700000000)
        self.items.append(stored)
        return dict(stored)

    async def read_all_items(self) -> list[dict[str, Any]]:
        if self.fail_read:
            raise StoreFailure("simulated read failure")
        return [dict(item) for item in self.items]


@pytest.fixture
def blob_client():
    return FakeBlobStorageClient()


@pytest.fixture
def cosmos_client():
    return FakeCosmosDBClient()


@pytest.fixture
def product_service(blob_client, cosmos_client):
    return ProductService(blob_client, cosmos_client)
