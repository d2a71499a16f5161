"""Client modules for external services."""

from product_catalog.clients.blob_storage_client import BlobStorageClient, UploadFailure
from product_catalog.clients.cosmosdb_client import CosmosDBClient, StoreFailure

__all__ = [
    "BlobStorageClient",
    "CosmosDBClient",
    "StoreFailure",
    "UploadFailure",
]
