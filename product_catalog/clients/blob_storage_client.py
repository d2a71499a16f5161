"""Azure Blob Storage client for product image uploads."""

import logging
import os
import time
from typing import Optional

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

logger = logging.getLogger(__name__)


class UploadFailure(Exception):
    """Raised when the blob store rejects or fails an upload."""

    pass


def generate_blob_name(filename: str) -> str:
    """Build a blob name from a nanosecond timestamp and the original filename.

    Only the base name of the upload is kept so client-supplied paths never
    leak into the container layout.
    """
    base_name = os.path.basename(filename.replace("\\", "/")) or "upload"
    return f"{time.time_ns()}-{base_name}"


class BlobStorageClient:
    """Async Blob Storage client bound to a single container.

    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(self, account_url: str, account_key: str, container_name: str):
        """Initialize the Blob Storage client.

        Args:
            account_url: Storage account blob endpoint URL
            account_key: Storage account key
            container_name: Name of the container holding product images
        """
        self._account_url = account_url
        self._account_key = account_key
        self._container_name = container_name

        self._service: Optional[BlobServiceClient] = None
        self._container: Optional[ContainerClient] = None

    async def connect(self) -> None:
        """Open the service client and make sure the container exists.

        The existence check is best effort: failures are logged and the
        client stays usable, so a storage hiccup does not block startup.
        """
        self._service = BlobServiceClient(
            account_url=self._account_url, credential=self._account_key
        )
        self._container = self._service.get_container_client(self._container_name)

        try:
            await self._container.create_container(public_access="blob")
            logger.info(f"Created blob container: {self._container_name}")
        except ResourceExistsError:
            logger.debug(f"Blob container already exists: {self._container_name}")
        except AzureError as e:
            logger.error(f"Could not verify blob container {self._container_name}: {e}")

    async def close(self) -> None:
        """Close the Blob Storage connection."""
        if self._service:
            await self._service.close()
            self._service = None
            self._container = None

    async def __aenter__(self) -> "BlobStorageClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    async def upload_image(self, data: bytes, content_type: str, filename: str) -> str:
        """Upload bytes under a generated blob name.

        Args:
            data: Raw file bytes
            content_type: Media type stored on the blob
            filename: Original filename, used as the blob name suffix

        Returns:
            Public URL of the stored blob.

        Raises:
            UploadFailure: If client is not connected or the upload fails.
        """
        if self._container is None:
            raise UploadFailure("Blob storage client not connected. Call connect() first.")

        blob_name = generate_blob_name(filename)
        blob_client = self._container.get_blob_client(blob_name)

        try:
            await blob_client.upload_blob(
                data,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            raise UploadFailure(f"Failed to upload blob {blob_name}: {e}") from e

        logger.info(f"Uploaded {len(data)} bytes to blob {blob_name}")
        return blob_client.url
