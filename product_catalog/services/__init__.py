"""Service layer module."""

from product_catalog.services.product_service import (
    MAX_IMAGE_SIZE_BYTES,
    ProductService,
    ProductValidationError,
)

__all__ = ["MAX_IMAGE_SIZE_BYTES", "ProductService", "ProductValidationError"]
