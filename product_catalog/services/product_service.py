"""Product intake and listing service.

Validates product submissions, stores optional images in Blob Storage and
persists product documents in Cosmos DB.

An image uploaded before a failed document insert is not removed; such
orphaned blobs are left in the container.
"""

import logging
import math
import re
import uuid
from typing import Any, Optional, Union

from ..clients import BlobStorageClient, CosmosDBClient
from ..models import ImageUpload, Product

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
IMAGE_CONTENT_TYPE_PREFIX = "image/"

# Plain decimal with optional exponent, ASCII digits only
PRICE_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class ProductValidationError(Exception):
    """Raised when a product submission breaks a business rule."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def parse_price(value: Union[str, int, float, None]) -> Optional[float]:
    """Parse a submitted price into a finite float, or None if invalid."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not PRICE_PATTERN.fullmatch(text):
        return None
    price = float(text)
    if not math.isfinite(price):
        return None
    return price


def validate_submission(
    name: Optional[str],
    price: Union[str, int, float, None],
    category: Optional[str],
    image: Optional[ImageUpload] = None,
) -> float:
    """Check a submission in a fixed order and return the parsed price.

    Raises:
        ProductValidationError: On the first rule that fails.
    """
    if _is_blank(name):
        raise ProductValidationError("Name is required.")

    parsed_price = parse_price(price)
    if parsed_price is None:
        raise ProductValidationError("Price must be a valid number.")

    if _is_blank(category):
        raise ProductValidationError("Category is required.")

    if image is not None:
        if not (image.content_type or "").lower().startswith(IMAGE_CONTENT_TYPE_PREFIX):
            raise ProductValidationError("Only image files are allowed.")
        if image.size > MAX_IMAGE_SIZE_BYTES:
            raise ProductValidationError("File too large. Maximum size is 5 MB.")

    return parsed_price


def generate_product_id() -> str:
    return str(uuid.uuid4())


class ProductService:
    """Service for creating and listing catalog products."""

    def __init__(self, blob_client: BlobStorageClient, cosmos_client: CosmosDBClient):
        """Initialize the product service.

        Args:
            blob_client: Connected client for the product image container.
            cosmos_client: Connected client for the product document container.
        """
        self._blob_client = blob_client
        self._cosmos_client = cosmos_client

    async def create_product(
        self,
        name: Optional[str],
        price: Union[str, int, float, None],
        category: Optional[str],
        description: Optional[str] = None,
        image: Optional[ImageUpload] = None,
    ) -> Product:
        """Validate a submission, store its image and persist the product.

        Args:
            name: Product name, required.
            price: Product price as submitted; must parse to a finite number.
            category: Product category, required.
            description: Optional free text, stored as "" when omitted.
            image: Optional image upload.

        Returns:
            The stored Product.

        Raises:
            ProductValidationError: If the submission is invalid.
            UploadFailure: If the image upload fails. No document is written.
            StoreFailure: If the document insert fails.
        """
        parsed_price = validate_submission(name, price, category, image)

        image_url = ""
        if image is not None:
            image_url = await self._blob_client.upload_image(
                image.data, image.content_type, image.filename
            )

        product = Product(
            id=generate_product_id(),
            name=name.strip(),
            description=description or "",
            price=parsed_price,
            category=category.strip(),
            imageUrl=image_url,
        )

        stored = await self._cosmos_client.insert_item(product.to_document())
        logger.info(f"Created product {product.id} ({product.name})")

        return Product.from_document(stored)

    async def list_products(self) -> list[dict[str, Any]]:
        """Return every stored product document as-is.

        Raises:
            StoreFailure: If the read fails.
        """
        products = await self._cosmos_client.read_all_items()
        logger.debug(f"Listed {len(products)} products")
        return products
