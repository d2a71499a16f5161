"""REST controller for product intake and listing."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from product_catalog.clients import StoreFailure, UploadFailure
from product_catalog.models import ImageUpload
from product_catalog.services import (
    MAX_IMAGE_SIZE_BYTES,
    ProductService,
    ProductValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


class ProductResponse(BaseModel):
    """Product returned after creation."""

    id: str
    name: str
    description: str
    price: float
    category: str
    imageUrl: str


class ProductDocument(BaseModel):
    """Stored product document, passed through with all its fields."""

    model_config = ConfigDict(extra="allow")

    id: str


class ErrorResponse(BaseModel):
    """Error body for rejected or failed requests."""

    error: str


ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_product_service(request: Request) -> ProductService:
    """Return the ProductService created at application startup."""
    return request.app.state.product_service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


async def _read_upload(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    # Browsers send an empty part when the file input is left blank
    if image is None or not image.filename:
        return None
    # One byte past the cap is enough for the size check to reject
    data = await image.read(MAX_IMAGE_SIZE_BYTES + 1)
    return ImageUpload(
        filename=image.filename,
        content_type=image.content_type or "",
        data=data,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
)
async def create_product(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ProductService = Depends(get_product_service),
):
    """
    Create a product from multipart form fields and an optional image.

    Returns 201 with the stored product, 400 with {"error": ...} when the
    submission is invalid, and 500 with {"error": ...} when storage fails.
    """
    try:
        upload = await _read_upload(image)
        product = await service.create_product(
            name=name,
            price=price,
            category=category,
            description=description,
            image=upload,
        )
    except ProductValidationError as e:
        logger.info(f"Rejected product submission: {e.message}")
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except UploadFailure:
        logger.exception("Image upload failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to upload image.")
    except StoreFailure:
        logger.exception("Product insert failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save product.")
    except Exception:
        logger.exception("Unexpected error creating product")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")

    return ProductResponse(**product.to_document())


@router.get(
    "",
    response_model=list[ProductDocument],
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
async def list_products(service: ProductService = Depends(get_product_service)):
    """List every product in the catalog, unfiltered and unsorted."""
    try:
        return await service.list_products()
    except StoreFailure:
        logger.exception("Product listing failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch products.")
    except Exception:
        logger.exception("Unexpected error listing products")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")
