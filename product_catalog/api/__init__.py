"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_catalog.api.controller import product_router
from product_catalog.clients import BlobStorageClient, CosmosDBClient
from product_catalog.config import get_config
from product_catalog.services import ProductService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _azure_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the Azure clients at startup and close them at shutdown."""
    config = get_config()

    blob_client = BlobStorageClient(
        account_url=config.blob_storage.account_url,
        account_key=config.blob_storage.account_key,
        container_name=config.blob_storage.container_name,
    )
    cosmos_client = CosmosDBClient(
        endpoint=config.cosmosdb.endpoint,
        key=config.cosmosdb.key,
        database_name=config.cosmosdb.database_name,
        container_name=config.cosmosdb.container_name,
        partition_key_path=config.cosmosdb.partition_key_path,
    )

    async with blob_client, cosmos_client:
        app.state.product_service = ProductService(blob_client, cosmos_client)
        logger.info("Product catalog API started")
        yield

    logger.info("Product catalog API stopped")


def create_app(product_service: Optional[ProductService] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        product_service: Pre-built service to use instead of connecting to
            Azure at startup.
    """
    app = FastAPI(
        title="Product Catalog API",
        description="REST API for creating and listing catalog products",
        version="1.0.0",
        lifespan=None if product_service is not None else _azure_lifespan,
    )

    if product_service is not None:
        app.state.product_service = product_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(product_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
