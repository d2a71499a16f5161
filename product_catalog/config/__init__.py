"""Configuration module."""

from product_catalog.config.configuration import (
    AppConfig,
    BlobStorageConfig,
    ConfigurationError,
    CosmosDBConfig,
    LoggingConfig,
    ServerConfig,
    get_config,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "BlobStorageConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_config",
    "load_config",
    "reset_config",
]
