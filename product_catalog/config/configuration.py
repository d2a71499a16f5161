"""Configuration module for the product catalog API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

Account keys and endpoints are loaded from .env file.
Fails fast with clear error messages if blob storage configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from product_catalog/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for product documents."""
    endpoint: str
    key: str
    database_name: str
    container_name: str
    partition_key_path: str


@dataclass(frozen=True)
class BlobStorageConfig:
    """Azure Blob Storage configuration for product images."""
    account_name: str
    account_key: str
    container_name: str

    @property
    def account_url(self) -> str:
        return f"https://{self.account_name}.blob.core.windows.net"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    cosmosdb: CosmosDBConfig
    blob_storage: BlobStorageConfig
    logging: LoggingConfig
    server: ServerConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for account keys.
    Blob storage settings are mandatory; Cosmos DB settings are passed through
    as given and left to the Cosmos client to reject.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build CosmosDB config
    cosmosdb_section = yaml_config.get("cosmosdb", {})

    cosmosdb_config = CosmosDBConfig(
        endpoint=_get_optional_env("COSMOS_DB_ENDPOINT", ""),
        key=_get_optional_env("COSMOS_DB_KEY", ""),
        database_name=_get_optional_env(
            "COSMOS_DB_DATABASE", cosmosdb_section.get("database_name", "catalog")
        ),
        container_name=_get_optional_env(
            "COSMOS_DB_CONTAINER", cosmosdb_section.get("container_name", "products")
        ),
        partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
    )

    # Build Blob Storage config
    blob_section = yaml_config.get("blob_storage", {})
    container_name = _get_optional_env(
        "AZURE_STORAGE_CONTAINER_NAME", blob_section.get("container_name")
    )
    if not container_name:
        raise ConfigurationError(
            "Blob storage container name is not set. Add 'blob_storage.container_name' "
            "to the config file or set AZURE_STORAGE_CONTAINER_NAME."
        )

    blob_storage_config = BlobStorageConfig(
        account_name=_get_required_env("AZURE_STORAGE_ACCOUNT_NAME"),
        account_key=_get_required_env("AZURE_STORAGE_ACCOUNT_KEY"),
        container_name=container_name,
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    # Build Server config
    server_section = yaml_config.get("server", {})
    port = _get_optional_env("PORT") or server_section.get("port", 3000)

    try:
        server_config = ServerConfig(
            host=server_section.get("host", "0.0.0.0"),
            port=int(port),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid server port: {port!r}") from e

    return AppConfig(
        cosmosdb=cosmosdb_config,
        blob_storage=blob_storage_config,
        logging=logging_config,
        server=server_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
