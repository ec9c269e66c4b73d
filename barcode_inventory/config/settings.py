"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single cached Settings instance is shared across the application
lifecycle (see get_settings).

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Folder Deletion Policy:
----------------------
Deleting a folder either leaves its scanned items in place with a dangling
folder reference ("orphan", the historical behavior) or deletes them along
with the folder ("cascade"). The choice is explicit configuration.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug logging and SQL echo
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy database connection string
        seed_products_file: JSON file with sample products
        seed_sample_products: Seed the catalog when it is empty
        static_directory: Directory served under /static
        cors_origins: Allowed CORS origins (JSON array string)
        folder_delete_policy: "orphan" or "cascade" for folder items
        placeholder_image: Image URI used when a product has none
        max_stream_subscribers: Optional cap on live scan stream connections
        stream_queue_size: Buffered events per stream subscriber
        stream_keepalive_seconds: Interval between SSE keep-alive comments

    Example:
        >>> settings = Settings()
        >>> settings.folder_delete_policy
        'orphan'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Barcode Inventory API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/inventory.db",
        description="SQLAlchemy database connection string"
    )

    seed_products_file: str = Field(
        default="data/products.json",
        description="JSON file with sample products seeded into an empty catalog"
    )

    seed_sample_products: bool = Field(
        default=True,
        description="Seed sample products when the catalog is empty"
    )

    # =========================================================================
    # HTTP SETTINGS
    # =========================================================================
    static_directory: str = Field(
        default="static",
        description="Directory served under /static"
    )

    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # INVENTORY SETTINGS
    # =========================================================================
    folder_delete_policy: Literal["orphan", "cascade"] = Field(
        default="orphan",
        description="What happens to scanned items when their folder is deleted"
    )

    placeholder_image: str = Field(
        default="/api/placeholder/80/80",
        description="Image URI used for products without an image"
    )

    # =========================================================================
    # SCAN STREAM SETTINGS
    # =========================================================================
    max_stream_subscribers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum concurrent scan stream connections (None = unbounded)"
    )

    stream_queue_size: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Events buffered per subscriber before it is dropped"
    )

    stream_keepalive_seconds: float = Field(
        default=15.0,
        gt=0,
        le=300,
        description="Interval between SSE keep-alive comments"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to "development" with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("folder_delete_policy", mode="before")
    @classmethod
    def normalize_delete_policy(cls, value):
        """Accept the policy name in any case."""
        if isinstance(value, str):
            return value.lower().strip()
        return value

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def cascade_folder_items(self) -> bool:
        """Whether deleting a folder also deletes its scanned items."""
        return self.folder_delete_policy == "cascade"

    @property
    def seed_products_path(self) -> Path:
        """Get the sample products file as Path object."""
        return Path(self.seed_products_file)

    @property
    def static_path(self) -> Path:
        """Get the static directory as Path object."""
        return Path(self.static_directory)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for non-SQLite and in-memory databases
        """
        if not self.database_url.startswith("sqlite"):
            return None

        db_path = self.database_url.replace("sqlite:///", "", 1)
        if not db_path or db_path.startswith("sqlite:") or db_path == ":memory:":
            return None
        if db_path.startswith("./"):
            db_path = db_path[2:]
        return Path(db_path)

    def ensure_directories(self) -> None:
        """Create the SQLite database directory if needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug}, "
            f"folder_delete_policy={self.folder_delete_policy!r})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    lru_cache guarantees a single Settings object for the process.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
