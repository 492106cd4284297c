"""Application configuration with Pydantic Settings.

This module provides centralized configuration management using pydantic-settings.
Settings are loaded from environment variables and .env files.

Examples:
    >>> from app.config import settings
    >>> settings.UPLOAD_FOLDER
    'data'

    >>> settings.web_root
    PosixPath('/srv/site/wwwroot')

Tests:
    - tests/unit/test_config.py::TestSettings
"""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings for tenant asset storage.

    Settings are loaded from environment variables and .env file.

    Attributes:
        WEB_ROOT_PATH: Base directory for public assets (default <content root>/wwwroot)
        CONTENT_ROOT_PATH: Application root (default current working directory)
        UPLOAD_FOLDER: Upload subfolder under the web root
        THEMES_FOLDER: Theme directory relative to the content root
        SUPPRESS_LISTING_ERRORS: Swallow errors from folder and listing operations
        FETCH_TIMEOUT: Timeout in seconds for remote fetch uploads (unset = none)
        TENANT_HEADER: Request header carrying the tenant slug
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Filesystem layout
    WEB_ROOT_PATH: str | None = Field(
        default=None,
        description="Absolute base path for public assets",
    )
    CONTENT_ROOT_PATH: str | None = Field(
        default=None,
        description="Absolute application root",
    )
    UPLOAD_FOLDER: str = Field(
        default="data",
        description="Upload subfolder under the web root",
    )
    THEMES_FOLDER: str = Field(
        default="Views/Themes",
        description="Theme directory relative to the content root",
    )

    # Storage behaviour
    SUPPRESS_LISTING_ERRORS: bool = Field(
        default=True,
        description="Return empty results instead of raising from folder/listing operations",
    )
    FETCH_TIMEOUT: float | None = Field(
        default=None,
        description="Remote fetch timeout in seconds (unset = wait indefinitely)",
        gt=0,
    )

    # HTTP surface
    TENANT_HEADER: str = Field(
        default="X-Tenant-Slug",
        description="Request header carrying the tenant slug",
    )
    DEFAULT_PAGE_SIZE: int = Field(
        default=20,
        description="Default number of assets per page",
        ge=1,
        le=100,
    )

    # Application Settings
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root logging level",
    )

    @field_validator("UPLOAD_FOLDER")
    @classmethod
    def validate_upload_folder(cls, v: str) -> str:
        """Normalize the upload folder to a relative, slash-separated path."""
        v = v.replace("\\", "/").strip("/")
        if not v or ".." in v.split("/"):
            raise ValueError("UPLOAD_FOLDER must be a non-empty relative path")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        v = v.upper()
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def content_root(self) -> Path:
        """Application root used to locate themes and the default web root."""
        if self.CONTENT_ROOT_PATH:
            return Path(self.CONTENT_ROOT_PATH)
        return Path(os.getcwd())

    @property
    def web_root(self) -> Path:
        """Base path for public assets."""
        if self.WEB_ROOT_PATH:
            return Path(self.WEB_ROOT_PATH)
        return self.content_root / "wwwroot"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.

    Examples:
        >>> settings = get_settings()
        >>> settings.TENANT_HEADER
        'X-Tenant-Slug'
    """
    return Settings()


# Global settings instance for convenience
settings = get_settings()
