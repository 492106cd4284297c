"""Storage configuration model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from app.config import Settings


class StorageConfig(BaseModel):
    """Configuration for tenant asset storage.

    Attributes:
        web_root: Base directory for public assets.
        content_root: Application root, used to locate themes.
        upload_folder: Upload subfolder under the web root.
        themes_folder: Theme directory relative to the content root.
        suppress_errors: Swallow errors from folder and listing operations.
        fetch_timeout: Remote fetch timeout in seconds, None to wait indefinitely.
    """

    web_root: str = Field(default="./wwwroot", description="Public asset root directory")
    content_root: str = Field(default=".", description="Application root directory")
    upload_folder: str = Field(default="data", description="Upload subfolder under the web root")
    themes_folder: str = Field(default="Views/Themes", description="Theme directory under the content root")
    suppress_errors: bool = Field(default=True, description="Swallow best-effort operation errors")
    fetch_timeout: float | None = Field(default=None, description="Remote fetch timeout in seconds")

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        """Build a storage config from application settings."""
        return cls(
            web_root=str(settings.web_root),
            content_root=str(settings.content_root),
            upload_folder=settings.UPLOAD_FOLDER,
            themes_folder=settings.THEMES_FOLDER,
            suppress_errors=settings.SUPPRESS_LISTING_ERRORS,
            fetch_timeout=settings.FETCH_TIMEOUT,
        )
