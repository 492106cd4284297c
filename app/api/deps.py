"""
Dependencies for the asset storage API.

Provides dependency injection for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends

from app.auth.dependencies import get_tenant_slug
from app.config import Settings, get_settings
from app.storage import AssetStorageService, StorageConfig


def get_storage_service(
    tenant_slug: str = Depends(get_tenant_slug),
    settings: Settings = Depends(get_settings),
) -> AssetStorageService:
    """
    Build a storage service bound to the calling tenant.

    A new instance per request keeps tenants isolated.
    """
    return AssetStorageService.from_config(
        StorageConfig.from_settings(settings),
        tenant_slug=tenant_slug,
    )


# Type aliases for dependency injection
Storage = Annotated[AssetStorageService, Depends(get_storage_service)]
AppSettings = Annotated[Settings, Depends(get_settings)]
