"""Asset storage package.

Provides tenant-scoped storage for uploaded assets, including folder
management, direct/base64/remote uploads, listing and paged queries.

Examples:
    >>> from app.storage import AssetStorageService, StorageConfig, Pager
    >>> service = AssetStorageService.from_config(StorageConfig(web_root="/srv/wwwroot"), "acme")
    >>> page = await service.find(None, Pager(current_page=1, items_per_page=20))
"""

from app.storage.config import StorageConfig
from app.storage.display import is_image_path, path_to_image, path_to_title
from app.storage.models import AssetItem, Pager, UploadSource
from app.storage.naming import safe_upload_name, title_from_uri
from app.storage.service import AssetStorageService

__all__ = [
    "AssetItem",
    "AssetStorageService",
    "Pager",
    "StorageConfig",
    "UploadSource",
    "is_image_path",
    "path_to_image",
    "path_to_title",
    "safe_upload_name",
    "title_from_uri",
]
