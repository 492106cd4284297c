"""Asset API endpoints.

Provides REST API for tenant asset storage.

Endpoints:
    GET /api/v1/assets - Paged asset listing
    POST /api/v1/assets/upload - Multipart file upload
    POST /api/v1/assets/base64 - Base64 data-URI image upload
    POST /api/v1/assets/fetch - Download a remote file into storage
    DELETE /api/v1/assets - Delete a file
    POST /api/v1/assets/folders - Create a folder
    DELETE /api/v1/assets/folders - Delete a folder

Examples:
    >>> # Upload a pasted image
    >>> POST /api/v1/assets/base64
    >>> {"data": "data:image/png;base64,iVBOR...", "path": "posts"}
    >>>
    >>> # Response
    >>> {"title": "4821.png", "path": "data/acme/posts/4821.png", "url": "data/acme/posts/4821.png", ...}

Tests:
    - tests/integration/test_api_assets.py
"""

import logging
from typing import Callable

from fastapi import APIRouter, File, Form, Query, Response, UploadFile, status
from pydantic import BaseModel, Field

from app.api.deps import AppSettings, Storage
from app.storage import AssetItem, Pager, is_image_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


# Request/Response Models


class AssetPageResponse(BaseModel):
    """One page of assets.

    Attributes:
        items: Assets on the page
        total: Number of assets matching the filter
        page: Current page (1-indexed)
        page_size: Items per page
        last_page: Number of the last page (0 when empty)
    """

    items: list[AssetItem]
    total: int
    page: int
    page_size: int
    last_page: int


class Base64UploadRequest(BaseModel):
    """Request to store a base64 data-URI image."""

    data: str = Field(
        ...,
        min_length=1,
        description="Data URI (data:image/png|jpeg|gif;base64,...)",
    )
    path: str = Field(default="", description="Target folder relative to the tenant root")
    url_root: str = Field(default="", description="Prefix for the returned URL")


class FetchUploadRequest(BaseModel):
    """Request to download a remote file into storage."""

    url: str = Field(
        ...,
        pattern=r"^https?://",
        description="Remote http(s) URL",
        examples=["https://example.com/images/cat.png"],
    )
    path: str = Field(default="", description="Target folder relative to the tenant root")
    url_root: str = Field(default="", description="Prefix for the returned URL")


class FolderRequest(BaseModel):
    """Request to create a folder."""

    path: str = Field(..., min_length=1, description="Folder relative to the tenant root")


class FolderResponse(BaseModel):
    """Created folder."""

    path: str


def build_filter(q: str | None, images_only: bool) -> Callable[[AssetItem], bool] | None:
    """Build the listing predicate from query parameters."""
    if not q and not images_only:
        return None

    needle = (q or "").lower()

    def predicate(item: AssetItem) -> bool:
        if images_only and not is_image_path(item.path):
            return False
        return needle in item.title.lower()

    return predicate


# Endpoints


@router.get("", response_model=AssetPageResponse)
async def list_assets(
    service: Storage,
    settings: AppSettings,
    path: str = Query("", description="Folder relative to the tenant root"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int | None = Query(None, ge=1, le=100, description="Items per page"),
    q: str | None = Query(None, description="Case-insensitive title filter"),
    images_only: bool = Query(False, description="Only return images"),
) -> AssetPageResponse:
    """List assets with pagination.

    Args:
        path: Folder to list
        page: Page number (1-indexed)
        page_size: Number of items per page
        q: Title substring filter
        images_only: Restrict to image files

    Returns:
        AssetPageResponse for the requested page.
    """
    pager = Pager(current_page=page, items_per_page=page_size or settings.DEFAULT_PAGE_SIZE)
    items = await service.find(build_filter(q, images_only), pager, path)

    return AssetPageResponse(
        items=items,
        total=pager.total,
        page=pager.current_page,
        page_size=pager.items_per_page,
        last_page=pager.last_page,
    )


@router.post("/upload", response_model=AssetItem, status_code=status.HTTP_201_CREATED)
async def upload_asset(
    service: Storage,
    file: UploadFile = File(..., description="File to store"),
    path: str = Form("", description="Target folder relative to the tenant root"),
    url_root: str = Form("", description="Prefix for the returned URL"),
) -> AssetItem:
    """Store an uploaded file."""
    return await service.upload_form_file(file, url_root, path)


@router.post("/base64", response_model=AssetItem, status_code=status.HTTP_201_CREATED)
async def upload_base64(request: Base64UploadRequest, service: Storage) -> AssetItem:
    """Store a base64 data-URI image under a generated name."""
    return await service.upload_base64_image(request.data, request.url_root, request.path)


@router.post("/fetch", response_model=AssetItem, status_code=status.HTTP_201_CREATED)
async def upload_from_web(request: FetchUploadRequest, service: Storage) -> AssetItem:
    """Download a remote file into storage."""
    return await service.upload_from_web(request.url, request.url_root, request.path)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(
    service: Storage,
    path: str = Query(..., min_length=1, description="File path, optionally starting with the asset URL prefix"),
) -> Response:
    """Delete a stored file; 404 if it does not exist."""
    await service.delete_file(path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/folders", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(request: FolderRequest, service: Storage) -> FolderResponse:
    """Create a folder (no error if it already exists)."""
    await service.create_folder(request.path)
    return FolderResponse(path=request.path)


@router.delete("/folders", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    service: Storage,
    path: str = Query(..., min_length=1, description="Folder relative to the tenant root"),
) -> Response:
    """Recursively delete a folder (no error if it does not exist)."""
    await service.delete_folder(path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
