"""Tenant-scoped asset storage service.

Handles folder management, the three upload variants, deletion, listing
and paged queries under ``<web root>/<upload folder>/<tenant slug>``.

Folder and listing operations are best-effort: with ``suppress_errors``
enabled they log and return a neutral result. Deletion of files and all
uploads propagate failures to the caller.

Examples:
    >>> from app.storage.service import AssetStorageService
    >>> service = AssetStorageService.from_config(config, tenant_slug="acme")
    >>> item = await service.upload_base64_image("data:image/png;base64,iVBOR...", "", "posts")
    >>> item.url
    'data/acme/posts/4821.png'
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Callable

from app.storage.backends.base import StorageBackend
from app.storage.backends.local import LocalStorageBackend
from app.storage.config import StorageConfig
from app.storage.display import join_url, path_to_image, path_to_title, public_url
from app.storage.fetch import RemoteFetcher
from app.storage.models import AssetItem, Pager, UploadSource
from app.storage.naming import (
    BASE64_IMAGE_PREFIXES,
    MAX_NAME_ATTEMPTS,
    is_clipboard_name,
    is_opaque_uri,
    is_valid_tenant_slug,
    random_digits_name,
    safe_upload_name,
    strip_directories,
    title_from_uri,
)

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024


class AssetStorageService:
    """Tenant-scoped asset storage.

    Attributes:
        config: Storage configuration.
        tenant_slug: Tenant namespace; empty for the shared root.
        backend: Storage backend for I/O.
        fetcher: Remote fetcher for web uploads.
    """

    def __init__(
        self,
        config: StorageConfig,
        tenant_slug: str = "",
        backend: StorageBackend | None = None,
        fetcher: RemoteFetcher | None = None,
    ) -> None:
        """Bind the service to a tenant and create its location.

        The location is created synchronously on the local filesystem,
        independent of the backend, since backend calls are async. Later
        folder and file operations all go through the backend.

        Raises:
            ValueError: If the tenant slug is not a single safe path segment.
        """
        if tenant_slug and not is_valid_tenant_slug(tenant_slug):
            raise ValueError(f"Invalid tenant slug: {tenant_slug!r}")

        self.config = config
        self.tenant_slug = tenant_slug or ""
        self.backend = backend or LocalStorageBackend()
        self.fetcher = fetcher or RemoteFetcher(timeout=config.fetch_timeout)

        os.makedirs(self.location, exist_ok=True)

    @classmethod
    def from_config(cls, config: StorageConfig, tenant_slug: str = "") -> "AssetStorageService":
        """Create a service with the local backend and default fetcher."""
        return cls(
            config=config,
            tenant_slug=tenant_slug,
            backend=LocalStorageBackend(),
            fetcher=RemoteFetcher(timeout=config.fetch_timeout),
        )

    @property
    def location(self) -> str:
        """Tenant storage root: <web root>/<upload folder>[/<tenant slug>]."""
        path = os.path.join(self.config.web_root, *self.config.upload_folder.split("/"))
        if self.tenant_slug:
            path = os.path.join(path, self.tenant_slug)
        return path

    @property
    def url_prefix(self) -> str:
        """Web-root-relative prefix of every stored asset, e.g. 'data/acme'."""
        return join_url(self.config.upload_folder, self.tenant_slug)

    # Folders

    async def create_folder(self, path: str = "") -> None:
        """Create a folder under the tenant root if it does not exist."""
        try:
            directory = self._full_path(path)
            if not await self.backend.exists(directory):
                await self.backend.make_directory(directory)
                logger.info(f"Folder created: {directory}")
        except (OSError, ValueError) as e:
            if not self.config.suppress_errors:
                raise
            logger.warning(f"Create folder '{path}' failed: {e}")

    async def delete_folder(self, path: str = "") -> None:
        """Recursively delete a folder under the tenant root if it exists."""
        try:
            directory = self._full_path(path)
            if await self.backend.exists(directory):
                await self.backend.delete_directory(directory)
                logger.info(f"Folder deleted: {directory}")
        except (OSError, ValueError) as e:
            if not self.config.suppress_errors:
                raise
            logger.warning(f"Delete folder '{path}' failed: {e}")

    # Files

    async def delete_file(self, path: str) -> None:
        """Delete a stored file.

        Accepts either a path relative to the tenant root or one starting
        with the asset URL prefix ('data/<tenant>/').

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is empty or escapes the tenant root.
        """
        relative = path.replace("\\", "/").lstrip("/")
        prefix = f"{self.url_prefix}/"
        if relative.startswith(prefix):
            relative = relative[len(prefix):]
        if not relative:
            raise ValueError("File path is required")

        file_path = self._full_path(relative)
        await self.backend.delete_file(file_path)
        logger.info(f"File deleted: {file_path}")

    async def get_assets(self, path: str = "") -> list[str]:
        """List absolute paths of all files under a folder, recursively."""
        try:
            return await self.backend.list_files(self._full_path(path))
        except (OSError, ValueError) as e:
            if not self.config.suppress_errors:
                raise
            logger.warning(f"Listing assets in '{path}' failed: {e}")
            return []

    async def get_themes(self) -> list[str]:
        """List the names of installed themes."""
        directory = os.path.join(self.config.content_root, *self.config.themes_folder.replace("\\", "/").split("/"))
        try:
            return await self.backend.list_directories(directory)
        except OSError as e:
            if not self.config.suppress_errors:
                raise
            logger.warning(f"Listing themes in {directory} failed: {e}")
            return []

    # Uploads

    async def upload_form_file(self, source: UploadSource, url_root: str = "", path: str = "") -> AssetItem:
        """Store a directly uploaded file, overwriting any file of the same name.

        Args:
            source: Upload exposing a file name and async read().
            url_root: Optional prefix for the returned URL.
            path: Target folder relative to the tenant root.

        Returns:
            The stored asset.
        """
        directory = await self._verify_path(path)

        declared = strip_directories(source.filename or "")
        if is_clipboard_name(declared):
            file_name = await self._unique_name(directory, lambda: safe_upload_name(declared))
        else:
            file_name = safe_upload_name(declared)

        file_path = self._child_path(directory, file_name)
        size = await self.backend.write_stream(file_path, self._read_chunks(source))

        logger.info(f"Asset uploaded: {file_path} ({size} bytes)")
        return self._to_asset(file_path, url_root)

    async def upload_base64_image(self, payload: str, url_root: str = "", path: str = "") -> AssetItem:
        """Store a base64 data-URI image under a random name.

        Args:
            payload: Data URI starting with a png, jpeg or gif prefix.
            url_root: Optional prefix for the returned URL.
            path: Target folder relative to the tenant root.

        Returns:
            The stored asset.

        Raises:
            ValueError: If the payload has no supported prefix or is not valid base64.
        """
        for prefix, extension in BASE64_IMAGE_PREFIXES.items():
            if payload.startswith(prefix):
                break
        else:
            raise ValueError("Unsupported image payload; expected a png, jpeg or gif data URI")

        data = base64.b64decode("".join(payload[len(prefix):].split()), validate=True)

        directory = await self._verify_path(path)
        file_name = await self._unique_name(directory, lambda: random_digits_name(4, extension))
        file_path = self._child_path(directory, file_name)
        await self.backend.write_file(file_path, data)

        logger.info(f"Base64 image saved: {file_path} ({len(data)} bytes)")
        return self._to_asset(file_path, url_root)

    async def upload_from_web(self, uri: str, url_root: str = "", path: str = "") -> AssetItem:
        """Download a remote file into the tenant storage.

        Args:
            uri: Remote URL fetched with a single GET.
            url_root: Optional prefix for the returned URL.
            path: Target folder relative to the tenant root.

        Returns:
            The stored asset.

        Raises:
            httpx.HTTPError: On a non-success status or transport failure.
            ValueError: If the URL yields no usable file name.
        """
        uri = str(uri)
        directory = await self._verify_path(path)

        if is_opaque_uri(uri):
            fallback = await self._unique_name(directory, lambda: random_digits_name(4, "png"))
            file_name = title_from_uri(uri, name_factory=lambda: fallback)
        else:
            file_name = title_from_uri(uri)
        file_path = self._child_path(directory, file_name)

        writing = False
        try:
            async with self.fetcher.stream(uri) as chunks:
                writing = True
                size = await self.backend.write_stream(file_path, chunks)
        except Exception:
            if writing and await self.backend.exists(file_path):
                await self.backend.delete_file(file_path)
            raise

        logger.info(f"Remote asset saved: {uri} -> {file_path} ({size} bytes)")
        return self._to_asset(file_path, url_root)

    # Queries

    async def find(
        self,
        predicate: Callable[[AssetItem], bool] | None,
        pager: Pager,
        path: str = "",
    ) -> list[AssetItem]:
        """Return one page of assets, optionally filtered.

        The pager is configured with the filtered total before slicing.

        Args:
            predicate: Optional filter applied to each asset.
            pager: Paging cursor with current_page (1-indexed) and items_per_page.
            path: Folder relative to the tenant root.

        Returns:
            Assets on the current page.
        """
        files = await self.get_assets(path)
        items = [self._to_asset(file_path) for file_path in files]

        if predicate is not None:
            items = [item for item in items if predicate(item)]

        pager.configure(len(items))

        skip = pager.skip
        return items[skip:skip + pager.items_per_page]

    # Helpers

    def _full_path(self, path: str) -> str:
        """Resolve a tenant-relative path, refusing paths outside the tenant root."""
        relative = (path or "").replace("\\", "/").strip("/")
        root = os.path.normpath(self.location)
        if not relative:
            return root

        full_path = os.path.normpath(os.path.join(root, *relative.split("/")))
        if not full_path.startswith(root + os.sep):
            raise ValueError(f"Path escapes storage location: {path}")
        return full_path

    def _child_path(self, directory: str, file_name: str) -> str:
        """Join a file name onto a resolved folder, refusing names that leave it."""
        file_path = os.path.normpath(os.path.join(directory, file_name))
        if os.path.dirname(file_path) != directory:
            raise ValueError(f"Invalid file name: {file_name}")
        return file_path

    async def _verify_path(self, path: str) -> str:
        """Resolve the target folder of an upload, creating it if needed."""
        directory = self._full_path(path)
        if not await self.backend.exists(directory):
            await self.backend.make_directory(directory)
        return directory

    async def _unique_name(self, directory: str, factory: Callable[[], str]) -> str:
        """Draw names from factory until one is unused in directory."""
        for _ in range(MAX_NAME_ATTEMPTS):
            candidate = factory()
            if not await self.backend.exists(os.path.join(directory, candidate)):
                return candidate
        raise FileExistsError(f"No free file name in {directory} after {MAX_NAME_ATTEMPTS} attempts")

    @staticmethod
    async def _read_chunks(source: UploadSource):
        while True:
            chunk = await source.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk

    def _to_asset(self, file_path: str, url_root: str = "") -> AssetItem:
        """Map a stored file to display metadata."""
        relative = os.path.relpath(file_path, self.config.web_root).replace(os.sep, "/")
        url = public_url(relative, url_root)
        return AssetItem(
            title=path_to_title(file_path),
            path=relative,
            url=url,
            image=path_to_image(relative, url),
        )
