"""Display metadata derived from stored asset paths.

Examples:
    >>> from app.storage.display import path_to_image
    >>> path_to_image("data/acme/report.pdf")
    'lib/img/doctypes/pdf.png'
    >>> path_to_image("data/acme/cat.png")
    'data/acme/cat.png'
"""

from __future__ import annotations

from pathlib import PurePosixPath

DOCTYPE_ICON_ROOT = "lib/img/doctypes"
DEFAULT_ICON = "blank.png"

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp", ".svg"})

DOCTYPE_ICONS: dict[str, str] = {
    ".xml": "xml.png",
    ".zip": "zip.png",
    ".txt": "txt.png",
    ".pdf": "pdf.png",
    ".mp3": "mp3.png",
    ".mp4": "mp4.png",
    ".doc": "doc.png",
    ".docx": "doc.png",
    ".xls": "xls.png",
    ".xlsx": "xls.png",
}


def _extension(path: str) -> str:
    return PurePosixPath(path.replace("\\", "/")).suffix.lower()


def is_image_path(path: str) -> bool:
    """Check if the path has a recognized image extension."""
    return _extension(path) in IMAGE_EXTENSIONS


def path_to_title(path: str) -> str:
    """File name shown for the asset."""
    return PurePosixPath(path.replace("\\", "/")).name


def path_to_image(path: str, url: str | None = None) -> str:
    """Preview for an asset.

    Images preview as themselves; other files get a document-type icon.

    Args:
        path: Asset path or URL.
        url: Asset URL to use for images (defaults to path).

    Returns:
        Image URL or icon path.
    """
    if is_image_path(path):
        return url if url is not None else path
    icon = DOCTYPE_ICONS.get(_extension(path), DEFAULT_ICON)
    return f"{DOCTYPE_ICON_ROOT}/{icon}"


def join_url(*segments: str) -> str:
    """Join URL segments with '/', skipping empty ones."""
    parts = [segment.strip("/") for segment in segments]
    return "/".join(part for part in parts if part)


def public_url(relative_path: str, url_root: str = "") -> str:
    """Public URL for a web-root-relative path.

    Args:
        relative_path: Path relative to the web root.
        url_root: Optional prefix such as 'https://cdn.example.com' or '/'.

    Returns:
        URL with '/' separators.
    """
    path = relative_path.replace("\\", "/").strip("/")
    if not url_root:
        return path
    if url_root == "/":
        return f"/{path}"
    return f"{url_root.rstrip('/')}/{path}"
