"""File naming for uploaded assets.

Derives safe file names from declared upload names and remote URLs, and
generates random names that do not collide with existing files.

Examples:
    >>> from app.storage.naming import safe_upload_name, title_from_uri
    >>> safe_upload_name("uploads/2019/photo.jpg")
    'photo.jpg'
    >>> title_from_uri("https://example.com/blog/image.axd?picture=2019%2fcat.jpg")
    'cat.jpg'
"""

from __future__ import annotations

import random
import re
from typing import Callable

# Name TinyMCE assigns to images pasted or dropped into the editor
CLIPBOARD_PLACEHOLDER = "mceclip0"

# Recognized data-URI prefixes and the extension each one maps to
BASE64_IMAGE_PREFIXES: dict[str, str] = {
    "data:image/png;base64,": "png",
    "data:image/jpeg;base64,": "jpeg",
    "data:image/gif;base64,": "gif",
}

# Legacy handler markers whose query value is the real file name
_LEGACY_HANDLER_MARKERS = ("image.axd?picture=", "file.axd?file=")

# URLs for which no usable name can be derived
_OPAQUE_URL_MARKERS = ("encrypted-tbn", "base64,")

# Attempts at drawing an unused random name before giving up
MAX_NAME_ATTEMPTS = 50

# Names that resolve to a directory instead of a file
_RELATIVE_NAMES = (".", "..")


def random_digits_name(digits: int, extension: str = "", rng: random.Random | None = None) -> str:
    """Generate a random numeric name with a fixed number of digits.

    Args:
        digits: Number of digits (4 gives 1000-9998, 6 gives 100000-999998).
        extension: Optional extension without the leading dot.
        rng: Random generator override.

    Returns:
        Name such as '4821.png'.
    """
    rng = rng or random
    low = 10 ** (digits - 1)
    number = rng.randint(low, 10 ** digits - 2)
    return f"{number}.{extension}" if extension else str(number)


def strip_directories(file_name: str) -> str:
    """Drop any directory part some browsers include in the upload name."""
    for separator in ("/", "\\"):
        if separator in file_name:
            file_name = file_name[file_name.rindex(separator) + 1:]
    return file_name


def is_clipboard_name(file_name: str) -> bool:
    """Check if the name is the editor's clipboard placeholder."""
    return file_name.startswith(CLIPBOARD_PLACEHOLDER)


def safe_upload_name(file_name: str | None, rng: random.Random | None = None) -> str:
    """Derive the stored file name for a direct upload.

    The clipboard placeholder 'mceclip0' is replaced with a random 6-digit
    number so repeated pastes do not overwrite each other. Each call draws
    a new number.

    Args:
        file_name: Declared upload name, possibly with a path.
        rng: Random generator override.

    Returns:
        File name without directories.

    Raises:
        ValueError: If no file name remains, or it is '.' or '..'.
    """
    name = strip_directories(file_name or "").strip()
    if not name:
        raise ValueError("Upload has no file name")

    if is_clipboard_name(name):
        name = random_digits_name(6, rng=rng) + name[len(CLIPBOARD_PLACEHOLDER):]

    return _reject_relative_names(name, file_name)


def _reject_relative_names(name: str, source: str) -> str:
    if name in _RELATIVE_NAMES:
        raise ValueError(f"'{name}' is not a valid file name: {source}")
    return name


def _normalize_uri(uri: str) -> str:
    title = uri.lower().replace("%2f", "/")

    if title.endswith(".axdx"):
        title = title.replace(".axdx", "")

    for marker in _LEGACY_HANDLER_MARKERS:
        if marker in title:
            title = title[title.index(marker) + len(marker):]

    return title


def is_opaque_uri(uri: str) -> bool:
    """Check if no file name can be read from the URL (search thumbnails, inline base64)."""
    title = _normalize_uri(uri)
    return any(marker in title for marker in _OPAQUE_URL_MARKERS)


def title_from_uri(uri: str, name_factory: Callable[[], str] | None = None) -> str:
    """Derive a file name from a remote URL.

    Rules, in order:
        - Lowercase, unescape '%2f'
        - Strip the '.axdx' suffix
        - Take the value after a legacy 'image.axd?picture=' or 'file.axd?file=' marker
        - Use a random 4-digit '.png' name for search thumbnails and inline base64
        - Take the part after the last '/'

    Args:
        uri: Remote URL.
        name_factory: Produces the substitute name for opaque URLs.

    Returns:
        File name.

    Raises:
        ValueError: If the URL yields no file name, or '.' or '..'.
    """
    title = _normalize_uri(uri)

    if is_opaque_uri(uri):
        title = name_factory() if name_factory else random_digits_name(4, "png")

    if "/" in title:
        title = title[title.rindex("/"):]

    title = title.replace("/", "")
    if not title:
        raise ValueError(f"Cannot derive a file name from {uri}")
    return _reject_relative_names(title, uri)


_TENANT_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def is_valid_tenant_slug(slug: str) -> bool:
    """Check that a tenant slug is usable as a single path segment."""
    return bool(_TENANT_SLUG_PATTERN.match(slug)) and slug not in _RELATIVE_NAMES
