"""FastAPI dependencies resolving the calling tenant.

Authentication happens upstream; requests arrive with the tenant slug in
a trusted header (``X-Tenant-Slug`` by default). A request without the
header works against the shared, unscoped storage root.
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from app.config import Settings, get_settings
from app.storage.naming import is_valid_tenant_slug

logger = logging.getLogger(__name__)


async def get_tenant_slug(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str:
    """Resolve the tenant slug of the current request.

    Returns:
        The slug, or an empty string when no tenant context is present.

    Raises:
        HTTPException 400: If the slug is not a single safe path segment.
    """
    slug = request.headers.get(settings.TENANT_HEADER, "").strip()
    if not slug:
        return ""

    if not is_valid_tenant_slug(slug):
        logger.warning(f"Rejected tenant slug: {slug!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {settings.TENANT_HEADER} header",
        )
    return slug
