"""Theme API endpoints.

Endpoints:
    GET /api/v1/themes - Installed theme names
"""

from fastapi import APIRouter

from app.api.deps import Storage

router = APIRouter(prefix="/themes", tags=["themes"])


@router.get("", response_model=list[str])
async def list_themes(service: Storage) -> list[str]:
    """List installed themes (empty if the theme directory is missing)."""
    return await service.get_themes()
