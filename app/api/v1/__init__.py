"""API v1 module.

Contains all v1 API routes.
"""

from fastapi import APIRouter

from app.api.v1.assets import router as assets_router
from app.api.v1.themes import router as themes_router

router = APIRouter(prefix="/api/v1")
router.include_router(assets_router)
router.include_router(themes_router)

__all__ = ["router"]
