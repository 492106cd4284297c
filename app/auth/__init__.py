"""Auth module - tenant resolution for storage requests."""

from app.auth.dependencies import get_tenant_slug

__all__ = ["get_tenant_slug"]
