"""
Pytest configuration and fixtures for asset storage tests.

Every test gets its own web root and content root under tmp_path, so the
storage layout is configured explicitly instead of being derived from the
location of the running interpreter.
"""
import io
import logging
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from app.storage import AssetStorageService, StorageConfig

logger = logging.getLogger(__name__)


# ============================================
# Helpers
# ============================================

class FakeUpload:
    """In-memory upload source with a declared file name."""

    def __init__(self, filename: str | None, content: bytes = b"content"):
        self.filename = filename
        self._stream = io.BytesIO(content)

    async def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)


# ============================================
# Storage Fixtures
# ============================================

@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Application root for the test."""
    return tmp_path


@pytest.fixture
def web_root(content_root: Path) -> Path:
    """Public asset root (<content root>/wwwroot)."""
    root = content_root / "wwwroot"
    root.mkdir()
    return root


@pytest.fixture
def storage_config(web_root: Path, content_root: Path) -> StorageConfig:
    """Storage config pointing at the temporary roots."""
    return StorageConfig(web_root=str(web_root), content_root=str(content_root))


@pytest.fixture
def service(storage_config: StorageConfig) -> AssetStorageService:
    """Storage service for tenant 'acme' on the local filesystem."""
    return AssetStorageService(storage_config, tenant_slug="acme")


@pytest.fixture
def tenant_root(web_root: Path) -> Path:
    """Storage location of tenant 'acme'."""
    return web_root / "data" / "acme"


@pytest.fixture
def make_upload():
    """Factory for in-memory upload sources."""
    return FakeUpload


# ============================================
# Application Fixtures
# ============================================

@pytest.fixture
def test_settings(web_root: Path, content_root: Path) -> Settings:
    """
    Create test settings with explicit storage roots.
    """
    return Settings(
        WEB_ROOT_PATH=str(web_root),
        CONTENT_ROOT_PATH=str(content_root),
        DEBUG=True,
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """
    Create a test client with settings override.
    """
    def override_settings():
        return test_settings

    app.dependency_overrides[get_settings] = override_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no external API calls)"
    )
