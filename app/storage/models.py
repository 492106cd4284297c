"""Asset value objects and the paging cursor.

Examples:
    >>> from app.storage.models import AssetItem, Pager
    >>> pager = Pager(current_page=2, items_per_page=5)
    >>> pager.configure(12)
    >>> pager.last_page
    3
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class AssetItem(BaseModel):
    """A stored file mapped to display metadata.

    Attributes:
        title: Display name (the file name).
        path: Path relative to the web root, '/'-separated.
        url: Public-facing URL.
        image: Icon or URL used for preview.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Display name")
    path: str = Field(..., description="Web-root-relative path")
    url: str = Field(..., description="Public URL")
    image: str = Field(default="", description="Preview icon or URL")


@runtime_checkable
class UploadSource(Protocol):
    """Binary upload source consumed once per upload.

    FastAPI's ``UploadFile`` satisfies this protocol.
    """

    filename: str | None

    async def read(self, size: int = -1) -> bytes: ...


@dataclass
class Pager:
    """Caller-owned paging cursor.

    ``current_page`` and ``items_per_page`` are inputs; the remaining fields
    are derived by ``configure`` once the total item count is known.
    """

    current_page: int = 1
    items_per_page: int = 10
    total: int = 0
    last_page: int = 0
    newer: int = 0
    older: int = 0
    show_newer: bool = False
    show_older: bool = False

    def configure(self, total: int) -> None:
        """Derive page totals and navigation from the total item count."""
        if self.items_per_page <= 0:
            self.items_per_page = 10

        self.total = total
        self.last_page = math.ceil(total / self.items_per_page) if total else 0
        self.newer = self.current_page - 1
        self.older = self.current_page + 1
        self.show_newer = self.current_page > 1
        self.show_older = total > self.current_page * self.items_per_page

    @property
    def skip(self) -> int:
        """Number of items before the current page."""
        return max(self.current_page - 1, 0) * self.items_per_page
