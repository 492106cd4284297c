"""Local filesystem storage backend using pathlib."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import AsyncIterable

from app.storage.backends.base import StorageBackend


class LocalStorageBackend(StorageBackend):
    """Pathlib-based local filesystem storage backend."""

    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a local file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    async def write_stream(self, path: str, chunks: AsyncIterable[bytes]) -> int:
        """Stream chunks into a local file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        with p.open("wb") as buffer:
            async for chunk in chunks:
                buffer.write(chunk)
                written += len(chunk)
        return written

    async def make_directory(self, path: str) -> None:
        """Create a local directory tree."""
        Path(path).mkdir(parents=True, exist_ok=True)

    async def delete_directory(self, path: str) -> None:
        """Delete a local directory and all contents."""
        p = Path(path)
        if p.exists():
            shutil.rmtree(p)

    async def delete_file(self, path: str) -> None:
        """Delete a local file."""
        Path(path).unlink()

    async def exists(self, path: str) -> bool:
        """Check if a local path exists."""
        return Path(path).exists()

    async def list_files(self, path: str) -> list[str]:
        """Walk a local directory; files of a directory come before its subdirectories."""
        root = Path(path)
        if not root.is_dir():
            raise FileNotFoundError(f"Directory not found: {path}")

        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            files.extend(os.path.join(dirpath, name) for name in sorted(filenames))
        return files

    async def list_directories(self, path: str) -> list[str]:
        """List local subdirectory names."""
        return sorted(entry.name for entry in Path(path).iterdir() if entry.is_dir())
