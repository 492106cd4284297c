"""Abstract base class for storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterable


class StorageBackend(ABC):
    """Abstract storage backend for asset I/O.

    Implementations must handle writing files, streaming data to files,
    creating and deleting directories, deleting files, existence checks
    and directory listings.
    """

    @abstractmethod
    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a file, replacing it if present.

        Args:
            path: Full file path.
            data: Binary data to write.
        """

    @abstractmethod
    async def write_stream(self, path: str, chunks: AsyncIterable[bytes]) -> int:
        """Write an async stream of chunks to a file, replacing it if present.

        Args:
            path: Full file path.
            chunks: Async iterable of byte chunks.

        Returns:
            Number of bytes written.
        """

    @abstractmethod
    async def make_directory(self, path: str) -> None:
        """Create a directory and any missing parents.

        Args:
            path: Directory path to create.
        """

    @abstractmethod
    async def delete_directory(self, path: str) -> None:
        """Delete a directory and all its contents.

        Args:
            path: Directory path to delete.
        """

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """Delete a single file.

        Args:
            path: File path to delete.

        Raises:
            FileNotFoundError: If the file does not exist.
        """

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if the path exists.
        """

    @abstractmethod
    async def list_files(self, path: str) -> list[str]:
        """List all files under a directory, recursively.

        Args:
            path: Directory to walk.

        Returns:
            Absolute file paths.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """

    @abstractmethod
    async def list_directories(self, path: str) -> list[str]:
        """List the names of immediate subdirectories.

        Args:
            path: Directory to inspect.

        Returns:
            Subdirectory names.
        """
