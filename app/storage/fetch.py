"""Remote fetch client for web uploads.

Wraps httpx.AsyncClient for a single streamed GET per upload.

Examples:
    >>> fetcher = RemoteFetcher(timeout=30.0)
    >>> async with fetcher.stream("https://example.com/cat.png") as chunks:
    ...     async for chunk in chunks:
    ...         ...
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class RemoteFetcher:
    """Streams remote resources with httpx.

    Attributes:
        timeout: Request timeout in seconds; None waits indefinitely.
        client: Optional shared client (not closed by the fetcher).
    """

    def __init__(self, timeout: float | None = None, client: httpx.AsyncClient | None = None) -> None:
        self.timeout = timeout
        self.client = client

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    @asynccontextmanager
    async def stream(self, uri: str) -> AsyncIterator[AsyncIterator[bytes]]:
        """Issue a GET request and yield the response body as byte chunks.

        Args:
            uri: Remote URL.

        Yields:
            Async iterator over body chunks.

        Raises:
            httpx.HTTPStatusError: If the response status is not successful.
            httpx.HTTPError: On transport failures.
        """
        async with self._client() as client:
            logger.info(f"[FETCH] GET {uri}")
            async with client.stream("GET", uri, follow_redirects=True) as response:
                response.raise_for_status()
                yield response.aiter_bytes(CHUNK_SIZE)
