"""Shared HTTP client pool for connection reuse across integration clients.

Hey future me - the YouTube and Home Assistant clients are built per request by the
API dependencies. If each of them opened its own httpx.AsyncClient we'd throw away
keep-alive connections on every request. Instead they borrow the shared client from
this pool, and lifecycle.py closes it once at shutdown.

Usage:
    client = await HttpClientPool.get_client()
    response = await client.get("https://www.googleapis.com/youtube/v3/videos", params=...)
"""

import asyncio
import logging
from typing import ClassVar

import httpx

logger = logging.getLogger(__name__)


class HttpClientPool:
    """Singleton HTTP client pool for connection reuse."""

    _client: ClassVar[httpx.AsyncClient | None] = None
    _lock: ClassVar[asyncio.Lock | None] = None

    DEFAULT_TIMEOUT: ClassVar[float] = 30.0
    DEFAULT_MAX_KEEPALIVE: ClassVar[int] = 10
    DEFAULT_MAX_CONNECTIONS: ClassVar[int] = 20

    @classmethod
    def _ensure_lock(cls) -> asyncio.Lock:
        # Lazy so the lock is created inside a running event loop.
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def get_client(cls, timeout: float | None = None) -> httpx.AsyncClient:
        """Get the shared HTTP client instance.

        Args:
            timeout: Request timeout in seconds, only applied on the first call

        Returns:
            Shared httpx.AsyncClient instance
        """
        async with cls._ensure_lock():
            if cls._client is None:
                effective_timeout = timeout or cls.DEFAULT_TIMEOUT
                cls._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(effective_timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=cls.DEFAULT_MAX_KEEPALIVE,
                        max_connections=cls.DEFAULT_MAX_CONNECTIONS,
                    ),
                    follow_redirects=True,
                )
                logger.info(
                    "HTTP client pool initialized (timeout=%.1fs, max_conn=%d)",
                    effective_timeout,
                    cls.DEFAULT_MAX_CONNECTIONS,
                )
            return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the shared HTTP client and release all connections."""
        async with cls._ensure_lock():
            if cls._client is not None:
                await cls._client.aclose()
                cls._client = None
                logger.info("HTTP client pool closed")
        # Next startup may run in a different event loop (tests, reloads).
        cls._lock = None

    @classmethod
    def is_initialized(cls) -> bool:
        """Check if the shared client exists."""
        return cls._client is not None
