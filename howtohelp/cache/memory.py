"""
Memory-based cache implementation for the HowToHelp site.

This module provides an in-memory cache client used as the revalidation
window in front of the CMS. It supports TTL-based expiration and periodic
cleanup of expired entries.
"""
import asyncio
import time
from typing import Any, Callable, Dict, Optional, Set, Tuple

import structlog

from howtohelp.cache import BaseCacheClient
from howtohelp.config import CacheConfig

# Set up structured logger
logger = structlog.get_logger()


class MemoryCacheClient(BaseCacheClient):
    """
    In-memory cache client implementation.

    Entries are stored with an absolute expiry time. The cleanup loop is
    started lazily on the first write, since the client may be constructed
    before an event loop is running.
    """

    def __init__(
        self,
        config: CacheConfig,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the memory cache client.

        Args:
            config: Cache configuration
            clock: Monotonic time source, in seconds
        """
        super().__init__(config)
        # Storage format: {key: (value, expiration_timestamp or None)}
        self._storage: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._cleanup_task: Optional[asyncio.Task] = None
        self._closed = False

    def _start_cleanup_task(self) -> None:
        """Start the periodic cleanup task."""
        if self._cleanup_task is None and not self._closed:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            self._cleanup_task.add_done_callback(self._cleanup_task_done)

    def _cleanup_task_done(self, task: asyncio.Task) -> None:
        """Handle cleanup task completion."""
        if task.cancelled():
            logger.debug("Memory cache cleanup task cancelled")
        elif task.exception():
            logger.error(
                "Memory cache cleanup task failed with exception",
                error=str(task.exception()),
            )

    async def _cleanup_loop(self) -> None:
        """Periodically clean up expired entries."""
        try:
            while not self._closed:
                await asyncio.sleep(self.config.cleanup_interval_seconds)
                await self.cleanup_expired()
        except asyncio.CancelledError:
            pass

    async def cleanup_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        now = self._clock()
        keys_to_delete: Set[str] = set()

        async with self._lock:
            for key, (_, expiration) in self._storage.items():
                if expiration is not None and expiration <= now:
                    keys_to_delete.add(key)

            for key in keys_to_delete:
                del self._storage[key]

        if keys_to_delete:
            logger.debug("Cleaned up expired cache entries", count=len(keys_to_delete))
        return len(keys_to_delete)

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Any: Cached value if found and not expired, None otherwise
        """
        async with self._lock:
            if key not in self._storage:
                return None

            value, expiration = self._storage[key]

            if expiration is not None and expiration <= self._clock():
                del self._storage[key]
                return None

            return value

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """
        Set a value in the cache for ttl seconds.

        A TTL of zero or less means the value would already be stale, so
        nothing is stored.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            bool: True if the value was stored, False otherwise
        """
        if self._closed:
            return False

        if ttl <= 0:
            return False

        async with self._lock:
            self._storage[key] = (value, self._clock() + ttl)

        self._start_cleanup_task()
        return True

    async def delete(self, key: str) -> bool:
        """
        Delete a value from the cache.

        Returns:
            bool: True if the key existed and was deleted, False otherwise
        """
        async with self._lock:
            if key in self._storage:
                del self._storage[key]
                return True
            return False

    async def clear(self) -> bool:
        """Clear all values from the cache."""
        async with self._lock:
            self._storage.clear()
        return True

    async def close(self) -> None:
        """Close the cache client and release resources."""
        self._closed = True

        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        async with self._lock:
            self._storage.clear()

    def __len__(self) -> int:
        """Number of stored entries, including any not yet cleaned up."""
        return len(self._storage)
