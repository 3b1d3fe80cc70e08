"""
Cache package for the HowToHelp site.

This package provides the revalidation store that sits in front of the CMS:
successful responses are kept for a fixed window and reused until they
expire. The protocol keeps the content client independent of the backend.
"""
from typing import Any, Optional, Protocol

import structlog

from howtohelp.config import CacheConfig

# Set up structured logger
logger = structlog.get_logger()


class CacheClient(Protocol):
    """Protocol defining the interface for cache clients."""

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Any: Cached value if found, None otherwise
        """
        ...

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """
        Set a value in the cache for ttl seconds.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            bool: True if successful, False otherwise
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete a value from the cache."""
        ...

    async def clear(self) -> bool:
        """Clear all values from the cache."""
        ...

    async def close(self) -> None:
        """Close the cache client and release resources."""
        ...


class BaseCacheClient:
    """
    Base class for cache clients.

    Holds the configuration and provides the async
    context manager plumbing shared by every backend.
    """

    def __init__(self, config: CacheConfig):
        self.config = config

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        raise NotImplementedError

    async def delete(self, key: str) -> bool:
        raise NotImplementedError

    async def clear(self) -> bool:
        raise NotImplementedError

    async def __aenter__(self) -> "BaseCacheClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the cache client and release resources."""
        pass


def get_cache_client(config: CacheConfig) -> Optional[CacheClient]:
    """
    Get a cache client based on configuration.

    Returns None when caching is disabled, in which case every request goes
    to the CMS.
    """
    if not config.enabled:
        logger.info("Revalidation cache disabled")
        return None

    from howtohelp.cache.memory import MemoryCacheClient
    logger.info("Using memory cache", cleanup_interval_seconds=config.cleanup_interval_seconds)
    return MemoryCacheClient(config)


from howtohelp.cache.memory import MemoryCacheClient

__all__ = [
    "CacheClient",
    "BaseCacheClient",
    "get_cache_client",
    "MemoryCacheClient",
]
