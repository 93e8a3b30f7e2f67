# social_api/app/infra/cache/base.py
"""
Abstract base class for cache backends.
This interface allows swapping between cache stores (Firebase RTDB, in-memory, ...).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from social_api.services.cache import strip_absent

logger = logging.getLogger(__name__)


class CacheBackend(ABC):
    """
    Abstract interface for a TTL key/value cache.

    Implementations:
    - FirebaseCacheBackend: Firebase Realtime Database over its REST API
    - InMemoryCacheBackend: process-local dict (tests, single-instance deploys)

    Values are JSON-serializable object graphs. Keys are pre-sanitized.
    """

    # Stores that cannot represent null leaves need them stripped before writes
    requires_stripping: bool = True

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Read an unexpired value.

        Args:
            key: The sanitized cache key

        Returns:
            The stored value, or None on a miss or when expired
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Store a value.

        Args:
            key: The sanitized cache key
            value: JSON-serializable value
            ttl_seconds: Lifetime counted from the write
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass

    async def wrap(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl_seconds: int,
    ) -> Any:
        """
        Return the cached value for key, or compute it with factory and store it.

        Exceptions from factory propagate; nothing is stored in that case.
        """
        cached = await self.get(key)
        if cached is not None:
            logger.debug("cache.hit key=%s", key)
            return cached

        logger.debug("cache.miss key=%s", key)
        value = await factory()
        if self.requires_stripping:
            value = strip_absent(value)
        await self.set(key, value, ttl_seconds)
        return value
