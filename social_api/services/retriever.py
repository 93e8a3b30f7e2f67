# social_api/services/retriever.py
"""
Cache-wrapped tweet retrieval.
The cache is an optimization only: any cache failure or slowness falls back
to a direct fetch, while fetch errors reach the caller unchanged.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional

from social_api.app.infra.cache.base import CacheBackend

from .cache import get_tweet_cache_key
from .errors import TweetError
from .tweet_service import TweetService
from .types import TweetData

logger = logging.getLogger(__name__)

# Tweets are near-immutable, so entries live for hours
DEFAULT_CACHE_TTL_SECONDS = 21_600
DEFAULT_CACHE_TIMEOUT_MS = 3_000


class CachedTweetRetriever:
    """
    Get-or-fetch over a CacheBackend.

    Two timeouts apply: the cache wait (cache_timeout_ms) and the request
    timeout enforced by the syndication client itself.
    """

    def __init__(
        self,
        service: TweetService,
        cache: Optional[CacheBackend] = None,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        cache_timeout_ms: int = DEFAULT_CACHE_TIMEOUT_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._service = service
        self._cache = cache
        self.ttl_seconds = ttl_seconds
        self.cache_timeout_ms = cache_timeout_ms
        self._clock = clock

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    async def get(self, url: str) -> TweetData:
        """
        Return the tweet for url, from cache when possible.

        Raises:
            InvalidURLError, TweetNotFoundError, NetworkTimeoutError, ApiError
        """
        if self._cache is None:
            return await self._service.get_tweet_data(url)

        self._service.resolve_id(url)
        key = get_tweet_cache_key(url)
        started = self._clock()
        fetch: Optional[asyncio.Future] = None

        async def populate() -> Dict[str, Any]:
            nonlocal fetch
            fetch = asyncio.ensure_future(self._service.get_tweet_data(url))
            tweet = await fetch
            return tweet.to_dict()

        # Shielded: a timed-out cache call keeps running and may still write
        operation = asyncio.ensure_future(self._cache.wrap(key, populate, self.ttl_seconds))
        operation.add_done_callback(_log_detached_failure)

        try:
            cached = await asyncio.wait_for(asyncio.shield(operation), timeout=self.cache_timeout_ms / 1000)
            return TweetData.from_dict(cached)
        except TweetError:
            raise
        except asyncio.TimeoutError:
            logger.warning("cache.timeout key=%s timeout_ms=%d, falling back to direct fetch", key, self.cache_timeout_ms)
        except Exception as error:
            logger.warning("cache.error key=%s error=%r, falling back to direct fetch", key, error)

        if fetch is not None:
            # The populate step already reached the provider; reuse that request
            return await fetch

        elapsed_ms = int((self._clock() - started) * 1000)
        remaining_ms = max(self._service.config.timeout_ms - elapsed_ms, 1)
        return await self._service.get_tweet_data(url, timeout_ms=remaining_ms)


def _log_detached_failure(task: "asyncio.Future[Any]") -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None and not isinstance(error, TweetError):
        logger.debug("cache.operation_failed error=%r", error)
