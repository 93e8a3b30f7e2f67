from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest

from social_api.app.infra.cache.base import CacheBackend
from social_api.app.infra.cache.memory_provider import InMemoryCacheBackend
from social_api.services.config import TweetServiceConfig
from social_api.services.errors import CacheError, InvalidURLError, TweetNotFoundError
from social_api.services.normalize import normalize
from social_api.services.retriever import CachedTweetRetriever
from social_api.services.tweet_service import TweetService
from social_api.services.types import TweetData

URL = "https://x.com/Bee_Bombshell/status/1680997123725340672"

RECORD = {
    "id_str": "1680997123725340672",
    "text": "hello",
    "created_at": "2023-07-17T17:01:54.000Z",
    "user": {"id_str": "1", "name": "Bee", "screen_name": "Bee_Bombshell"},
    "photos": [{"url": "https://pbs.twimg.com/media/1.jpg"}],
    "favorite_count": 3,
}


class TweetServiceStub(TweetService):
    def __init__(self, error: Optional[Exception] = None, delay: float = 0.0) -> None:
        super().__init__(TweetServiceConfig(timeout_ms=1000))
        self.tweet = normalize(RECORD)
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, Optional[int]]] = []

    async def get_tweet_data(self, tweet_url: str, timeout_ms: Optional[int] = None) -> TweetData:
        self.calls.append((tweet_url, timeout_ms))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.tweet


class HangingCache(CacheBackend):
    async def get(self, key: str) -> Optional[Any]:
        await asyncio.sleep(10)
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        pass

    async def delete(self, key: str) -> None:
        pass


class BrokenCache(CacheBackend):
    async def get(self, key: str) -> Optional[Any]:
        raise CacheError("get", "permission denied")

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise CacheError("set", "permission denied")

    async def delete(self, key: str) -> None:
        pass


class WriteFailingCache(InMemoryCacheBackend):
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise CacheError("set", "quota exceeded")


class TestWithoutCache:
    def test_fetches_every_time(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service)

        async def run() -> None:
            await retriever.get(URL)
            await retriever.get(URL)

        asyncio.run(run())
        assert retriever.cache_enabled is False
        assert len(service.calls) == 2


class TestCachedTweetRetriever:
    def test_second_read_served_from_cache(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service, InMemoryCacheBackend())

        async def run() -> tuple[TweetData, TweetData]:
            return await retriever.get(URL), await retriever.get(URL)

        first, second = asyncio.run(run())
        assert first == second == service.tweet
        assert len(service.calls) == 1

    def test_cached_entry_not_shared_with_callers(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service, InMemoryCacheBackend())

        async def run() -> TweetData:
            first = await retriever.get(URL)
            first.raw["text"] = "tampered"
            first.raw["user"]["name"] = "tampered"
            return await retriever.get(URL)

        second = asyncio.run(run())
        assert second.raw["text"] == "hello"
        assert second.raw["user"]["name"] == "Bee"
        assert len(service.calls) == 1

    def test_hanging_cache_falls_back_within_budget(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service, HangingCache(), cache_timeout_ms=50)

        tweet = asyncio.run(retriever.get(URL))

        assert tweet == service.tweet
        assert len(service.calls) == 1
        timeout_ms = service.calls[0][1]
        assert timeout_ms is not None
        assert 1 <= timeout_ms < 1000

    def test_broken_cache_falls_back(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service, BrokenCache())

        tweet = asyncio.run(retriever.get(URL))

        assert tweet.id == "1680997123725340672"
        assert len(service.calls) == 1

    def test_failed_write_reuses_fetch(self) -> None:
        service = TweetServiceStub()
        retriever = CachedTweetRetriever(service, WriteFailingCache())

        tweet = asyncio.run(retriever.get(URL))

        assert tweet == service.tweet
        assert len(service.calls) == 1

    def test_slow_fetch_past_cache_timeout_is_reused(self) -> None:
        service = TweetServiceStub(delay=0.2)
        retriever = CachedTweetRetriever(service, InMemoryCacheBackend(), cache_timeout_ms=50)

        tweet = asyncio.run(retriever.get(URL))

        assert tweet == service.tweet
        assert len(service.calls) == 1

    def test_fetch_error_propagates(self) -> None:
        service = TweetServiceStub(error=TweetNotFoundError("Tweet not found"))
        cache = InMemoryCacheBackend()
        retriever = CachedTweetRetriever(service, cache)

        with pytest.raises(TweetNotFoundError):
            asyncio.run(retriever.get(URL))
        assert len(service.calls) == 1
        assert len(cache) == 0

    def test_invalid_url_skips_cache(self) -> None:
        service = TweetServiceStub()
        cache = InMemoryCacheBackend()
        retriever = CachedTweetRetriever(service, cache)

        with pytest.raises(InvalidURLError):
            asyncio.run(retriever.get("https://example.com/nothing"))
        assert service.calls == []
        assert len(cache) == 0
