from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import httpx
import pytest

from social_api.app.infra.cache.firebase_provider import FirebaseCacheBackend
from social_api.app.infra.cache.memory_provider import InMemoryCacheBackend
from social_api.services.cache import get_tweet_cache_key, sanitize_cache_key, strip_absent
from social_api.services.errors import CacheError


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeRealtimeDatabase:
    """Minimal RTDB REST surface: GET/PUT/DELETE on <path>.json."""

    def __init__(self) -> None:
        self.nodes: Dict[str, Any] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: Optional[int] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "denied"})

        path = request.url.path
        if request.method == "GET":
            # absent nodes come back as a literal null body
            return httpx.Response(200, content=json.dumps(self.nodes.get(path)).encode())
        if request.method == "PUT":
            self.nodes[path] = json.loads(request.content)
            return httpx.Response(200, json=self.nodes[path])
        if request.method == "DELETE":
            self.nodes.pop(path, None)
            return httpx.Response(200, content=b"null")
        return httpx.Response(405)


class TestCacheKeys:
    def test_forbidden_characters_replaced(self) -> None:
        assert sanitize_cache_key("a.b$c#d[e]f/g") == "a_b_c_d_e_f_g"

    def test_tweet_key(self) -> None:
        key = get_tweet_cache_key("https://x.com/user/status/123")
        assert key == "tweet:https:__x_com_user_status_123"
        for char in ".$#[]/":
            assert char not in key

    def test_distinct_urls_distinct_keys(self) -> None:
        assert get_tweet_cache_key("https://x.com/u/status/1") != get_tweet_cache_key("https://twitter.com/u/status/1")


class TestStripAbsent:
    def test_nested(self) -> None:
        value = {
            "a": 1,
            "b": None,
            "c": {"d": None, "e": [{"f": None, "g": 0}, None]},
            "h": False,
            "i": "",
        }
        assert strip_absent(value) == {"a": 1, "c": {"e": [{"g": 0}, None]}, "h": False, "i": ""}

    def test_tuples_become_lists(self) -> None:
        assert strip_absent(({"x": None},)) == [{}]


class TestInMemoryCacheBackend:
    def test_set_get(self) -> None:
        cache = InMemoryCacheBackend(clock=FakeClock())

        async def run() -> Any:
            await cache.set("k", {"v": 1}, ttl_seconds=60)
            return await cache.get("k")

        assert asyncio.run(run()) == {"v": 1}

    def test_expiry(self) -> None:
        clock = FakeClock()
        cache = InMemoryCacheBackend(clock=clock)

        async def run() -> Any:
            await cache.set("k", "value", ttl_seconds=60)
            clock.now += 59
            fresh = await cache.get("k")
            clock.now += 1
            stale = await cache.get("k")
            return fresh, stale

        assert asyncio.run(run()) == ("value", None)
        assert len(cache) == 0

    def test_delete(self) -> None:
        cache = InMemoryCacheBackend()

        async def run() -> Any:
            await cache.set("k", "value", ttl_seconds=60)
            await cache.delete("k")
            await cache.delete("missing")
            return await cache.get("k")

        assert asyncio.run(run()) is None


class TestWrap:
    def test_miss_then_hit(self) -> None:
        cache = InMemoryCacheBackend()
        calls: list[int] = []

        async def factory() -> Dict[str, Any]:
            calls.append(1)
            return {"id": "1", "thumbnail": None}

        async def run() -> Any:
            first = await cache.wrap("k", factory, ttl_seconds=60)
            second = await cache.wrap("k", factory, ttl_seconds=60)
            return first, second

        first, second = asyncio.run(run())
        assert first == second == {"id": "1", "thumbnail": None}
        assert len(calls) == 1

    def test_factory_error_stores_nothing(self) -> None:
        cache = InMemoryCacheBackend()

        async def factory() -> Any:
            raise ValueError("upstream down")

        with pytest.raises(ValueError):
            asyncio.run(cache.wrap("k", factory, ttl_seconds=60))
        assert len(cache) == 0


class TestFirebaseCacheBackend:
    def make(self, db: FakeRealtimeDatabase, clock: FakeClock) -> tuple[FirebaseCacheBackend, httpx.AsyncClient]:
        client = httpx.AsyncClient(transport=httpx.MockTransport(db))
        backend = FirebaseCacheBackend(
            "https://demo-default-rtdb.firebaseio.com/",
            auth_token="secret",
            client=client,
            clock=clock,
        )
        return backend, client

    def test_requires_database_url(self) -> None:
        with pytest.raises(CacheError):
            FirebaseCacheBackend(None)

    def test_set_get_roundtrip(self) -> None:
        db = FakeRealtimeDatabase()
        clock = FakeClock(now=1_700_000_000.0)
        backend, client = self.make(db, clock)

        async def run() -> Any:
            async with client:
                await backend.set("tweet:abc", {"id": "1"}, ttl_seconds=60)
                return await backend.get("tweet:abc")

        assert asyncio.run(run()) == {"id": "1"}
        put = db.requests[0]
        assert put.method == "PUT"
        assert put.url.params["auth"] == "secret"
        assert json.loads(put.content) == {"value": {"id": "1"}, "expiresAt": 1_700_000_060_000}

    def test_missing_entry(self) -> None:
        db = FakeRealtimeDatabase()
        backend, client = self.make(db, FakeClock())

        async def run() -> Any:
            async with client:
                return await backend.get("tweet:none")

        assert asyncio.run(run()) is None

    def test_empty_body_is_a_miss(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"")))
        backend = FirebaseCacheBackend("https://demo-default-rtdb.firebaseio.com", client=client)

        async def run() -> Any:
            async with client:
                return await backend.get("tweet:none")

        assert asyncio.run(run()) is None

    def test_malformed_body_raises_cache_error(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"{oops")))
        backend = FirebaseCacheBackend("https://demo-default-rtdb.firebaseio.com", client=client)

        async def run() -> Any:
            async with client:
                return await backend.get("tweet:bad")

        with pytest.raises(CacheError):
            asyncio.run(run())

    def test_expired_entry(self) -> None:
        db = FakeRealtimeDatabase()
        clock = FakeClock(now=1_700_000_000.0)
        backend, client = self.make(db, clock)

        async def run() -> Any:
            async with client:
                await backend.set("tweet:abc", {"id": "1"}, ttl_seconds=60)
                clock.now += 61
                return await backend.get("tweet:abc")

        assert asyncio.run(run()) is None

    def test_wrap_strips_absent_values(self) -> None:
        db = FakeRealtimeDatabase()
        backend, client = self.make(db, FakeClock())

        async def factory() -> Dict[str, Any]:
            return {"id": "1", "media": [{"type": "photo", "width": None}]}

        async def run() -> Any:
            async with client:
                return await backend.wrap("tweet:abc", factory, ttl_seconds=60)

        assert asyncio.run(run()) == {"id": "1", "media": [{"type": "photo"}]}
        stored = json.loads(db.requests[-1].content)
        assert stored["value"] == {"id": "1", "media": [{"type": "photo"}]}

    def test_http_failure_raises_cache_error(self) -> None:
        db = FakeRealtimeDatabase()
        db.fail_with = 401
        backend, client = self.make(db, FakeClock())

        async def run() -> Any:
            async with client:
                return await backend.get("tweet:abc")

        with pytest.raises(CacheError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.operation == "get"
