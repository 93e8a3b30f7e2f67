# social_api/app/deps.py (objects live on app.state, exposed as dependencies)

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import Request

from social_api.app.config import Settings
from social_api.app.infra.cache.base import CacheBackend
from social_api.app.infra.cache.firebase_provider import FirebaseCacheBackend
from social_api.app.infra.cache.memory_provider import InMemoryCacheBackend
from social_api.services.retriever import CachedTweetRetriever
from social_api.services.tweet_service import TweetService

log = logging.getLogger(__name__)


def build_cache(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> Optional[CacheBackend]:
    """
    Pick the cache backend from settings.

    Firebase without both a database URL and an auth token degrades to no
    cache, which the retriever treats exactly like a permanent miss.
    """
    if settings.CACHE_BACKEND == "memory":
        return InMemoryCacheBackend()
    if settings.CACHE_BACKEND == "firebase" and settings.firebase_configured:
        return FirebaseCacheBackend(
            database_url=settings.FIREBASE_DATABASE_URL,
            auth_token=settings.FIREBASE_AUTH_TOKEN,
            root_path=settings.CACHE_ROOT_PATH,
            client=client,
            timeout_seconds=settings.CACHE_TIMEOUT_MS / 1000,
        )
    log.info("Cache disabled (backend=%s); fetching directly", settings.CACHE_BACKEND)
    return None


def build_retriever(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> CachedTweetRetriever:
    service = TweetService(settings.tweet_service_config(), client=client)
    return CachedTweetRetriever(
        service,
        cache=build_cache(settings, client),
        ttl_seconds=settings.CACHE_TTL_SECONDS,
        cache_timeout_ms=settings.CACHE_TIMEOUT_MS,
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_retriever(request: Request) -> CachedTweetRetriever:
    return request.app.state.retriever


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "unknown"
