# social_api/app/infra/cache/firebase_provider.py
"""
Firebase Realtime Database cache backend.
Uses the RTDB REST API through httpx; each entry is stored as
{"value": <json>, "expiresAt": <epoch ms>} under <root_path>/<key>.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from social_api.app.infra.cache.base import CacheBackend
from social_api.services.errors import CacheError

logger = logging.getLogger(__name__)


class FirebaseCacheBackend(CacheBackend):
    """
    Firebase RTDB cache over REST.

    Keys must not contain . $ # [ ] / (see social_api.services.cache).
    RTDB cannot hold null leaves, so values are stripped before writes.
    """

    requires_stripping = True

    def __init__(
        self,
        database_url: Optional[str],
        auth_token: Optional[str] = None,
        root_path: str = "social-api",
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 5.0,
        clock: Callable[[], float] = time.time,
    ):
        if not database_url:
            raise CacheError("configure", "Missing Firebase configuration. Required: FIREBASE_DATABASE_URL")

        self.database_url = database_url.rstrip("/")
        self.auth_token = auth_token
        self.root_path = root_path.strip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._clock = clock

        logger.info(
            "FirebaseCacheBackend initialized: database=%s, root=%s",
            self.database_url,
            self.root_path,
        )

    def _entry_url(self, key: str) -> str:
        return f"{self.database_url}/{self.root_path}/{quote(key, safe='')}.json"

    def _params(self) -> Dict[str, str]:
        return {"auth": self.auth_token} if self.auth_token else {}

    async def _request(self, method: str, key: str, **kwargs: Any) -> httpx.Response:
        url = self._entry_url(key)
        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, params=self._params(), timeout=self.timeout_seconds, **kwargs
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(method, url, params=self._params(), **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            logger.error("Firebase %s failed: key=%s, error=%s", method, key, e)
            raise CacheError(method.lower(), str(e)) from e

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def get(self, key: str) -> Optional[Any]:
        response = await self._request("GET", key)
        if not response.content.strip():
            return None
        try:
            entry = response.json()
        except ValueError as e:
            raise CacheError("get", f"Malformed entry for {key}: {e}") from e

        if not isinstance(entry, dict) or "value" not in entry:
            return None

        expires_at = entry.get("expiresAt")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            return None
        if expires_at <= self._now_ms():
            logger.debug("Firebase entry expired: key=%s", key)
            return None

        return entry["value"]

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        entry = {"value": value, "expiresAt": self._now_ms() + ttl_seconds * 1000}
        await self._request("PUT", key, json=entry)
        logger.debug("Firebase entry stored: key=%s, ttl=%ds", key, ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._request("DELETE", key)
