# social_api/app/middleware.py
"""
HTTP plumbing around the tweet routes: request ids and access logs,
security headers, and a fixed-window rate limiter.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger("social_api.access")

CallNext = Callable[[Request], Awaitable[Response]]

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}
HTML_CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline' "
    "https://fonts.googleapis.com; img-src 'self' data: https:; media-src https:; "
    "font-src 'self' data: https://fonts.gstatic.com;"
)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float  # epoch seconds

    @property
    def retry_after(self) -> int:
        return max(math.ceil(self.reset_at - time.time()), 0)

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": datetime.fromtimestamp(self.reset_at, tz=timezone.utc).isoformat(),
        }


class RateLimiter:
    """Fixed-window request counter per client key."""

    _PURGE_EVERY = 100

    def __init__(self, window_ms: int, max_requests: int, clock: Callable[[], float] = time.time):
        self.window_seconds = window_ms / 1000
        self.max_requests = max_requests
        self._clock = clock
        self._windows: Dict[str, list[float]] = {}  # key -> [count, reset_at]
        self._hits = 0

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        self._hits += 1
        if self._hits % self._PURGE_EVERY == 0:
            self._purge(now)

        window = self._windows.get(key)
        if window is None or window[1] <= now:
            window = [0, now + self.window_seconds]
            self._windows[key] = window

        if window[0] >= self.max_requests:
            return RateLimitDecision(False, self.max_requests, 0, window[1])

        window[0] += 1
        return RateLimitDecision(True, self.max_requests, self.max_requests - int(window[0]), window[1])

    def _purge(self, now: float) -> None:
        for key in [k for k, (_, reset_at) in self._windows.items() if reset_at <= now]:
            del self._windows[key]


def client_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def install_middleware(app: FastAPI, limiter: RateLimiter) -> None:
    """Register middleware; the last registered runs outermost."""

    @app.middleware("http")
    async def rate_limit(request: Request, call_next: CallNext) -> Response:
        decision = limiter.hit(client_key(request))
        if not decision.allowed:
            retry_after = decision.retry_after
            return JSONResponse(
                status_code=429,
                content={
                    "error": "RATE_LIMIT_EXCEEDED",
                    "message": f"Rate limit exceeded. Try again in {retry_after} seconds.",
                    "retryAfter": retry_after,
                },
                headers={"Retry-After": str(retry_after), **decision.headers()},
            )
        response = await call_next(request)
        response.headers.update(decision.headers())
        return response

    @app.middleware("http")
    async def security_headers(request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if "text/html" in response.headers.get("content-type", ""):
            response.headers["Content-Security-Policy"] = HTML_CONTENT_SECURITY_POLICY
        return response

    @app.middleware("http")
    async def access_log(request: Request, call_next: CallNext) -> Response:
        request_id = str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        duration_ms = int((time.perf_counter() - started) * 1000)
        response.headers["X-Request-ID"] = request_id
        level = logging.ERROR if response.status_code >= 500 else (
            logging.WARNING if response.status_code >= 400 else logging.INFO
        )
        logger.log(
            level,
            "request method=%s path=%s status=%d duration_ms=%d request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        return response
