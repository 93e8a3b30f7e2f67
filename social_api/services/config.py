# social_api/services/config.py
"""
Configuration for the tweet service core.

Values are supplied by the caller (see social_api.app.config); nothing here
reads the environment.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_LANGUAGE = "en"
DEFAULT_BASE_URL = "https://cdn.syndication.twimg.com"


@dataclass(frozen=True)
class TweetServiceConfig:
    """Options for one syndication request."""

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    language: str = DEFAULT_LANGUAGE
    base_url: str = DEFAULT_BASE_URL

    def with_timeout(self, timeout_ms: int) -> "TweetServiceConfig":
        return replace(self, timeout_ms=timeout_ms)


DEFAULT_CONFIG = TweetServiceConfig()


def merge_config(
    config: Optional[TweetServiceConfig] = None,
    *,
    timeout_ms: Optional[int] = None,
    language: Optional[str] = None,
    base_url: Optional[str] = None,
) -> TweetServiceConfig:
    """Overlay explicit overrides on top of a config (or the defaults)."""
    base = config or DEFAULT_CONFIG
    return TweetServiceConfig(
        timeout_ms=timeout_ms if timeout_ms is not None else base.timeout_ms,
        language=language or base.language,
        base_url=(base_url or base.base_url).rstrip("/"),
    )
