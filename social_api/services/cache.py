# social_api/services/cache.py
"""
Store-independent helpers for caching tweet data: key derivation and
removal of absent (None) values from a JSON-like tree.
"""
from __future__ import annotations

import re
from typing import Any

CACHE_KEY_PREFIX = "tweet:"

# Characters Firebase Realtime Database forbids in keys
_FORBIDDEN_KEY_CHARS = re.compile(r"[.$#\[\]/]")


def sanitize_cache_key(raw: str) -> str:
    return _FORBIDDEN_KEY_CHARS.sub("_", raw)


def get_tweet_cache_key(url_or_id: str) -> str:
    """
    Cache key for a tweet URL or id.

    Only sanitization is applied: two URLs share a key only when they are
    byte-identical after replacing the forbidden characters.
    """
    return CACHE_KEY_PREFIX + sanitize_cache_key(url_or_id)


def strip_absent(value: Any) -> Any:
    """Recursively drop None-valued dict entries. Lists are recursed element-wise."""
    if isinstance(value, dict):
        return {k: strip_absent(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [strip_absent(item) for item in value]
    return value
