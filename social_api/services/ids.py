# social_api/services/ids.py
import re
from typing import Optional

# Tried in order; first capturing match wins
_TWEET_ID_PATTERNS = (
    re.compile(r"twitter\.com/\w+/status/(\d+)"),
    re.compile(r"x\.com/\w+/status/(\d+)"),
    re.compile(r"t\.co/(\w+)"),
)

_USERNAME_RE = re.compile(r"(?:twitter\.com|x\.com)/(\w+)/status")

CANONICAL_HOST = "twitter.com"


def extract_tweet_id(url: object) -> Optional[str]:
    """Return the tweet id from a twitter.com, x.com or t.co URL, or None."""
    if not url or not isinstance(url, str):
        return None
    for pattern in _TWEET_ID_PATTERNS:
        m = pattern.search(url)
        if m and m.group(1):
            return m.group(1)
    return None


def is_valid_tweet_url(url: object) -> bool:
    return extract_tweet_id(url) is not None


def normalize_tweet_url(url: object) -> Optional[str]:
    """
    Rebuild https://twitter.com/<user>/status/<id> for display.

    Short links (t.co) carry no username, so they normalize to None.
    """
    tweet_id = extract_tweet_id(url)
    if not tweet_id or not isinstance(url, str):
        return None

    if "t.co/" in url:
        return None

    m = _USERNAME_RE.search(url)
    if m and m.group(1):
        return f"https://{CANONICAL_HOST}/{m.group(1)}/status/{tweet_id}"
    return None
