from __future__ import annotations

from typing import Any, Dict

from social_api.services.cache import strip_absent
from social_api.services.errors import TweetError
from social_api.services.types import TweetData

CONTENT_TYPE = "application/json"
GENERIC_ERROR_MESSAGE = "An unknown error occurred"


def render_tweet_json(tweet: TweetData) -> Dict[str, Any]:
    return {"success": True, "data": strip_absent(tweet.to_dict())}


def render_error_json(error: BaseException) -> Dict[str, Any]:
    if not isinstance(error, TweetError):
        return {"success": False, "error": "INTERNAL_ERROR", "message": GENERIC_ERROR_MESSAGE}

    return {"success": False, **error.to_dict()}
