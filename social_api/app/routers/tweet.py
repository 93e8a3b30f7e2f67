# social_api/app/routers/tweet.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from social_api.app.config import Settings
from social_api.app.deps import get_retriever, get_settings
from social_api.app.routers.common import USAGE_EXAMPLE, cache_control
from social_api.renderers.tweet_json import render_error_json, render_tweet_json
from social_api.services.errors import TweetError, status_for_error
from social_api.services.retriever import CachedTweetRetriever

log = logging.getLogger("tweet")
router = APIRouter(prefix="/api", tags=["tweet"])


@router.get("/tweet")
@router.get("/tweet-json")
async def get_tweet_json(
    url: Optional[str] = Query(None, description="Tweet URL (twitter.com, x.com or t.co)"),
    retriever: CachedTweetRetriever = Depends(get_retriever),
    settings: Settings = Depends(get_settings),
):
    """Normalized tweet data as JSON: {"success": true, "data": {...}}."""
    if not url:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Missing required parameter: url",
                "message": "Please provide a tweet URL as a query parameter",
                "example": USAGE_EXAMPLE,
            },
        )

    try:
        tweet = await retriever.get(url)
    except TweetError as error:
        log.info("tweet.failed kind=%s url=%s", error.code, url)
        return JSONResponse(status_code=status_for_error(error), content=render_error_json(error))
    except Exception as error:
        log.exception("tweet.unexpected_error url=%s", url)
        return JSONResponse(status_code=500, content=render_error_json(error))

    return JSONResponse(content=render_tweet_json(tweet), headers=cache_control(settings.CACHE_MAX_AGE))
