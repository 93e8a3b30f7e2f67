# social_api/app/routers/tweet_svg.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from social_api.app.config import Settings
from social_api.app.deps import get_request_id, get_retriever, get_settings
from social_api.app.routers.common import GENERIC_ERROR_MESSAGE, cache_control
from social_api.renderers.tweet_svg import CONTENT_TYPE, generate_error_svg, generate_tweet_svg
from social_api.services.errors import TweetError, status_for_error
from social_api.services.retriever import CachedTweetRetriever

log = logging.getLogger("tweet")
router = APIRouter(prefix="/api", tags=["tweet"])


@router.get("/tweet-svg")
async def get_tweet_svg(
    url: Optional[str] = Query(None, description="Tweet URL (twitter.com, x.com or t.co)"),
    retriever: CachedTweetRetriever = Depends(get_retriever),
    settings: Settings = Depends(get_settings),
    request_id: str = Depends(get_request_id),
):
    """Tweet as an SVG card. Errors are rendered as a 600x200 error card."""
    if not url:
        return PlainTextResponse("Missing URL parameter", status_code=400)

    try:
        tweet = await retriever.get(url)
    except TweetError as error:
        log.info("tweet_svg.failed kind=%s url=%s", error.code, url)
        return Response(
            generate_error_svg(error.message, request_id),
            status_code=status_for_error(error),
            media_type=CONTENT_TYPE,
        )
    except Exception:
        log.exception("tweet_svg.unexpected_error url=%s", url)
        return Response(
            generate_error_svg(GENERIC_ERROR_MESSAGE, request_id),
            status_code=500,
            media_type=CONTENT_TYPE,
        )

    return Response(
        generate_tweet_svg(tweet),
        media_type=CONTENT_TYPE,
        headers=cache_control(settings.CACHE_MAX_AGE),
    )
