# social_api/app/routers/tweet_html.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from social_api.app.config import Settings
from social_api.app.deps import get_retriever, get_settings
from social_api.app.routers.common import GENERIC_ERROR_MESSAGE, cache_control
from social_api.renderers.options import RenderOptions
from social_api.renderers.tweet_html import generate_tweet_html, render_html_error
from social_api.services.errors import TweetError, status_for_error
from social_api.services.retriever import CachedTweetRetriever

log = logging.getLogger("tweet")
router = APIRouter(prefix="/api", tags=["tweet"])


@router.get("/tweet-html", response_class=HTMLResponse)
async def get_tweet_html(
    request: Request,
    url: Optional[str] = Query(None, description="Tweet URL (twitter.com, x.com or t.co)"),
    retriever: CachedTweetRetriever = Depends(get_retriever),
    settings: Settings = Depends(get_settings),
):
    """
    Tweet as a standalone HTML card.

    Display options come from the query string: theme, hide_media,
    hide_metrics, hide_border, hide_timestamp, hide_footer, bg_transparent,
    accent_color, width, font_size.
    """
    if not url:
        return HTMLResponse("<h1>Missing URL parameter</h1>", status_code=400)

    options = RenderOptions.from_query(request.query_params)

    try:
        tweet = await retriever.get(url)
    except TweetError as error:
        log.info("tweet_html.failed kind=%s url=%s", error.code, url)
        return HTMLResponse(render_html_error(error.message), status_code=status_for_error(error))
    except Exception:
        log.exception("tweet_html.unexpected_error url=%s", url)
        return HTMLResponse(render_html_error(GENERIC_ERROR_MESSAGE), status_code=500)

    return HTMLResponse(generate_tweet_html(tweet, options), headers=cache_control(settings.CACHE_MAX_AGE))
