# social_api/app/main.py
from __future__ import annotations

import logging
import sys
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from social_api import __version__
from social_api.app.config import Settings, settings as default_settings
from social_api.app.deps import build_retriever, get_request_id
from social_api.app.middleware import RateLimiter, install_middleware
from social_api.app.routers.health import router as health_router
from social_api.app.routers.tweet import router as tweet_router
from social_api.app.routers.tweet_html import router as tweet_html_router
from social_api.app.routers.tweet_svg import router as tweet_svg_router
from social_api.services.retriever import CachedTweetRetriever

AVAILABLE_ROUTES = {
    "health": "/api/health",
    "tweetJson": "/api/tweet?url=<tweet-url>",
    "tweetHtml": "/api/tweet-html?url=<tweet-url>",
    "tweetSvg": "/api/tweet-svg?url=<tweet-url>",
}


def create_app(
    settings: Optional[Settings] = None,
    retriever: Optional[CachedTweetRetriever] = None,
) -> FastAPI:
    """
    Build the application.

    A retriever passed in is used as-is (tests); otherwise one is built on
    startup around a shared httpx client that is closed on shutdown.
    """
    settings = settings or default_settings

    app = FastAPI(title="Social API", version=__version__)
    app.state.settings = settings
    app.state.retriever = retriever
    app.state.http_client = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOWED_ORIGINS,
        allow_credentials="*" not in settings.CORS_ALLOWED_ORIGINS,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    install_middleware(app, RateLimiter(settings.RATE_LIMIT_WINDOW_MS, settings.RATE_LIMIT_MAX_REQUESTS))

    app.include_router(health_router)
    app.include_router(tweet_router)
    app.include_router(tweet_html_router)
    app.include_router(tweet_svg_router)

    @app.on_event("startup")
    async def startup() -> None:
        if app.state.retriever is None:
            app.state.http_client = httpx.AsyncClient(timeout=settings.API_TIMEOUT_MS / 1000)
            app.state.retriever = build_retriever(settings, app.state.http_client)

    @app.on_event("shutdown")
    async def shutdown() -> None:
        if app.state.http_client is not None:
            await app.state.http_client.aclose()
            app.state.http_client = None

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": f"Route {request.url.path} not found",
                "requestId": get_request_id(request),
                "availableRoutes": AVAILABLE_ROUTES,
            },
        )

    return app


# Plain stdout logging (dev and containers)
logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = create_app()
