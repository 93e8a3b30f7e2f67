# social_api/services/tweet_service.py
"""
Direct (uncached) tweet retrieval: URL -> id -> syndication record -> TweetData.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import TweetServiceConfig, merge_config
from .errors import InvalidURLError
from .ids import extract_tweet_id
from .normalize import normalize
from .syndication import fetch_syndication
from .types import TweetData

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = "twitter.com/username/status/ID, x.com/username/status/ID, or t.co/ID"


class TweetService:
    """
    Fetches tweet data through the syndication endpoint.

    The optional shared httpx client lets an application reuse connections
    across requests; without one each fetch opens its own client.
    """

    def __init__(
        self,
        config: Optional[TweetServiceConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = merge_config(config)
        self._client = client

    @staticmethod
    def resolve_id(tweet_url: str) -> str:
        tweet_id = extract_tweet_id(tweet_url)
        if not tweet_id:
            raise InvalidURLError(f"Invalid tweet URL: {tweet_url}. Supported formats: {SUPPORTED_FORMATS}")
        return tweet_id

    async def get_tweet_data(self, tweet_url: str, timeout_ms: Optional[int] = None) -> TweetData:
        """
        Resolve, fetch and normalize one tweet.

        Args:
            tweet_url: twitter.com, x.com or t.co URL
            timeout_ms: overrides the configured request timeout for this call

        Raises:
            InvalidURLError: the URL matches none of the supported formats
            TweetNotFoundError, NetworkTimeoutError, ApiError: from the fetch
        """
        tweet_id = self.resolve_id(tweet_url)
        options = self.config if timeout_ms is None else self.config.with_timeout(timeout_ms)
        record = await fetch_syndication(tweet_id, options, client=self._client)
        logger.info("tweet.fetched id=%s", tweet_id)
        return normalize(record)


async def get_tweet_data(
    tweet_url: str,
    config: Optional[TweetServiceConfig] = None,
) -> TweetData:
    return await TweetService(config).get_tweet_data(tweet_url)
