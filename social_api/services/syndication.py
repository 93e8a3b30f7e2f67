from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import httpx

from .config import DEFAULT_CONFIG, TweetServiceConfig
from .errors import ApiError, NetworkTimeoutError, TweetNotFoundError
from .types import SyndicationRecord

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
}
ANTI_CACHE_TOKEN = "0"


def build_api_url(tweet_id: str, options: TweetServiceConfig) -> str:
    return (
        f"{options.base_url}/tweet-result"
        f"?id={tweet_id}&lang={options.language}&token={ANTI_CACHE_TOKEN}"
    )


def _provider_error(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return "Tweet not found"
    error = data.get("error")
    if error:
        return error if isinstance(error, str) else "Tweet not found"
    if not data.get("id_str"):
        return "Tweet not found"
    return None


def _parse_response(response: httpx.Response) -> SyndicationRecord:
    if response.status_code >= 400:
        if response.status_code == 404:
            raise TweetNotFoundError("Tweet not found")
        raise ApiError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )

    body = response.text
    if not body:
        raise ApiError("Empty response from API")

    try:
        data = json.loads(body)
    except ValueError as error:
        raise ApiError(f"Malformed response from API: {error}") from error

    not_found = _provider_error(data)
    if not_found:
        raise TweetNotFoundError(not_found)

    return data


async def _send(client: httpx.AsyncClient, api_url: str, timeout_seconds: float) -> httpx.Response:
    # wait_for cancels the request on expiry, which releases the connection
    return await asyncio.wait_for(
        client.get(api_url, headers=REQUEST_HEADERS, timeout=timeout_seconds),
        timeout=timeout_seconds,
    )


async def fetch_syndication(
    tweet_id: str,
    options: TweetServiceConfig = DEFAULT_CONFIG,
    client: Optional[httpx.AsyncClient] = None,
) -> SyndicationRecord:
    """
    Fetch the raw syndication record for one tweet id. Single attempt, no retry.

    A caller-supplied client is left open; otherwise one is created per call.

    Raises:
        TweetNotFoundError: HTTP 404, an error payload, or no id in the payload
        NetworkTimeoutError: the request exceeded options.timeout_ms
        ApiError: any other HTTP failure, empty/malformed body, network error
    """
    api_url = build_api_url(tweet_id, options)
    timeout_seconds = options.timeout_ms / 1000

    try:
        if client is not None:
            response = await _send(client, api_url, timeout_seconds)
        else:
            async with httpx.AsyncClient(timeout=timeout_seconds) as own_client:
                response = await _send(own_client, api_url, timeout_seconds)
    except (asyncio.TimeoutError, httpx.TimeoutException) as error:
        logger.warning("syndication.timeout id=%s timeout_ms=%d", tweet_id, options.timeout_ms)
        raise NetworkTimeoutError(timeout_ms=options.timeout_ms) from error
    except httpx.RequestError as error:
        logger.warning("syndication.network_error id=%s error=%s", tweet_id, error)
        raise ApiError(str(error) or error.__class__.__name__) from error

    logger.debug("syndication.response id=%s status=%d", tweet_id, response.status_code)
    return _parse_response(response)
