from __future__ import annotations

import math
from typing import Any, List

from .ids import CANONICAL_HOST
from .types import Author, MediaItem, Metrics, SyndicationRecord, TweetData


def _clean_string(value: object) -> str:
    return value if isinstance(value, str) else ""


def _safe_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return int(value)


def _optional_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value) if math.isfinite(value) else None


def parse_media(record: SyndicationRecord) -> List[MediaItem]:
    """Photos first (input order, url required), then at most one video."""
    media: List[MediaItem] = []

    photos = record.get("photos")
    if isinstance(photos, list):
        for photo in photos:
            if not isinstance(photo, dict) or not photo.get("url"):
                continue
            media.append(
                MediaItem(
                    type="photo",
                    url=photo["url"],
                    width=_optional_int(photo.get("width")),
                    height=_optional_int(photo.get("height")),
                )
            )

    video = record.get("video")
    if isinstance(video, dict):
        variants: Any = video.get("variants")
        media.append(
            MediaItem(
                type="video",
                thumbnail=video.get("poster") or None,
                variants=tuple(variants) if isinstance(variants, list) else (),
            )
        )

    return media


def normalize(record: SyndicationRecord) -> TweetData:
    user = record.get("user")
    if not isinstance(user, dict):
        user = {}

    tweet_id = _clean_string(record.get("id_str"))
    screen_name = _clean_string(user.get("screen_name"))

    return TweetData(
        id=tweet_id,
        url=f"https://{CANONICAL_HOST}/{screen_name}/status/{tweet_id}",
        text=_clean_string(record.get("text")),
        created_at=_clean_string(record.get("created_at")),
        author=Author(
            id=_clean_string(user.get("id_str")),
            name=_clean_string(user.get("name")),
            username=screen_name,
            avatar=_clean_string(user.get("profile_image_url_https")),
            verified=bool(user.get("verified")),
        ),
        metrics=Metrics(
            likes=_safe_count(record.get("favorite_count")),
            retweets=_safe_count(record.get("retweet_count")),
            replies=_safe_count(record.get("reply_count")),
            quotes=_safe_count(record.get("quote_count")),
        ),
        media=tuple(parse_media(record)),
        raw=dict(record),
    )
