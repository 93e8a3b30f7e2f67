from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict

MediaType = Literal["photo", "video"]


# Provider payload (cdn.syndication.twimg.com/tweet-result)

class SyndicationUser(TypedDict, total=False):
    id_str: str
    name: str
    screen_name: str
    profile_image_url_https: str
    verified: bool


class SyndicationPhoto(TypedDict, total=False):
    url: str
    width: int
    height: int


class SyndicationVideo(TypedDict, total=False):
    poster: str
    variants: List[Any]


class SyndicationRecord(TypedDict, total=False):
    id_str: str
    text: str
    created_at: str
    user: SyndicationUser
    favorite_count: int
    retweet_count: int
    reply_count: int
    quote_count: int
    photos: List[SyndicationPhoto]
    video: SyndicationVideo
    error: str


# Normalized model

@dataclass(frozen=True)
class Author:
    id: str
    name: str
    username: str
    avatar: str
    verified: bool = False


@dataclass(frozen=True)
class Metrics:
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    quotes: int = 0


@dataclass(frozen=True)
class MediaItem:
    type: MediaType
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    thumbnail: Optional[str] = None
    variants: Tuple[Any, ...] = ()

    @property
    def image_url(self) -> Optional[str]:
        return self.url or self.thumbnail

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "url": self.url,
            "width": self.width,
            "height": self.height,
            "thumbnail": self.thumbnail,
        }
        if self.type == "video":
            data["variants"] = list(self.variants)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaItem":
        return cls(
            type=data.get("type", "photo"),
            url=data.get("url"),
            width=data.get("width"),
            height=data.get("height"),
            thumbnail=data.get("thumbnail"),
            variants=tuple(data.get("variants") or ()),
        )


@dataclass(frozen=True)
class TweetData:
    """Renderer-agnostic tweet. Built once per fetch and never mutated."""
    id: str
    url: str
    text: str
    created_at: str
    author: Author
    metrics: Metrics
    media: Tuple[MediaItem, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "text": self.text,
            "created_at": self.created_at,
            "author": {
                "id": self.author.id,
                "name": self.author.name,
                "username": self.author.username,
                "avatar": self.author.avatar,
                "verified": self.author.verified,
            },
            "metrics": {
                "likes": self.metrics.likes,
                "retweets": self.metrics.retweets,
                "replies": self.metrics.replies,
                "quotes": self.metrics.quotes,
            },
            "media": [item.to_dict() for item in self.media],
            "raw": copy.deepcopy(self.raw),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TweetData":
        author = data.get("author") or {}
        metrics = data.get("metrics") or {}
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            text=data.get("text", ""),
            created_at=data.get("created_at", ""),
            author=Author(
                id=author.get("id", ""),
                name=author.get("name", ""),
                username=author.get("username", ""),
                avatar=author.get("avatar", ""),
                verified=bool(author.get("verified", False)),
            ),
            metrics=Metrics(
                likes=metrics.get("likes", 0),
                retweets=metrics.get("retweets", 0),
                replies=metrics.get("replies", 0),
                quotes=metrics.get("quotes", 0),
            ),
            media=tuple(MediaItem.from_dict(item) for item in data.get("media") or ()),
            raw=copy.deepcopy(data.get("raw") or {}),
        )
