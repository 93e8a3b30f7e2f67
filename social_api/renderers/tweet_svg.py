# social_api/renderers/tweet_svg.py
"""
SVG card for a tweet.

There is no font engine here: text width is estimated as
len(text) * font_size * 0.6, both for wrapping and for placing the handle
after the display name. The estimate is rough on purpose and kept stable.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional

from social_api.services.types import MediaItem, TweetData

from .formatting import format_count, format_relative_time
from .icons import HEART_OUTLINE_PATH, SHARE_PATH, VERIFIED_BADGE_PATH, X_LOGO_PATH

CONTENT_TYPE = "image/svg+xml"

CHAR_WIDTH_FACTOR = 0.6
MAX_LINES = 10

WIDTH = 600
PADDING = 20
AVATAR_SIZE = 40
FONT_SIZE = 15
LINE_HEIGHT = 20
MEDIA_HEIGHT = 200
ACTIONS_HEIGHT = 40
MIN_HEIGHT = 300
VERIFIED_BADGE_OFFSET = 22

FONT_FAMILY = "system-ui, -apple-system, sans-serif"

ERROR_WIDTH = 600
ERROR_HEIGHT = 200

_XML_FORBIDDEN_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def escape_svg(text: object) -> str:
    """Escape for XML text and attributes. Characters XML 1.0 forbids are dropped."""
    if text is None:
        return ""
    return (
        _XML_FORBIDDEN_RE.sub("", str(text))
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def get_text_width(text: str, font_size: float) -> float:
    return len(text) * font_size * CHAR_WIDTH_FACTOR


def wrap_text(text: str, max_width: float, font_size: float = FONT_SIZE) -> List[str]:
    """Greedy word wrap on spaces, capped at MAX_LINES lines."""
    lines: List[str] = []
    current = ""

    for word in (text or "").split(" "):
        candidate = f"{current} {word}" if current else word
        if get_text_width(candidate, font_size) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)

    return lines[:MAX_LINES]


def _first_drawable_media(tweet: TweetData) -> Optional[MediaItem]:
    for item in tweet.media:
        if item.image_url:
            return item
    return None


def compute_total_height(line_count: int, has_media: bool) -> int:
    height = (
        PADDING * 2
        + AVATAR_SIZE
        + line_count * LINE_HEIGHT
        + (MEDIA_HEIGHT + 10 if has_media else 0)
        + ACTIONS_HEIGHT
        + PADDING
    )
    return max(height, MIN_HEIGHT)


def generate_tweet_svg(tweet: TweetData, now: Optional[datetime] = None) -> str:
    content_x = PADDING * 2 + AVATAR_SIZE
    content_width = WIDTH - content_x - PADDING
    max_text_width = content_width - 20
    avatar_center = PADDING + AVATAR_SIZE / 2

    text_lines = wrap_text(tweet.text, max_text_width)
    text_height = len(text_lines) * LINE_HEIGHT
    media = _first_drawable_media(tweet)
    total_height = compute_total_height(len(text_lines), media is not None)

    y = PADDING + 20
    name_width = get_text_width(tweet.author.name, FONT_SIZE)
    handle_x = content_x + name_width + (VERIFIED_BADGE_OFFSET if tweet.author.verified else 0) + 4

    parts: List[str] = [
        "<!-- Background -->",
        f'<rect width="{WIDTH}" height="{total_height}" fill="#ffffff" rx="12"/>',
        "<!-- Avatar -->",
        "<defs>",
        '<clipPath id="avatar-clip">',
        f'<circle cx="{avatar_center:g}" cy="{avatar_center:g}" r="{AVATAR_SIZE / 2:g}"/>',
        "</clipPath>",
        "</defs>",
        f'<image href="{escape_svg(tweet.author.avatar)}" x="{PADDING}" y="{PADDING}" '
        f'width="{AVATAR_SIZE}" height="{AVATAR_SIZE}" clip-path="url(#avatar-clip)"/>',
        "<!-- Author name -->",
        f'<text x="{content_x}" y="{y}" font-family="{FONT_FAMILY}" font-size="{FONT_SIZE}" '
        f'font-weight="600" fill="#0f1419">{escape_svg(tweet.author.name)}</text>',
    ]

    if tweet.author.verified:
        parts.append(
            f'<g transform="translate({content_x + name_width + 4:g}, {y - 2})">'
            f'<path fill="#1d9bf0" d="{VERIFIED_BADGE_PATH}"/></g>'
        )

    relative = format_relative_time(tweet.created_at, now)
    handle = f"@{tweet.author.username}" + (f" · {relative}" if relative else "")
    parts += [
        "<!-- Handle and time -->",
        f'<text x="{handle_x:g}" y="{y}" font-family="{FONT_FAMILY}" font-size="{FONT_SIZE}" '
        f'fill="#536471">{escape_svg(handle)}</text>',
        "<!-- X logo -->",
        f'<g transform="translate({WIDTH - PADDING - 20}, {PADDING + 4})">'
        f'<path fill="#536471" opacity="0.4" d="{X_LOGO_PATH}" transform="scale(0.8)"/></g>',
        "<!-- Tweet text -->",
        f'<g transform="translate({content_x}, {y + LINE_HEIGHT + 8})">',
    ]
    for i, line in enumerate(text_lines):
        parts.append(
            f'<text x="0" y="{i * LINE_HEIGHT}" font-family="{FONT_FAMILY}" font-size="{FONT_SIZE}" '
            f'fill="#0f1419">{escape_svg(line)}</text>'
        )
    parts.append("</g>")

    y += text_height + LINE_HEIGHT + 16

    if media is not None:
        parts += [
            "<!-- Media -->",
            "<defs>",
            '<clipPath id="media-clip">',
            f'<rect x="{content_x}" y="{y}" width="{max_text_width}" height="{MEDIA_HEIGHT}" rx="12"/>',
            "</clipPath>",
            "</defs>",
            f'<image href="{escape_svg(media.image_url)}" x="{content_x}" y="{y}" width="{max_text_width}" '
            f'height="{MEDIA_HEIGHT}" preserveAspectRatio="xMidYMid slice" clip-path="url(#media-clip)"/>',
        ]
        y += MEDIA_HEIGHT + 10

    y += 5
    parts += [
        "<!-- Separator -->",
        f'<line x1="{content_x}" y1="{y}" x2="{WIDTH - PADDING}" y2="{y}" stroke="#eff3f4" stroke-width="1"/>',
    ]
    y += 15
    parts += [
        "<!-- Like -->",
        f'<g transform="translate({content_x}, {y})">',
        '<g transform="translate(9, 10)">',
        f'<path d="{HEART_OUTLINE_PATH}" fill="none" stroke="#536471" stroke-width="1.5" '
        'transform="scale(0.65) translate(-12, -12)"/>',
        "</g>",
        f'<text x="24" y="15" font-family="{FONT_FAMILY}" font-size="14" fill="#536471">'
        f"{format_count(tweet.metrics.likes)}</text>",
        "</g>",
        "<!-- Share -->",
        f'<g transform="translate({content_x + 100}, {y})">',
        '<g transform="translate(9, 10)">',
        f'<path d="{SHARE_PATH}" fill="none" stroke="#536471" stroke-width="1.5" stroke-linecap="round" '
        'stroke-linejoin="round" transform="scale(0.65) translate(-12, -12)"/>',
        "</g>",
        f'<text x="24" y="15" font-family="{FONT_FAMILY}" font-size="14" fill="#536471">Share</text>',
        "</g>",
    ]

    body = "\n  ".join(parts)
    return (
        f'<svg width="{WIDTH}" height="{total_height}" viewBox="0 0 {WIDTH} {total_height}" '
        f'xmlns="http://www.w3.org/2000/svg">\n  {body}\n</svg>'
    )


def generate_error_svg(message: str, request_id: Optional[str] = None) -> str:
    return (
        f'<svg width="{ERROR_WIDTH}" height="{ERROR_HEIGHT}" xmlns="http://www.w3.org/2000/svg">\n'
        f'  <rect width="{ERROR_WIDTH}" height="{ERROR_HEIGHT}" fill="#ffffff" rx="12"/>\n'
        f'  <text x="{ERROR_WIDTH // 2}" y="80" text-anchor="middle" font-family="system-ui" '
        f'font-size="16" fill="#ef4444">{escape_svg(message)}</text>\n'
        f'  <text x="{ERROR_WIDTH // 2}" y="110" text-anchor="middle" font-family="system-ui" '
        f'font-size="12" fill="#666666">ID: {escape_svg(request_id or "unknown")}</text>\n'
        "</svg>"
    )
