# social_api/renderers/tweet_html.py
"""
Standalone HTML card for a tweet.
"""
from __future__ import annotations

import re
from typing import Callable, Optional

from social_api.services.types import MediaItem, TweetData

from .formatting import format_count, format_timestamp
from .icons import LIKE_PATH, PLAY_PATH, VERIFIED_BADGE_PATH, X_LOGO_PATH
from .options import RenderOptions

CONTENT_TYPE = "text/html; charset=utf-8"

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_ESCAPE_RE = re.compile(r"[&<>\"']")

_BLANK_LINES_RE = re.compile(r"\n{3,}")
_URL_RE = re.compile(r"(https?://[^\s]+)")
_MENTION_RE = re.compile(r"@(\w+)")
# Lookbehind keeps numeric entities such as &#039; intact
_HASHTAG_RE = re.compile(r"(?<!&)#(\w+)")
_ANCHOR_RE = re.compile(r"(<a [^>]*>.*?</a>)")
_QUOTE_MARKER = "&gt;"


def escape_html(text: object) -> str:
    if text is None:
        return ""
    return _HTML_ESCAPE_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], str(text))


def _outside_anchors(html: str, transform: Callable[[str], str]) -> str:
    parts = _ANCHOR_RE.split(html)
    # odd indexes are the captured anchors
    return "".join(part if i % 2 else transform(part) for i, part in enumerate(parts))


def _link(match: "re.Match[str]") -> str:
    url = match.group(1)
    return f'<a href="{url}" target="_blank" rel="noopener noreferrer" class="tweet-link">{url}</a>'


def _blockquote(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith(_QUOTE_MARKER):
        return f'<div class="tweet-blockquote">{stripped[len(_QUOTE_MARKER):]}</div>'
    return line


def process_tweet_text(text: Optional[str]) -> str:
    """
    Escape tweet text and add inline markup.

    Order matters: everything runs on escaped text, links first, and the
    mention/hashtag passes never look inside an anchor already emitted.
    Quote lines ("> ...") are handled last, per line.
    """
    if not text:
        return ""
    html = escape_html(text)
    html = _BLANK_LINES_RE.sub("\n\n", html)
    html = _URL_RE.sub(_link, html)
    html = _outside_anchors(html, lambda s: _MENTION_RE.sub(r'<span class="tweet-mention">@\1</span>', s))
    html = _outside_anchors(html, lambda s: _HASHTAG_RE.sub(r'<span class="tweet-hashtag">#\1</span>', s))
    return "\n".join(_blockquote(line) for line in html.split("\n"))


def _mp4_url(item: MediaItem) -> Optional[str]:
    for variant in item.variants:
        if not isinstance(variant, dict):
            continue
        if "video/mp4" in (variant.get("type"), variant.get("content_type")):
            url = variant.get("url") or variant.get("src")
            if url:
                return url
    return None


def _media_item_html(item: MediaItem) -> str:
    if item.type == "photo" and item.url:
        return f'<img src="{escape_html(item.url)}" alt="Tweet media" class="tweet-media" loading="lazy" />'
    if item.type != "video":
        return ""

    poster = escape_html(item.thumbnail)
    video_url = _mp4_url(item)
    if video_url:
        return (
            '<div class="video-container">'
            f'<video src="{escape_html(video_url)}" poster="{poster}" class="tweet-media" '
            'controls playsinline preload="metadata"></video>'
            "</div>"
        )
    return (
        '<div class="video-container">'
        f'<img src="{poster}" alt="Tweet video" class="tweet-media" loading="lazy" />'
        '<div class="video-play-button">'
        f'<svg viewBox="0 0 24 24" class="play-icon"><path fill="currentColor" d="{PLAY_PATH}"/></svg>'
        "</div></div>"
    )


def _theme_css(options: RenderOptions) -> str:
    def bg(color: str) -> str:
        return "transparent" if options.bg_transparent else color

    def shadow(value: str) -> str:
        return "none" if options.hide_border else value

    accent = escape_html(options.accent_color)
    return f"""
    :root {{
      --bg-color: {bg('#ffffff')};
      --card-bg: {bg('#ffffff')};
      --text-main: #0f1419;
      --text-sub: #536471;
      --border-color: #eff3f4;
      --accent-color: {accent};
      --link-color: {accent};
      --like-color: #f91880;
      --font-size: {options.font_size_px};
      --tweet-width: {escape_html(options.width)};
      --shadow: {shadow('0 2px 12px rgba(0, 0, 0, 0.08)')};
      --card-border: {'none' if options.hide_border else '1px solid var(--border-color)'};
    }}
    [data-theme="dim"] {{
      --bg-color: {bg('#15202b')};
      --card-bg: {bg('#15202b')};
      --text-main: #ffffff;
      --text-sub: #8b98a5;
      --border-color: #38444d;
      --shadow: {shadow('0 2px 12px rgba(0, 0, 0, 0.2)')};
    }}
    [data-theme="dark"], [data-theme="black"] {{
      --bg-color: {bg('#000000')};
      --card-bg: {bg('#000000')};
      --text-main: #e7e9ea;
      --text-sub: #71767b;
      --border-color: #2f3336;
      --shadow: none;
    }}"""


_BASE_CSS = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
      background: var(--bg-color);
      color: var(--text-main);
      display: flex;
      justify-content: center;
      align-items: center;
      min-height: 100vh;
      padding: 20px;
      line-height: 1.4;
    }
    .tweet-container { max-width: var(--tweet-width); width: 100%; }
    .tweet-card {
      background: var(--card-bg);
      border-radius: 12px;
      border: var(--card-border);
      padding: 16px;
      box-shadow: var(--shadow);
    }
    .tweet-header { display: flex; gap: 12px; margin-bottom: 12px; }
    .avatar { width: 48px; height: 48px; border-radius: 50%; object-fit: cover; }
    .author-meta { display: flex; flex-direction: column; flex: 1; min-width: 0; }
    .author-name-row { display: flex; align-items: center; gap: 4px; }
    .author-name, .author-handle {
      font-size: var(--font-size);
      white-space: nowrap;
      overflow: hidden;
      text-overflow: ellipsis;
    }
    .author-name { font-weight: 700; }
    .author-handle { color: var(--text-sub); }
    .verified-badge { width: 18px; height: 18px; color: var(--accent-color); flex-shrink: 0; }
    .x-logo { width: 18px; height: 18px; color: var(--text-main); margin-left: auto; }
    .tweet-text { font-size: var(--font-size); white-space: pre-wrap; word-wrap: break-word; margin-bottom: 12px; }
    .tweet-link, .tweet-mention, .tweet-hashtag { color: var(--link-color); text-decoration: none; }
    .tweet-link:hover { text-decoration: underline; }
    .tweet-blockquote { border-left: 3px solid var(--border-color); padding-left: 12px; margin: 8px 0; color: var(--text-sub); }
    .tweet-media-container {
      margin-top: 12px;
      border-radius: 12px;
      overflow: hidden;
      border: 1px solid var(--border-color);
      display: grid;
      gap: 2px;
    }
    .tweet-media { width: 100%; height: auto; max-height: 512px; object-fit: cover; display: block; }
    .video-container { position: relative; background: black; }
    .video-play-button {
      position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%);
      width: 56px; height: 56px; border-radius: 50%; background: var(--accent-color); color: #ffffff;
      display: flex; align-items: center; justify-content: center;
    }
    .play-icon { width: 28px; height: 28px; }
    .tweet-footer {
      margin-top: 12px;
      padding-top: 12px;
      border-top: 1px solid var(--border-color);
      display: flex;
      justify-content: space-between;
      align-items: center;
    }
    .like-count { display: flex; align-items: center; gap: 6px; color: var(--text-sub); font-size: 14px; font-weight: 500; }
    .like-icon { width: 20px; height: 20px; color: var(--like-color); }
    .share-link { color: var(--link-color); text-decoration: none; font-size: 14px; font-weight: 600; }
    .timestamp { color: var(--text-sub); font-size: 14px; margin-top: 12px; }
    @media (max-width: 500px) {
      body { padding: 10px; }
      .tweet-card { border-radius: 0; border-left: none; border-right: none; }
    }"""


def _timestamp_html(tweet: TweetData) -> str:
    formatted = format_timestamp(tweet.created_at)
    return f'<div class="timestamp">{escape_html(formatted or tweet.created_at)}</div>'


def _footer_html(tweet: TweetData, options: RenderOptions) -> str:
    if options.hide_metrics:
        metrics = "<div></div>"
    else:
        metrics = (
            '<div class="like-count">'
            f'<svg class="like-icon" fill="currentColor" viewBox="0 0 24 24"><path d="{LIKE_PATH}"/></svg>'
            f"<span>{format_count(tweet.metrics.likes)}</span>"
            "</div>"
        )
    return (
        '<footer class="tweet-footer">'
        f"{metrics}"
        f'<a href="{escape_html(tweet.url)}" target="_blank" rel="noopener noreferrer" class="share-link">View on X</a>'
        "</footer>"
    )


def generate_tweet_html(tweet: TweetData, options: Optional[RenderOptions] = None) -> str:
    """Render a full HTML document for the tweet."""
    options = options or RenderOptions()
    name = escape_html(tweet.author.name)
    username = escape_html(tweet.author.username)

    verified_badge = ""
    if tweet.author.verified:
        verified_badge = (
            '<svg viewBox="0 0 24 24" class="verified-badge" role="img" aria-label="Verified account">'
            f'<path fill="currentColor" d="{VERIFIED_BADGE_PATH}"/></svg>'
        )

    media_html = ""
    if not options.hide_media:
        media_html = "".join(_media_item_html(item) for item in tweet.media)
    media_block = f'<div class="tweet-media-container">{media_html}</div>' if media_html else ""

    timestamp_block = "" if options.hide_timestamp else _timestamp_html(tweet)
    footer_block = "" if options.hide_footer else _footer_html(tweet, options)

    return f"""<!DOCTYPE html>
<html lang="en" data-theme="{options.theme}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Tweet by {name} (@{username})</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
  <style>{_theme_css(options)}{_BASE_CSS}
  </style>
</head>
<body>
  <div class="tweet-container">
    <article class="tweet-card">
      <div class="tweet-header">
        <img src="{escape_html(tweet.author.avatar)}" alt="{name}" class="avatar" />
        <div class="author-meta">
          <div class="author-name-row">
            <span class="author-name">{name}</span>
            {verified_badge}
          </div>
          <span class="author-handle">@{username}</span>
        </div>
        <svg viewBox="0 0 24 24" class="x-logo" role="img" aria-label="X logo">
          <path fill="currentColor" d="{X_LOGO_PATH}"/>
        </svg>
      </div>
      <div class="tweet-body">
        <div class="tweet-text">{process_tweet_text(tweet.text)}</div>
        {media_block}
        {timestamp_block}
        {footer_block}
      </div>
    </article>
  </div>
</body>
</html>"""


def render_html_error(message: str) -> str:
    return f"<h1>Error</h1><p>{escape_html(message)}</p>"
