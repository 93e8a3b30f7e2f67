from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

_LEGACY_TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %z %Y"


def format_count(count: int) -> str:
    """1234 -> '1.2K', 2500000 -> '2.5M'."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def parse_created_at(value: str) -> Optional[datetime]:
    """Parse ISO-8601 ('2023-07-17T17:01:54.000Z') or the legacy v1.1 format."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = datetime.strptime(value, _LEGACY_TIMESTAMP_FORMAT)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_relative_time(created_at: str, now: Optional[datetime] = None) -> str:
    """Twitter-style age: '30s', '5m', '2h', '3d', '52w', '1y'."""
    parsed = parse_created_at(created_at)
    if parsed is None:
        return ""
    now = now or datetime.now(timezone.utc)
    seconds = max(int((now - parsed).total_seconds()), 0)

    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3_600:
        return f"{seconds // 60}m"
    if seconds < 86_400:
        return f"{seconds // 3_600}h"
    if seconds < 604_800:
        return f"{seconds // 86_400}d"
    if seconds < 31_536_000:
        return f"{seconds // 604_800}w"
    return f"{seconds // 31_536_000}y"


def format_timestamp(created_at: str) -> Optional[str]:
    """'05:01 PM · Jul 17, 2023', or None when unparseable."""
    parsed = parse_created_at(created_at)
    if parsed is None:
        return None
    return f"{parsed.strftime('%I:%M %p')} · {parsed.strftime('%b')} {parsed.day}, {parsed.year}"
