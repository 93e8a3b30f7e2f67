from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from social_api.renderers.formatting import (
    format_count,
    format_relative_time,
    format_timestamp,
    parse_created_at,
)
from social_api.renderers.options import RenderOptions

CREATED = "2023-07-17T17:01:54.000Z"
CREATED_AT = datetime(2023, 7, 17, 17, 1, 54, tzinfo=timezone.utc)


class TestFormatCount:
    @pytest.mark.parametrize(
        "count,expected",
        [(0, "0"), (999, "999"), (1000, "1.0K"), (1234, "1.2K"), (2_500_000, "2.5M")],
    )
    def test_format(self, count: int, expected: str) -> None:
        assert format_count(count) == expected


class TestParseCreatedAt:
    def test_iso(self) -> None:
        assert parse_created_at(CREATED) == CREATED_AT

    def test_legacy(self) -> None:
        assert parse_created_at("Mon Jul 17 17:01:54 +0000 2023") == CREATED_AT

    def test_garbage(self) -> None:
        assert parse_created_at("yesterday") is None
        assert parse_created_at("") is None


class TestFormatRelativeTime:
    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=30), "30s"),
            (timedelta(minutes=5), "5m"),
            (timedelta(hours=2), "2h"),
            (timedelta(days=3), "3d"),
            (timedelta(weeks=2), "2w"),
            (timedelta(days=400), "1y"),
        ],
    )
    def test_buckets(self, delta: timedelta, expected: str) -> None:
        assert format_relative_time(CREATED, now=CREATED_AT + delta) == expected

    def test_unparseable(self) -> None:
        assert format_relative_time("not a date") == ""


class TestFormatTimestamp:
    def test_format(self) -> None:
        assert format_timestamp(CREATED) == "05:01 PM · Jul 17, 2023"

    def test_unparseable(self) -> None:
        assert format_timestamp("nope") is None


class TestRenderOptions:
    def test_defaults(self) -> None:
        options = RenderOptions.from_query({})
        assert options == RenderOptions()
        assert options.accent_color == "#1d9bf0"
        assert options.width == "550px"
        assert options.font_size_px == "15px"

    def test_flags_only_true_string(self) -> None:
        options = RenderOptions.from_query({"hide_media": "true", "hide_metrics": "1", "hide_footer": "yes"})
        assert options.hide_media is True
        assert options.hide_metrics is False
        assert options.hide_footer is False

    def test_invalid_values_fall_back(self) -> None:
        options = RenderOptions.from_query({"theme": "neon", "font_size": "huge"})
        assert options.theme == "light"
        assert options.font_size == "medium"

    def test_values(self) -> None:
        options = RenderOptions.from_query(
            {"theme": "dim", "font_size": "small", "accent_color": "#00ff00", "width": "100%"}
        )
        assert options.theme == "dim"
        assert options.font_size_px == "14px"
        assert options.accent_color == "#00ff00"
        assert options.width == "100%"
