from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

Theme = Literal["light", "dark", "dim", "black"]
FontSize = Literal["small", "medium", "large"]

THEMES = ("light", "dark", "dim", "black")
FONT_SIZES = {"small": "14px", "medium": "15px", "large": "18px"}

DEFAULT_ACCENT_COLOR = "#1d9bf0"
DEFAULT_WIDTH = "550px"


@dataclass(frozen=True)
class RenderOptions:
    """Display options for the HTML card. Every field has its own default."""
    theme: Theme = "light"
    hide_media: bool = False
    hide_metrics: bool = False
    hide_border: bool = False
    hide_timestamp: bool = False
    hide_footer: bool = False
    bg_transparent: bool = False
    accent_color: str = DEFAULT_ACCENT_COLOR
    width: str = DEFAULT_WIDTH
    font_size: FontSize = "medium"

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "RenderOptions":
        """Build options from query parameters; unknown values fall back to defaults."""
        theme = params.get("theme")
        font_size = params.get("font_size")
        return cls(
            theme=theme if theme in THEMES else "light",  # type: ignore[arg-type]
            hide_media=_flag(params.get("hide_media")),
            hide_metrics=_flag(params.get("hide_metrics")),
            hide_border=_flag(params.get("hide_border")),
            hide_timestamp=_flag(params.get("hide_timestamp")),
            hide_footer=_flag(params.get("hide_footer")),
            bg_transparent=_flag(params.get("bg_transparent")),
            accent_color=params.get("accent_color") or DEFAULT_ACCENT_COLOR,
            width=params.get("width") or DEFAULT_WIDTH,
            font_size=font_size if font_size in FONT_SIZES else "medium",  # type: ignore[arg-type]
        )

    @property
    def font_size_px(self) -> str:
        return FONT_SIZES.get(self.font_size, FONT_SIZES["medium"])


def _flag(value: Optional[str]) -> bool:
    return value == "true"
