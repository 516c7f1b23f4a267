# src/readability_bridge/reader/style.py
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SEPIA = "sepia"
    AUTO = "auto"


class FontSize(str, Enum):
    XSMALL = "xsmall"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"
    XXLARGE = "xxlarge"

    def bigger(self) -> "FontSize":
        """Next size up; the largest size stays where it is."""
        sizes = list(FontSize)
        return sizes[min(sizes.index(self) + 1, len(sizes) - 1)]

    def smaller(self) -> "FontSize":
        """Next size down; the smallest size stays where it is."""
        sizes = list(FontSize)
        return sizes[max(sizes.index(self) - 1, 0)]


class FontFamily(str, Enum):
    SANS_SERIF = "sans-serif"
    SERIF = "serif"
    MONOSPACE = "monospace"


@dataclass(frozen=True)
class ReaderStyle:
    """
    Presentation of the reader overlay.

    Serialized as ``{"theme": ..., "fontSize": ..., "font": ...}``, the shape
    the injected control script decodes.
    """

    theme: Theme = Theme.AUTO
    font_size: FontSize = FontSize.MEDIUM
    font: FontFamily = FontFamily.SANS_SERIF

    def with_theme(self, theme: Theme) -> "ReaderStyle":
        return replace(self, theme=theme)

    def with_font_size(self, font_size: FontSize) -> "ReaderStyle":
        return replace(self, font_size=font_size)

    def with_font(self, font: FontFamily) -> "ReaderStyle":
        return replace(self, font=font)

    def to_dict(self) -> dict[str, str]:
        return {
            "theme": self.theme.value,
            "fontSize": self.font_size.value,
            "font": self.font.value,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReaderStyle":
        """Decode the serialized shape; unknown tags raise ValueError."""
        return cls(
            theme=Theme(data["theme"]),
            font_size=FontSize(data["fontSize"]),
            font=FontFamily(data["font"]),
        )

    @classmethod
    def from_json(cls, raw: str) -> "ReaderStyle":
        return cls.from_dict(json.loads(raw))
