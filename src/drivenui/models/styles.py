"""Style records referenced from components by code."""

from pydantic import Field

from .base import FrozenModel


class TextStyle(FrozenModel):
    """Typography: family, size in sp and numeric weight (400 normal, 700 bold)."""

    code: str
    font_family: str = ""
    font_size: int = 0
    font_weight: int = 0


class ColorTheme(FrozenModel):
    """Color for one theme; opacity is a 0-100 percentage."""

    color: str = "#000000"
    opacity: int = 100

    @property
    def alpha(self) -> float:
        return min(max(self.opacity, 0), 100) / 100


class ColorStyle(FrozenModel):
    code: str
    light_theme: ColorTheme = Field(default_factory=ColorTheme)
    dark_theme: ColorTheme = Field(default_factory=ColorTheme)

    def for_theme(self, theme: str) -> ColorTheme:
        return self.dark_theme if theme == "dark" else self.light_theme


class AlignmentStyle(FrozenModel):
    code: str


class PaddingStyle(FrozenModel):
    code: str
    padding_left: int = 0
    padding_top: int = 0
    padding_right: int = 0
    padding_bottom: int = 0


class RoundStyle(FrozenModel):
    code: str
    radius_value: int = 0


class StyleSet(FrozenModel):
    """Five independent code → record tables.

    Codes are unique within a table; the same code may appear in several.
    """

    text_styles: dict[str, TextStyle] = Field(default_factory=dict)
    color_styles: dict[str, ColorStyle] = Field(default_factory=dict)
    alignment_styles: dict[str, AlignmentStyle] = Field(default_factory=dict)
    padding_styles: dict[str, PaddingStyle] = Field(default_factory=dict)
    round_styles: dict[str, RoundStyle] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (
            self.text_styles
            or self.color_styles
            or self.alignment_styles
            or self.padding_styles
            or self.round_styles
        )

    def counts(self) -> dict[str, int]:
        return {
            "text_styles": len(self.text_styles),
            "color_styles": len(self.color_styles),
            "alignment_styles": len(self.alignment_styles),
            "padding_styles": len(self.padding_styles),
            "round_styles": len(self.round_styles),
        }


__all__ = [
    "TextStyle",
    "ColorTheme",
    "ColorStyle",
    "AlignmentStyle",
    "PaddingStyle",
    "RoundStyle",
    "StyleSet",
]
