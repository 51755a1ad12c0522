"""Style lookups by code, with theme-aware color resolution."""

from dataclasses import dataclass

from ..models.components import ComponentBase
from ..models.styles import (
    AlignmentStyle,
    ColorStyle,
    ColorTheme,
    PaddingStyle,
    RoundStyle,
    StyleSet,
    TextStyle,
)

# Style reference codes used on components
TEXT_STYLE = "textStyle"
COLOR_STYLE = "colorStyle"
BACKGROUND_COLOR_STYLE = "backgroundColorStyle"
ALIGNMENT_STYLES = ("alignmentStyle", "alignStyle")
PADDING_STYLE = "paddingStyle"
ROUND_STYLE = "roundStyle"


@dataclass(frozen=True)
class ResolvedStyles:
    """Style records a component references; ``None`` where the code is unknown."""

    text: TextStyle | None = None
    color: ColorTheme | None = None
    background_color: ColorTheme | None = None
    alignment: AlignmentStyle | None = None
    padding: PaddingStyle | None = None
    round: RoundStyle | None = None


class StyleRegistry:
    """
    Read-only lookup tables over a ``StyleSet``.

    A missing code is never an error; lookups return ``None`` and the
    renderer keeps its defaults.
    """

    def __init__(self, styles: StyleSet | None = None, theme: str = "light") -> None:
        self._styles = styles or StyleSet()
        self.theme = theme

    @property
    def styles(self) -> StyleSet:
        return self._styles

    def text_style(self, code: str) -> TextStyle | None:
        return self._styles.text_styles.get(code)

    def color_style(self, code: str) -> ColorStyle | None:
        return self._styles.color_styles.get(code)

    def alignment_style(self, code: str) -> AlignmentStyle | None:
        return self._styles.alignment_styles.get(code)

    def padding_style(self, code: str) -> PaddingStyle | None:
        return self._styles.padding_styles.get(code)

    def round_style(self, code: str) -> RoundStyle | None:
        return self._styles.round_styles.get(code)

    def color(self, code: str, theme: str | None = None) -> ColorTheme | None:
        """Color for the given (or registry default) theme."""
        style = self.color_style(code)
        if style is None:
            return None
        return style.for_theme(theme or self.theme)

    def resolve_styles(self, component: ComponentBase, theme: str | None = None) -> ResolvedStyles:
        """Look up every style reference on ``component``."""

        def ref(*codes: str) -> str | None:
            for code in codes:
                if (value := component.style_code(code)) is not None:
                    return value
            return None

        text_code = ref(TEXT_STYLE)
        color_code = ref(COLOR_STYLE)
        background_code = ref(BACKGROUND_COLOR_STYLE)
        alignment_code = ref(*ALIGNMENT_STYLES)
        padding_code = ref(PADDING_STYLE)
        round_code = ref(ROUND_STYLE)

        return ResolvedStyles(
            text=self.text_style(text_code) if text_code else None,
            color=self.color(color_code, theme) if color_code else None,
            background_color=self.color(background_code, theme) if background_code else None,
            alignment=self.alignment_style(alignment_code) if alignment_code else None,
            padding=self.padding_style(padding_code) if padding_code else None,
            round=self.round_style(round_code) if round_code else None,
        )


__all__ = ["StyleRegistry", "ResolvedStyles"]
