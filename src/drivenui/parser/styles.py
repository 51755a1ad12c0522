"""Style block parser (``<allStyles>``)."""

from lxml import etree

from ..models.styles import (
    AlignmentStyle,
    ColorStyle,
    ColorTheme,
    PaddingStyle,
    RoundStyle,
    StyleSet,
    TextStyle,
)
from .cursor import MarkupCursor, local_name


class StyleParser:
    """Reads the five style kinds; each kind has its own record parser."""

    def parse(self, markup: str) -> StyleSet:
        cursor = MarkupCursor(markup, section="styles")
        text_styles: dict[str, TextStyle] = {}
        color_styles: dict[str, ColorStyle] = {}
        alignment_styles: dict[str, AlignmentStyle] = {}
        padding_styles: dict[str, PaddingStyle] = {}
        round_styles: dict[str, RoundStyle] = {}

        # Style records may sit at any depth (textStyles/textStyle, allStyles/...)
        for element in cursor.starts():
            match local_name(element):
                case "textStyle":
                    style = self._text_style(cursor, element)
                    text_styles[style.code] = style
                case "colorStyle":
                    style = self._color_style(cursor, element)
                    color_styles[style.code] = style
                case "alignStyle" | "alignmentStyle":
                    style = self._alignment_style(cursor, element)
                    alignment_styles[style.code] = style
                case "paddingStyle":
                    style = self._padding_style(cursor, element)
                    padding_styles[style.code] = style
                case "roundStyle":
                    style = self._round_style(cursor, element)
                    round_styles[style.code] = style

        return StyleSet(
            text_styles=text_styles,
            color_styles=color_styles,
            alignment_styles=alignment_styles,
            padding_styles=padding_styles,
            round_styles=round_styles,
        )

    def _text_style(self, cursor: MarkupCursor, element: etree._Element) -> TextStyle:
        code = font_family = ""
        font_size = font_weight = 0
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "fontFamily":
                    font_family = cursor.text(child)
                case "fontSize":
                    font_size = cursor.int_text(child)
                case "fontWeight":
                    font_weight = cursor.int_text(child)
                case _:
                    cursor.skip(child)
        return TextStyle(code=code, font_family=font_family, font_size=font_size, font_weight=font_weight)

    def _color_style(self, cursor: MarkupCursor, element: etree._Element) -> ColorStyle:
        code = ""
        light = dark = ColorTheme()
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "lightTheme":
                    light = self._color_theme(cursor, child)
                case "darkTheme":
                    dark = self._color_theme(cursor, child)
                case _:
                    cursor.skip(child)
        return ColorStyle(code=code, light_theme=light, dark_theme=dark)

    def _color_theme(self, cursor: MarkupCursor, element: etree._Element) -> ColorTheme:
        color = "#000000"
        opacity = 100
        for child in cursor.children(element):
            match local_name(child):
                case "color":
                    color = cursor.text(child) or color
                case "opacity":
                    opacity = cursor.int_text(child, default=100)
                case _:
                    cursor.skip(child)
        return ColorTheme(color=color, opacity=opacity)

    def _alignment_style(self, cursor: MarkupCursor, element: etree._Element) -> AlignmentStyle:
        code = ""
        for child in cursor.children(element):
            if local_name(child) == "code":
                code = cursor.text(child)
            else:
                cursor.skip(child)
        return AlignmentStyle(code=code)

    def _padding_style(self, cursor: MarkupCursor, element: etree._Element) -> PaddingStyle:
        code = ""
        sides: dict[str, int] = {}
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "paddingLeft":
                    sides["padding_left"] = cursor.int_text(child)
                case "paddingTop":
                    sides["padding_top"] = cursor.int_text(child)
                case "paddingRight":
                    sides["padding_right"] = cursor.int_text(child)
                case "paddingBottom":
                    sides["padding_bottom"] = cursor.int_text(child)
                case _:
                    cursor.skip(child)
        return PaddingStyle(code=code, **sides)

    def _round_style(self, cursor: MarkupCursor, element: etree._Element) -> RoundStyle:
        code = ""
        radius = 0
        for child in cursor.children(element):
            match local_name(child):
                case "code":
                    code = cursor.text(child)
                case "radiusValue":
                    radius = cursor.int_text(child)
                case _:
                    cursor.skip(child)
        return RoundStyle(code=code, radius_value=radius)


__all__ = ["StyleParser"]
