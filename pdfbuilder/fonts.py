"""Registry of the 14 standard PDF fonts.

Standard fonts are referenced by name only; no glyph data is ever embedded.
Widths are estimated from a per-family average character width, which is
good enough for centring, right alignment and word wrapping but is not a
substitute for real font metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .primitives import PDFName


@dataclass(frozen=True)
class Font:
    name: str
    base_font: str
    family: str
    bold: bool = False
    italic: bool = False
    subtype: str = "Type1"
    symbolic: bool = False

    def to_pdf_dict(self) -> Dict[str, object]:
        value: Dict[str, object] = {
            "Type": PDFName("Font"),
            "Subtype": PDFName(self.subtype),
            "BaseFont": PDFName(self.base_font),
        }
        if not self.symbolic:
            value["Encoding"] = PDFName("WinAnsiEncoding")
        return value


def _font(name: str, family: str, bold: bool = False, italic: bool = False, symbolic: bool = False) -> Font:
    return Font(name=name, base_font=name, family=family, bold=bold, italic=italic, symbolic=symbolic)


STANDARD_FONTS: Dict[str, Font] = {
    font.name: font
    for font in (
        _font("Courier", "Courier"),
        _font("Courier-Bold", "Courier", bold=True),
        _font("Courier-Oblique", "Courier", italic=True),
        _font("Courier-BoldOblique", "Courier", bold=True, italic=True),
        _font("Helvetica", "Helvetica"),
        _font("Helvetica-Bold", "Helvetica", bold=True),
        _font("Helvetica-Oblique", "Helvetica", italic=True),
        _font("Helvetica-BoldOblique", "Helvetica", bold=True, italic=True),
        _font("Times-Roman", "Times"),
        _font("Times-Bold", "Times", bold=True),
        _font("Times-Italic", "Times", italic=True),
        _font("Times-BoldItalic", "Times", bold=True, italic=True),
        _font("Symbol", "Symbol", symbolic=True),
        _font("ZapfDingbats", "ZapfDingbats", symbolic=True),
    )
}

DEFAULT_FONT = "Helvetica"

# Average glyph width as a fraction of the font size.
_AVERAGE_WIDTHS = {
    "Courier": 0.6,
    "Times": 0.45,
}
_DEFAULT_AVERAGE_WIDTH = 0.5

_STYLE_INDEX: Dict[Tuple[str, bool, bool], str] = {
    (font.family, font.bold, font.italic): font.name for font in STANDARD_FONTS.values()
}


def get_font(name: str) -> Optional[Font]:
    return STANDARD_FONTS.get(name)


def is_standard_font(name: str) -> bool:
    return name in STANDARD_FONTS


def styled_variant(name: str, bold: Optional[bool] = None, italic: Optional[bool] = None) -> str:
    """Return the family member of *name* with the requested style flags.

    ``None`` keeps the flag of the current font. Families without style
    variants (Symbol, ZapfDingbats) and unknown names are returned unchanged.
    """

    font = STANDARD_FONTS.get(name)
    if font is None:
        return name
    key = (
        font.family,
        font.bold if bold is None else bold,
        font.italic if italic is None else italic,
    )
    return _STYLE_INDEX.get(key, name)


def bold_variant(name: str) -> str:
    return styled_variant(name, bold=True)


def italic_variant(name: str) -> str:
    return styled_variant(name, italic=True)


def regular_variant(name: str) -> str:
    return styled_variant(name, bold=False, italic=False)


def estimate_width(text: str, font_name: str, size: float) -> float:
    font = STANDARD_FONTS.get(font_name)
    family = font.family if font else font_name
    average = _AVERAGE_WIDTHS.get(family, _DEFAULT_AVERAGE_WIDTH)
    return len(text) * average * size


__all__ = [
    "DEFAULT_FONT",
    "Font",
    "STANDARD_FONTS",
    "bold_variant",
    "estimate_width",
    "get_font",
    "is_standard_font",
    "italic_variant",
    "regular_variant",
    "styled_variant",
]
