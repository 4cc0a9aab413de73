"""Text placement, font selection and simple paragraph layout."""

from __future__ import annotations

from enum import Enum
import logging
from typing import TYPE_CHECKING, Iterable, Optional

from .fonts import bold_variant, estimate_width, is_standard_font, italic_variant, regular_variant
from .serializer import literal_string

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document

logger = logging.getLogger(__name__)

BULLET = "•"


class TextAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    # Laid out as LEFT; there is no inter-word spacing support.
    JUSTIFY = "justify"


class TextMixin:
    """Text operations mixed into :class:`~pdfbuilder.document.Document`."""

    # ------------------------------------------------------------------
    # Font state
    # ------------------------------------------------------------------
    def set_font(self, name: str, size: float) -> "Document":
        """Select one of the standard fonts. Unknown names leave font and size unchanged."""

        if not is_standard_font(name):
            logger.warning("Unknown font %r ignored; keeping %s %.2f", name, self.font_name, self.font_size)
            return self
        self.font_name = name
        self.font_size = size
        return self

    def font(self, name: str) -> "Document":
        if not is_standard_font(name):
            logger.warning("Unknown font %r ignored; keeping %s", name, self.font_name)
            return self
        self.font_name = name
        return self

    def set_font_size(self, size: float) -> "Document":
        self.font_size = size
        return self

    size = set_font_size

    def set_line_height(self, multiplier: float) -> "Document":
        self.line_height = multiplier
        return self

    def bold(self) -> "Document":
        self.font_name = bold_variant(self.font_name)
        return self

    def italic(self) -> "Document":
        self.font_name = italic_variant(self.font_name)
        return self

    def regular(self) -> "Document":
        self.font_name = regular_variant(self.font_name)
        return self

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _write_text(self, text: str, x: float, y: float, font_name: Optional[str] = None) -> None:
        page = self._page()
        font_name = font_name or self.font_name
        page.use_font(font_name)
        page.emit(
            f"BT /{font_name} {self.font_size:.2f} Tf {x:.2f} {page.height - y:.2f} Td "
            f"{literal_string(text)} Tj ET"
        )

    def text(self, text: str) -> "Document":
        """Write *text* with its baseline at the cursor."""

        self._write_text(text, self.x, self.y)
        return self

    def text_at(self, x: float, y: float, text: str) -> "Document":
        self._write_text(text, x, y)
        return self

    def write_text(self, text: str) -> "Document":
        """Write inline and advance the cursor past the text."""

        self._write_text(text, self.x, self.y)
        self.x += self.text_width(text)
        return self

    def writef(self, template: str, *args, **kwargs) -> "Document":
        return self.write_text(template.format(*args, **kwargs))

    def write_line(self, text: str) -> "Document":
        return self.text(text).ln()

    def write_linef(self, template: str, *args, **kwargs) -> "Document":
        return self.write_line(template.format(*args, **kwargs))

    def center_text(self, text: str) -> "Document":
        self._page()
        x = self.margins.left + (self.content_width() - self.text_width(text)) / 2
        self._write_text(text, x, self.y)
        return self

    def right_text(self, text: str) -> "Document":
        page = self._page()
        x = page.width - self.margins.right - self.text_width(text)
        self._write_text(text, x, self.y)
        return self

    def text_width(self, text: str) -> float:
        return estimate_width(text, self.font_name, self.font_size)

    # ------------------------------------------------------------------
    # Line advance
    # ------------------------------------------------------------------
    def _advance_line(self) -> None:
        self.y += self.font_size * self.line_height
        if self.y > self.content_bottom():
            self.add_page()

    def ln(self) -> "Document":
        """Move to the start of the next line, breaking the page past the bottom margin."""

        self._page()
        self.x = self.margins.left
        self._advance_line()
        return self

    def br(self) -> "Document":
        """Move down one line keeping the current x."""

        self._page()
        x = self.x
        self._advance_line()
        self.x = x
        return self

    def paragraph(self, text: str) -> "Document":
        """Word-wrap *text* to the content width, one :meth:`ln` per line."""

        self._page()
        width = self.content_width()
        space_width = self.text_width(" ")
        line: list = []
        line_width = 0.0
        for word in text.split():
            word_width = self.text_width(word)
            if line and line_width + space_width + word_width > width:
                self.text(" ".join(line)).ln()
                line = []
                line_width = 0.0
            if line:
                line_width += space_width
            line.append(word)
            line_width += word_width
        if line:
            self.text(" ".join(line)).ln()
        return self

    # ------------------------------------------------------------------
    # Styled blocks
    # ------------------------------------------------------------------
    def _styled(self, size: float) -> tuple:
        saved = (self.font_name, self.font_size)
        self.bold().set_font_size(size)
        return saved

    def title(self, text: str) -> "Document":
        saved = self._styled(24)
        self.center_text(text).ln().ln()
        self.font_name, self.font_size = saved
        return self

    def heading(self, text: str) -> "Document":
        saved = self._styled(16)
        self.text(text).ln()
        self.font_name, self.font_size = saved
        return self

    def subheading(self, text: str) -> "Document":
        saved = self._styled(14)
        self.text(text).ln()
        self.font_name, self.font_size = saved
        return self

    def bullet_list(self, items: Iterable[str]) -> "Document":
        self._page()
        indent = self.font_size * 1.5
        for item in items:
            self.text(BULLET)
            self._write_text(item, self.x + indent, self.y)
            self.ln()
        return self

    def numbered_list(self, items: Iterable[str]) -> "Document":
        self._page()
        indent = self.font_size * 2
        for number, item in enumerate(items, start=1):
            self.text(f"{number}.")
            self._write_text(item, self.margins.left + indent, self.y)
            self.ln()
        return self


__all__ = ["BULLET", "TextAlign", "TextMixin"]
