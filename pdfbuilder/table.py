"""Column-based table layout with header repeat across page breaks.

A :class:`Table` is a transient helper: it collects a header and rows, then
:meth:`Table.draw` writes everything to the document in one go. Rows are
laid out top to bottom from the document cursor; when a row does not fit
above the bottom margin a new page is added and the header is drawn again
before the row.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Sequence, Tuple

from .colors import BLACK, Color, rgb
from .fonts import bold_variant, estimate_width, is_standard_font
from .text import TextAlign

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document

logger = logging.getLogger(__name__)

DEFAULT_CELL_PADDING = 4.0
DEFAULT_BORDER_WIDTH = 0.5
DEFAULT_HEADER_BACKGROUND = rgb(220, 220, 220)

# Baseline offset below the top padding, as a fraction of the font size.
_BASELINE_RATIO = 0.8


@dataclass
class TableColumn:
    width: float
    align: TextAlign = TextAlign.LEFT


class Table:
    def __init__(self, document: "Document", widths: Sequence[float]) -> None:
        self.doc = document
        self.x = document.x
        self.y = document.y
        self.columns: List[TableColumn] = [TableColumn(width=float(width)) for width in widths]
        self.header_row: List[str] = []
        self.rows: List[List[str]] = []
        self.cell_padding = DEFAULT_CELL_PADDING
        self.border_width = DEFAULT_BORDER_WIDTH
        self.border_color = BLACK
        self.header_bg = DEFAULT_HEADER_BACKGROUND
        self.header_fg = BLACK
        self.alt_row_bg: Optional[Color] = None
        self.font_name = document.font_name
        self.font_size = document.font_size

    @property
    def width(self) -> float:
        return sum(column.width for column in self.columns)

    @property
    def row_height(self) -> float:
        return self.font_size + self.cell_padding * 2

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_cell_padding(self, padding: float) -> "Table":
        self.cell_padding = padding
        return self

    def set_border(self, width: float, color: Color) -> "Table":
        self.border_width = width
        self.border_color = color
        return self

    def set_header_style(self, background: Color, foreground: Color) -> "Table":
        self.header_bg = background
        self.header_fg = foreground
        return self

    def set_alternate_row_color(self, color: Color) -> "Table":
        self.alt_row_bg = color
        return self

    def set_font(self, name: str, size: float) -> "Table":
        if not is_standard_font(name):
            logger.warning("Unknown table font %r ignored; keeping %s", name, self.font_name)
            return self
        self.font_name = name
        self.font_size = size
        return self

    def set_column_align(self, column: int, align: TextAlign) -> "Table":
        if 0 <= column < len(self.columns):
            self.columns[column].align = align
        return self

    def header(self, *cells: object) -> "Table":
        self.header_row = [str(cell) for cell in cells]
        return self

    def row(self, *cells: object) -> "Table":
        self.rows.append([str(cell) for cell in cells])
        return self

    def add_rows(self, rows: Iterable[Sequence[object]]) -> "Table":
        for cells in rows:
            self.row(*cells)
        return self

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def draw(self) -> "Document":
        """Draw header and rows, then leave the cursor below the table."""

        doc = self.doc
        doc._page()
        saved_font = (doc.font_name, doc.font_size)
        doc.font_name, doc.font_size = self.font_name, self.font_size

        # Colors and line width set for the grid stay inside q / Q on every page.
        drawing = bool(self.header_row or self.rows)
        if drawing:
            doc.save_state()

        y = self.y
        if self.header_row:
            if not self._fits(y) and y > doc.margins.top:
                y = self._break_page()
            y = self._draw_row(y, self.header_row, header=True)

        for index, cells in enumerate(self.rows):
            if not self._fits(y):
                y = self._break_page()
                if self.header_row:
                    y = self._draw_row(y, self.header_row, header=True)
            alternate = index % 2 == 1 and self.alt_row_bg is not None
            y = self._draw_row(y, cells, alternate=alternate)

        if drawing:
            doc.restore_state()
        doc.x = self.x
        doc.y = y
        doc.font_name, doc.font_size = saved_font
        return doc

    def _break_page(self) -> float:
        doc = self.doc
        doc.restore_state()
        doc.add_page()
        doc.save_state()
        return doc.y

    def _fits(self, y: float) -> bool:
        return y + self.row_height <= self.doc.content_bottom()

    def _draw_row(self, y: float, cells: Sequence[str], header: bool = False, alternate: bool = False) -> float:
        doc = self.doc
        row_height = self.row_height

        background = self.header_bg if header else (self.alt_row_bg if alternate else None)
        if background is not None:
            doc.set_fill_color(background)
            doc.rect_filled(self.x, y, self.width, row_height)

        doc.set_stroke_color(self.border_color)
        doc.set_line_width(self.border_width)
        doc.set_fill_color(self.header_fg if header else BLACK)

        font_name = bold_variant(self.font_name) if header else self.font_name
        text_y = y + self.cell_padding + self.font_size * _BASELINE_RATIO
        x = self.x
        for index, column in enumerate(self.columns):
            doc.rect(x, y, column.width, row_height)
            text = cells[index] if index < len(cells) else ""
            if text:
                text_x = self._aligned_x(x, column, estimate_width(text, font_name, self.font_size))
                doc._write_text(text, text_x, text_y, font_name=font_name)
            x += column.width
        return y + row_height

    def _aligned_x(self, x: float, column: TableColumn, text_width: float) -> float:
        if column.align is TextAlign.CENTER:
            return x + (column.width - text_width) / 2
        if column.align is TextAlign.RIGHT:
            return x + column.width - self.cell_padding - text_width
        return x + self.cell_padding


class TableMixin:
    """Table helpers mixed into :class:`~pdfbuilder.document.Document`."""

    def new_table(self, widths: Sequence[float]) -> Table:
        self._page()
        return Table(self, widths)

    def new_table_auto(self, columns: int) -> Table:
        """Table whose columns split the content width evenly."""

        self._page()
        if columns <= 0:
            return Table(self, [])
        width = self.content_width() / columns
        return Table(self, [width] * columns)

    def simple_table(self, headers: Sequence[str], rows: Iterable[Sequence[object]]) -> "Document":
        return self.new_table_auto(len(headers)).header(*headers).add_rows(rows).draw()

    def data_table(self, data: Mapping[str, object]) -> "Document":
        table = self.new_table_auto(2).header("Field", "Value")
        for key, value in data.items():
            table.row(key, value)
        return table.draw()

    def key_value_table(self, pairs: Iterable[Tuple[str, object]]) -> "Document":
        table = self.new_table_auto(2)
        table.set_column_align(0, TextAlign.RIGHT)
        for key, value in pairs:
            table.row(f"{key}:", value)
        return table.draw()


__all__ = ["Table", "TableColumn", "TableMixin"]
