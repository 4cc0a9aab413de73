"""Document and page state for the PDF builder.

A :class:`Document` is built by calling drawing, text and table operations
in any order; each call appends operators to the current page's content
buffer and returns the document so calls can be chained::

    doc = Document().add_page().heading("Report").paragraph(body)
    doc.save("report.pdf")

Positions handed to drawing calls are in points measured from the top-left
corner of the page, y growing downward. They are converted to PDF's
bottom-up space when each operator is written, using the height of the page
being drawn on.

Nothing is numbered or laid out as PDF objects until :meth:`Document.write`,
:meth:`Document.save` or :meth:`Document.to_bytes` runs the serialization
pass, which rebuilds the whole object graph every time.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
import io
import logging
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

from .drawing import DrawingMixin
from .fonts import DEFAULT_FONT
from .geometry import LETTER, Margins, Orientation, PageSize
from .images import EmbeddedImage
from .table import TableMixin
from .text import TextMixin

logger = logging.getLogger(__name__)

DEFAULT_PRODUCER = "pdfbuilder"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_HEIGHT = 1.2


@dataclass
class Metadata:
    title: str = ""
    author: str = ""
    subject: str = ""
    keywords: str = ""
    creator: str = ""
    producer: str = DEFAULT_PRODUCER
    creation_date: Optional[datetime] = field(default_factory=datetime.now)
    mod_date: Optional[datetime] = field(default_factory=datetime.now)


@dataclass
class Page:
    """One page: its size and the raw operators drawn on it."""

    number: int
    size: PageSize
    orientation: Orientation = Orientation.PORTRAIT
    content: bytearray = field(default_factory=bytearray)
    fonts: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    def emit(self, *operators: str) -> None:
        for operator in operators:
            self.content += operator.encode("ascii")
            self.content += b"\n"

    def use_font(self, name: str) -> None:
        if name not in self.fonts:
            self.fonts.append(name)

    def use_image(self, name: str) -> None:
        if name not in self.images:
            self.images.append(name)


class Document(DrawingMixin, TextMixin, TableMixin):
    """A PDF document under construction.

    Not safe for concurrent use: every call mutates the document in place.
    """

    def __init__(
        self,
        page_size: PageSize = LETTER,
        orientation: Orientation = Orientation.PORTRAIT,
        margins: Optional[Margins] = None,
    ) -> None:
        self.pages: List[Page] = []
        self.current_page: Optional[Page] = None
        self.images: Dict[str, EmbeddedImage] = {}
        self.metadata = Metadata()
        self.page_size = page_size
        self.orientation = orientation
        self.margins = margins if margins is not None else Margins()
        self.x = 0.0
        self.y = 0.0
        self.font_name = DEFAULT_FONT
        self.font_size = DEFAULT_FONT_SIZE
        self.line_height = DEFAULT_LINE_HEIGHT

    # ------------------------------------------------------------------
    # Page setup
    # ------------------------------------------------------------------
    def set_page_size(self, size: PageSize) -> "Document":
        """Set the size used by pages added from now on."""

        self.page_size = size
        return self

    def set_orientation(self, orientation: Orientation) -> "Document":
        self.orientation = orientation
        return self

    def set_margins(self, top: float, right: float, bottom: float, left: float) -> "Document":
        self.margins = Margins(top=top, right=right, bottom=bottom, left=left)
        return self

    def add_page(self) -> "Document":
        """Append a page, make it current and put the cursor at the top-left of its content area."""

        size = self.page_size
        if self.orientation is Orientation.LANDSCAPE:
            size = size.rotated()
        page = Page(number=len(self.pages) + 1, size=size, orientation=self.orientation)
        self.pages.append(page)
        self.current_page = page
        self.x = self.margins.left
        self.y = self.margins.top
        logger.debug("Added page %d (%.2f x %.2f)", page.number, size.width, size.height)
        return self

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def page_number(self) -> int:
        """1-based number of the current page, 0 before any page exists."""

        return self.current_page.number if self.current_page else 0

    def _page(self) -> Page:
        if self.current_page is None:
            self.add_page()
        return self.current_page

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------
    def set_pos(self, x: float, y: float) -> "Document":
        self.x = x
        self.y = y
        return self

    def get_pos(self) -> Tuple[float, float]:
        return self.x, self.y

    def move_to(self, x: float, y: float) -> "Document":
        """Move the cursor relative to the top-left corner of the content area."""

        self._page()
        self.x = self.margins.left + x
        self.y = self.margins.top + y
        return self

    def _current_size(self) -> PageSize:
        if self.current_page is not None:
            return self.current_page.size
        if self.orientation is Orientation.LANDSCAPE:
            return self.page_size.rotated()
        return self.page_size

    def content_width(self) -> float:
        return self._current_size().width - self.margins.left - self.margins.right

    def content_height(self) -> float:
        return self._current_size().height - self.margins.top - self.margins.bottom

    def content_bottom(self) -> float:
        """Top-down y of the bottom margin on the current page."""

        return self._current_size().height - self.margins.bottom

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    def set_metadata(self, metadata: Metadata) -> "Document":
        """Use a copy of *metadata* with producer and dates filled in where missing."""

        now = datetime.now()
        self.metadata = replace(
            metadata,
            producer=metadata.producer or DEFAULT_PRODUCER,
            creation_date=metadata.creation_date or now,
            mod_date=metadata.mod_date or now,
        )
        return self

    def set_title(self, title: str) -> "Document":
        self.metadata.title = title
        return self

    def set_author(self, author: str) -> "Document":
        self.metadata.author = author
        return self

    def set_subject(self, subject: str) -> "Document":
        self.metadata.subject = subject
        return self

    def set_keywords(self, keywords: str) -> "Document":
        self.metadata.keywords = keywords
        return self

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def write(self, sink: BinaryIO) -> int:
        """Serialize the document to *sink*; returns the number of bytes written."""

        from .pdf_writer import build_pdf

        if not self.pages:
            self.add_page()
        data = build_pdf(self)
        sink.write(data)
        return len(data)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    def save(self, path: Union[str, Path]) -> Path:
        target = Path(path)
        with target.open("wb") as handle:
            self.write(handle)
        return target


def new_document(
    page_size: PageSize = LETTER,
    orientation: Orientation = Orientation.PORTRAIT,
    margins: Optional[Margins] = None,
) -> Document:
    return Document(page_size=page_size, orientation=orientation, margins=margins)


__all__ = ["Document", "Metadata", "Page", "new_document"]
