"""Dependency-light PDF 1.4 writer: pages, text, shapes, images and tables."""

from .colors import BLACK, BLUE, CYAN, GRAY, GREEN, MAGENTA, RED, WHITE, YELLOW, Color, hex_color, rgb
from .document import Document, Metadata, Page, new_document
from .geometry import (
    A3,
    A4,
    A5,
    B4,
    B5,
    LEGAL,
    LETTER,
    TABLOID,
    Margins,
    Orientation,
    PageSize,
    cm,
    inches,
    mm,
)
from .images import ImageDecodeError
from .reader import PDFFile, PDFSyntaxError, parse_pdf
from .table import Table, TableColumn
from .text import TextAlign

__all__ = [
    "A3",
    "A4",
    "A5",
    "B4",
    "B5",
    "BLACK",
    "BLUE",
    "CYAN",
    "Color",
    "Document",
    "GRAY",
    "GREEN",
    "ImageDecodeError",
    "LEGAL",
    "LETTER",
    "MAGENTA",
    "Margins",
    "Metadata",
    "Orientation",
    "PDFFile",
    "PDFSyntaxError",
    "Page",
    "PageSize",
    "RED",
    "TABLOID",
    "Table",
    "TableColumn",
    "TextAlign",
    "WHITE",
    "YELLOW",
    "cm",
    "hex_color",
    "inches",
    "mm",
    "new_document",
    "parse_pdf",
    "rgb",
]
