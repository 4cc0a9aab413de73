"""Turn a :class:`~pdfbuilder.document.Document` into numbered PDF objects and bytes.

Object layout, in numbering order:

1. one font object per standard font referenced by any page;
2. one image XObject per embedded image referenced by any page;
3. per page, its content stream followed by its page object;
4. the Pages tree, after which every page is given its ``/Parent``;
5. the Catalog;
6. the document information dictionary.

Numbering starts again at 1 on every call, so repeated serialization of the
same document yields identical bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from .fonts import get_font
from .primitives import PDFName, PDFObject
from .serializer import render_pdf

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document, Metadata
    from .images import EmbeddedImage

logger = logging.getLogger(__name__)


@dataclass
class ObjectGraph:
    """Objects created during a single serialization pass."""

    objects: List[PDFObject] = field(default_factory=list)
    next_number: int = 1
    fonts: Dict[str, PDFObject] = field(default_factory=dict)
    images: Dict[str, PDFObject] = field(default_factory=dict)
    contents: List[PDFObject] = field(default_factory=list)
    pages: List[PDFObject] = field(default_factory=list)
    page_tree: Optional[PDFObject] = None
    catalog: Optional[PDFObject] = None
    info: Optional[PDFObject] = None

    def new_object(self, value=None, stream: Optional[bytes] = None) -> PDFObject:
        obj = PDFObject(number=self.next_number, value=value, stream=stream)
        self.next_number += 1
        self.objects.append(obj)
        return obj

    def trailer(self) -> dict:
        trailer = {"Root": self.catalog.reference()}
        if self.info is not None:
            trailer["Info"] = self.info.reference()
        return trailer


def build_object_graph(document: "Document") -> ObjectGraph:
    graph = ObjectGraph()

    for page in document.pages:
        for name in page.fonts:
            if name not in graph.fonts:
                font = get_font(name)
                if font is None:  # pragma: no cover - set_font only accepts standard fonts
                    logger.warning("Skipping unknown font resource %r on page %d", name, page.number)
                    continue
                graph.fonts[name] = graph.new_object(font.to_pdf_dict())

    for page in document.pages:
        for name in page.images:
            if name not in graph.images:
                graph.images[name] = graph.new_object(*_image_object(document.images[name]))

    for page in document.pages:
        content = graph.new_object({}, stream=bytes(page.content))
        resources: Dict[str, object] = {
            "Font": {name: graph.fonts[name].reference() for name in page.fonts if name in graph.fonts},
        }
        if page.images:
            resources["XObject"] = {name: graph.images[name].reference() for name in page.images}
        page_obj = graph.new_object(
            {
                "Type": PDFName("Page"),
                "MediaBox": [0, 0, page.width, page.height],
                "Contents": content.reference(),
                "Resources": resources,
            }
        )
        graph.contents.append(content)
        graph.pages.append(page_obj)

    graph.page_tree = graph.new_object(
        {
            "Type": PDFName("Pages"),
            "Kids": [page_obj.reference() for page_obj in graph.pages],
            "Count": len(graph.pages),
        }
    )
    for page_obj in graph.pages:
        page_obj.value["Parent"] = graph.page_tree.reference()

    graph.catalog = graph.new_object({"Type": PDFName("Catalog"), "Pages": graph.page_tree.reference()})
    graph.info = graph.new_object(_info_dict(document.metadata))
    return graph


def build_pdf(document: "Document") -> bytes:
    """Serialize *document* to a complete PDF 1.4 file."""

    graph = build_object_graph(document)
    data, _ = render_pdf(graph.objects, graph.trailer())
    logger.debug(
        "Serialized %d page(s) into %d objects, %d bytes", len(graph.pages), len(graph.objects), len(data)
    )
    return data


def _image_object(image: "EmbeddedImage") -> tuple:
    value = {
        "Type": PDFName("XObject"),
        "Subtype": PDFName("Image"),
        "Width": image.width,
        "Height": image.height,
        "ColorSpace": PDFName(image.color_space),
        "BitsPerComponent": 8,
        "Filter": PDFName("DCTDecode"),
    }
    return value, image.data


def pdf_date(value: datetime) -> str:
    """Format *value* as a PDF date string (``D:YYYYMMDDHHmmSS`` plus offset when known)."""

    text = value.strftime("D:%Y%m%d%H%M%S")
    offset = value.utcoffset()
    if offset is None:
        return text
    minutes = int(offset.total_seconds() // 60)
    if minutes == 0:
        return text + "Z"
    sign = "+" if minutes > 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}'{minutes:02d}'"


def _info_dict(metadata: "Metadata") -> Dict[str, object]:
    fields = (
        ("Title", metadata.title),
        ("Author", metadata.author),
        ("Subject", metadata.subject),
        ("Keywords", metadata.keywords),
        ("Creator", metadata.creator),
        ("Producer", metadata.producer),
    )
    info: Dict[str, object] = {key: value for key, value in fields if value}
    if metadata.creation_date is not None:
        info["CreationDate"] = pdf_date(metadata.creation_date)
    if metadata.mod_date is not None:
        info["ModDate"] = pdf_date(metadata.mod_date)
    return info


__all__ = ["ObjectGraph", "build_object_graph", "build_pdf", "pdf_date"]
