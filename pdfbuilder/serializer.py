"""Helpers for serialising Python structures into PDF syntax and file layout."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterable, List, Tuple

from .primitives import PDFName, PDFObject, PDFReference

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n"
BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"
EOF_MARKER = b"%%EOF\n"
FREE_ENTRY = b"0000000000 65535 f \n"

TEXT_ENCODING = "cp1252"


def encode_text(value: str) -> bytes:
    """Encode *value* for a standard font using WinAnsi (cp1252).

    Characters outside the encoding are replaced with ``?``.
    """

    try:
        return value.encode(TEXT_ENCODING)
    except UnicodeEncodeError:
        logger.warning("Text contains characters outside %s, replacing them: %r", TEXT_ENCODING, value)
        return value.encode(TEXT_ENCODING, errors="replace")


def escape_bytes(data: bytes) -> str:
    """Escape *data* for use inside a ``( ... )`` literal string.

    The result is pure ASCII; bytes outside the printable range become octal
    escapes.
    """

    parts: List[str] = []
    for byte in data:
        char = chr(byte)
        if char in "\\()":
            parts.append("\\" + char)
        elif char == "\n":
            parts.append("\\n")
        elif char == "\r":
            parts.append("\\r")
        elif char == "\t":
            parts.append("\\t")
        elif 32 <= byte < 127:
            parts.append(char)
        else:
            parts.append(f"\\{byte:03o}")
    return "".join(parts)


def literal_string(value: str) -> str:
    return f"({escape_bytes(encode_text(value))})"


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def serialize(value) -> bytes:
    if isinstance(value, PDFName):
        return str(value).encode("latin-1")
    if isinstance(value, PDFReference):
        return f"{value.number} {value.generation} R".encode("ascii")
    if isinstance(value, bool):
        return b"true" if value else b"false"
    if value is None:
        return b"null"
    if isinstance(value, (int, float)):
        return format_number(value).encode("ascii")
    if isinstance(value, str):
        return literal_string(value).encode("ascii")
    if isinstance(value, bytes):
        return b"<" + value.hex().encode("ascii") + b">"
    if isinstance(value, dict):
        parts = [b"<<"]
        for key, item in value.items():
            if isinstance(key, PDFName):
                key_bytes = serialize(key)
            elif isinstance(key, str):
                key_bytes = serialize(PDFName(key))
            else:
                raise TypeError(f"Unsupported key type: {type(key)!r}")
            parts.append(b" " + key_bytes + b" " + serialize(item))
        parts.append(b" >>")
        return b"".join(parts)
    if isinstance(value, (list, tuple)):
        items = b" ".join(serialize(item) for item in value)
        return b"[" + items + b"]"
    raise TypeError(f"Unsupported value type: {type(value)!r}")


def serialize_object(obj: PDFObject) -> bytes:
    """Render one indirect object, ``N 0 obj`` through ``endobj``."""

    buffer = io.BytesIO()
    buffer.write(f"{obj.number} {obj.generation} obj\n".encode("ascii"))
    if obj.stream is not None:
        dictionary = dict(obj.value or {})
        dictionary["Length"] = len(obj.stream)
        buffer.write(serialize(dictionary))
        buffer.write(b"\nstream\n")
        buffer.write(obj.stream)
        buffer.write(b"\nendstream")
    else:
        buffer.write(serialize(obj.value))
    buffer.write(b"\nendobj\n")
    return buffer.getvalue()


def write_pdf(objects: Iterable[PDFObject], trailer: dict, sink: BinaryIO) -> int:
    """Write a complete PDF file to *sink* and return the number of bytes written.

    *objects* must be numbered ``1 .. N`` without gaps. ``/Size`` is filled in
    on the trailer.
    """

    data, _ = render_pdf(objects, trailer)
    sink.write(data)
    return len(data)


def render_pdf(objects: Iterable[PDFObject], trailer: dict) -> Tuple[bytes, List[int]]:
    """Lay out header, objects, xref table and trailer.

    Returns the file bytes and the recorded byte offset of every object.
    """

    ordered = sorted(objects, key=lambda obj: obj.number)
    for expected, obj in enumerate(ordered, start=1):
        if obj.number != expected:
            raise ValueError(f"PDF object numbers must be contiguous, found {obj.number} at position {expected}")

    buffer = io.BytesIO()
    buffer.write(PDF_HEADER)
    buffer.write(BINARY_MARKER)

    offsets: List[int] = []
    for obj in ordered:
        offsets.append(buffer.tell())
        buffer.write(serialize_object(obj))

    xref_offset = buffer.tell()
    size = len(ordered) + 1
    buffer.write(f"xref\n0 {size}\n".encode("ascii"))
    buffer.write(FREE_ENTRY)
    for offset in offsets:
        buffer.write(f"{offset:010d} 00000 n \n".encode("ascii"))

    trailer_dict = {"Size": size}
    trailer_dict.update((key, value) for key, value in trailer.items() if key != "Size")
    buffer.write(b"trailer\n")
    buffer.write(serialize(trailer_dict))
    buffer.write(b"\nstartxref\n")
    buffer.write(f"{xref_offset}\n".encode("ascii"))
    buffer.write(EOF_MARKER)
    return buffer.getvalue(), offsets


__all__ = [
    "BINARY_MARKER",
    "EOF_MARKER",
    "FREE_ENTRY",
    "PDF_HEADER",
    "encode_text",
    "escape_bytes",
    "format_number",
    "literal_string",
    "render_pdf",
    "serialize",
    "serialize_object",
    "write_pdf",
]
