"""Inspection reader for files produced by this package.

Objects are located through the cross-reference table, so a file only reads
back cleanly when every xref offset points at the object it claims to, and
every stream's ``/Length`` matches its bytes. This is not a general PDF
parser: object streams, incremental updates and encryption are not handled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Dict, List, Tuple

from .primitives import PDFName, PDFObject, PDFReference
from .tokenizer import PDFHexString, PDFString, Token, TokenStream, tokenize


class PDFSyntaxError(RuntimeError):
    """Raised when the reader encounters malformed input."""


@dataclass(frozen=True)
class XrefEntry:
    offset: int
    generation: int
    kind: str


def _parse_value(tokens: TokenStream):
    token = tokens.pop()
    if token == "<<":
        result: Dict[str, object] = {}
        while tokens.peek() != ">>":
            key = tokens.pop()
            if not isinstance(key, PDFName):
                raise PDFSyntaxError("Expected PDF name inside dictionary")
            result[key.value] = _parse_value(tokens)
        tokens.pop()  # consume '>>'
        return result
    if token == "[":
        items = []
        while tokens.peek() != "]":
            items.append(_parse_value(tokens))
        tokens.pop()
        return items
    if isinstance(token, (PDFString, PDFHexString)):
        return token.value
    if isinstance(token, PDFName):
        return token
    if isinstance(token, int) and isinstance(tokens.peek(), int) and tokens.peek_n(1) == "R":
        generation = tokens.pop()
        tokens.pop()  # consume 'R'
        return PDFReference(token, generation)
    if token in ("true", "false"):
        return token == "true"
    if token == "null":
        return None
    return token


def _parse_body(body: bytes):
    try:
        return _parse_value(TokenStream(tokenize(body)))
    except ValueError as exc:
        raise PDFSyntaxError(str(exc)) from exc


def _parse_complete(body: bytes) -> Tuple[bool, object]:
    """Parse *body* as a single value; ``(False, None)`` when it is cut short or has trailing tokens."""

    try:
        tokens = TokenStream(tokenize(body))
        value = _parse_value(tokens)
    except (ValueError, PDFSyntaxError):
        return False, None
    return tokens.at_end(), value


_STARTXREF_RE = re.compile(rb"startxref\s+(\d+)\s+%%EOF\s*$")
_SUBSECTION_RE = re.compile(rb"xref\r?\n(\d+) (\d+)\r?\n")
_OBJECT_HEADER_RE = re.compile(rb"(\d+) (\d+) obj\s*")
_TRAILER_RE = re.compile(rb"trailer\s*(<<.*?>>)\s*startxref", re.S)
_XREF_ENTRY_SIZE = 20


def read_xref(data: bytes) -> Tuple[int, List[XrefEntry]]:
    """Return the ``startxref`` offset and the entries of the cross-reference table."""

    match = _STARTXREF_RE.search(data)
    if not match:
        raise PDFSyntaxError("startxref / %%EOF trailer missing")
    startxref = int(match.group(1))
    section = _SUBSECTION_RE.match(data, startxref)
    if not section:
        raise PDFSyntaxError(f"startxref {startxref} does not point at an xref table")
    first, count = int(section.group(1)), int(section.group(2))
    if first != 0:
        raise PDFSyntaxError("Only a single xref subsection starting at 0 is supported")

    entries: List[XrefEntry] = []
    position = section.end()
    for _ in range(count):
        raw = data[position : position + _XREF_ENTRY_SIZE]
        if len(raw) != _XREF_ENTRY_SIZE or raw[18:20] not in (b" \n", b" \r", b"\r\n"):
            raise PDFSyntaxError(f"Malformed xref entry at byte {position}: {raw!r}")
        entries.append(XrefEntry(offset=int(raw[0:10]), generation=int(raw[11:16]), kind=raw[17:18].decode("ascii")))
        position += _XREF_ENTRY_SIZE
    return startxref, entries


def _read_object(data: bytes, number: int, entry: XrefEntry) -> PDFObject:
    header = _OBJECT_HEADER_RE.match(data, entry.offset)
    if not header or int(header.group(1)) != number:
        raise PDFSyntaxError(f"xref entry {number} at byte {entry.offset} does not start '{number} 0 obj'")
    start = header.end()
    stream_marker = data.find(b"\nstream\n", start)
    # "endobj" may also occur inside a string; the real keyword is the first
    # one that follows exactly one complete value.
    end = data.find(b"endobj", start)
    while end != -1 and (stream_marker == -1 or stream_marker > end):
        complete, value = _parse_complete(data[start:end])
        if complete:
            return PDFObject(number=number, value=value, generation=entry.generation)
        end = data.find(b"endobj", end + len(b"endobj"))
    if end == -1:
        raise PDFSyntaxError(f"Object {number} has no endobj")

    dictionary = _parse_body(data[start:stream_marker])
    length = dictionary.get("Length") if isinstance(dictionary, dict) else None
    if not isinstance(length, int):
        raise PDFSyntaxError(f"Stream object {number} has no integer /Length")
    stream_start = stream_marker + len(b"\nstream\n")
    stream = data[stream_start : stream_start + length]
    if not data.startswith(b"\nendstream", stream_start + length):
        raise PDFSyntaxError(f"Stream object {number}: /Length {length} does not match its data")
    return PDFObject(number=number, value=dictionary, stream=stream, generation=entry.generation)


@dataclass
class PDFFile:
    objects: Dict[int, PDFObject]
    trailer: dict
    xref: List[XrefEntry] = field(default_factory=list)
    startxref: int = 0

    def resolve(self, value) -> PDFObject:
        if not isinstance(value, PDFReference):
            raise PDFSyntaxError(f"Expected an indirect reference, got {value!r}")
        try:
            return self.objects[value.number]
        except KeyError:
            raise PDFSyntaxError(f"Reference to missing object {value.number}") from None

    def catalog(self) -> PDFObject:
        return self.resolve(self.trailer.get("Root"))

    def info(self) -> Dict[str, object]:
        ref = self.trailer.get("Info")
        return self.resolve(ref).value if ref is not None else {}

    def page_tree(self) -> PDFObject:
        return self.resolve(self.catalog().value.get("Pages"))

    def page_objects(self) -> List[PDFObject]:
        return [self.resolve(kid) for kid in self.page_tree().value.get("Kids", [])]

    def content_stream(self, page: PDFObject) -> bytes:
        return self.resolve(page.value.get("Contents")).stream or b""

    def content_operators(self, page: PDFObject) -> List[Tuple[str, list]]:
        """Split a page's content stream into ``(operator, operands)`` pairs."""

        tokens = TokenStream(tokenize(self.content_stream(page)))
        operations: List[Tuple[str, list]] = []
        operands: list = []
        while not tokens.at_end():
            token = tokens.peek()
            if _is_operator(token):
                tokens.pop()
                operations.append((token, operands))
                operands = []
            else:
                operands.append(_parse_value(tokens))
        return operations

    def text_runs(self, page: PDFObject) -> List[str]:
        """Strings shown with ``Tj`` on *page*, in drawing order."""

        tokens = TokenStream(tokenize(self.content_stream(page)))
        runs: List[str] = []
        previous = None
        while not tokens.at_end():
            token = tokens.pop()
            if token == "Tj" and isinstance(previous, PDFString):
                runs.append(previous.decode())
            previous = token
        return runs


def _is_operator(token: Token) -> bool:
    return isinstance(token, str) and token not in ("<<", "[", "true", "false", "null")


def parse_pdf(data: bytes) -> PDFFile:
    if not data.startswith(b"%PDF-"):
        raise PDFSyntaxError("Missing %PDF- header")
    startxref, entries = read_xref(data)
    if not entries or entries[0].kind != "f":
        raise PDFSyntaxError("xref entry 0 must be the free-list head")

    objects: Dict[int, PDFObject] = {}
    for number, entry in enumerate(entries):
        if entry.kind == "n":
            objects[number] = _read_object(data, number, entry)

    trailer_match = _TRAILER_RE.search(data, startxref)
    if not trailer_match:
        raise PDFSyntaxError("Trailer dictionary missing")
    trailer = _parse_body(trailer_match.group(1))
    return PDFFile(objects=objects, trailer=trailer, xref=entries, startxref=startxref)


def parse_pdf_from_file(path: str) -> PDFFile:
    with open(path, "rb") as handle:
        data = handle.read()
    return parse_pdf(data)


__all__ = ["PDFFile", "PDFSyntaxError", "XrefEntry", "parse_pdf", "parse_pdf_from_file", "read_xref"]
