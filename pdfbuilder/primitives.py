"""PDF object model shared by the writer and the inspection reader.

Values inside objects are plain Python structures: ``dict`` for dictionaries,
``list`` for arrays, ``str`` for literal strings, ``bytes`` for hex strings,
numbers and booleans as themselves. Names and references get the small
wrapper types below so they serialize unambiguously.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PDFName:
    """A PDF name object (``/Page``), stored without the leading slash."""

    value: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"/{self.value}"


@dataclass(frozen=True)
class PDFReference:
    """Indirect reference (``12 0 R``)."""

    number: int
    generation: int = 0


@dataclass
class PDFObject:
    """A numbered, generation-zero indirect object.

    Attributes
    ----------
    number:
        Object number, assigned sequentially from 1 while the object graph is
        built.
    value:
        Python representation of the object body. Stream objects always carry
        a dictionary here.
    stream:
        Raw stream bytes, or ``None`` for plain objects. The serializer writes
        ``/Length`` from ``len(stream)`` so the two can never disagree.
    """

    number: int
    value: Any = None
    stream: Optional[bytes] = None
    generation: int = 0

    @property
    def is_stream(self) -> bool:
        return self.stream is not None

    def reference(self) -> PDFReference:
        return PDFReference(self.number, self.generation)


__all__ = ["PDFName", "PDFObject", "PDFReference"]
