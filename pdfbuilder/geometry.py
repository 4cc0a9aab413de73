"""Page sizes, margins, unit conversion and rotation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Tuple

PT_PER_INCH = 72.0
PT_PER_MM = 72.0 / 25.4
PT_PER_CM = 72.0 / 2.54


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in points (1/72 inch)."""

    width: float
    height: float

    def rotated(self) -> "PageSize":
        return PageSize(self.height, self.width)


LETTER = PageSize(612.0, 792.0)
LEGAL = PageSize(612.0, 1008.0)
TABLOID = PageSize(792.0, 1224.0)
A3 = PageSize(841.89, 1190.55)
A4 = PageSize(595.28, 841.89)
A5 = PageSize(419.53, 595.28)
B4 = PageSize(708.66, 1000.63)
B5 = PageSize(498.90, 708.66)


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass
class Margins:
    top: float = 72.0
    right: float = 72.0
    bottom: float = 72.0
    left: float = 72.0


def inches(n: float) -> float:
    return n * PT_PER_INCH


def mm(n: float) -> float:
    return n * PT_PER_MM


def cm(n: float) -> float:
    return n * PT_PER_CM


def rotation_matrix(degrees: float) -> Tuple[float, float, float, float]:
    """Return the ``a b c d`` part of a ``cm`` matrix rotating by *degrees*."""

    radians = math.radians(degrees)
    cos = math.cos(radians)
    sin = math.sin(radians)
    return cos, sin, -sin, cos


__all__ = [
    "A3",
    "A4",
    "A5",
    "B4",
    "B5",
    "LEGAL",
    "LETTER",
    "Margins",
    "Orientation",
    "PT_PER_CM",
    "PT_PER_INCH",
    "PT_PER_MM",
    "PageSize",
    "TABLOID",
    "cm",
    "inches",
    "mm",
    "rotation_matrix",
]
