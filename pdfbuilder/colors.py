"""RGB colors and their content-stream operators."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """RGB color with each channel in ``0.0 .. 1.0``."""

    r: float
    g: float
    b: float

    def stroke_operator(self) -> str:
        return f"{self.r:.3f} {self.g:.3f} {self.b:.3f} RG"

    def fill_operator(self) -> str:
        return f"{self.r:.3f} {self.g:.3f} {self.b:.3f} rg"


def rgb(r: int, g: int, b: int) -> Color:
    """Build a :class:`Color` from ``0 .. 255`` channel values."""

    return Color(r / 255.0, g / 255.0, b / 255.0)


def hex_color(value: str) -> Color:
    """Parse ``#RRGGBB`` or ``RRGGBB``. Anything else is black."""

    value = value.lstrip("#")
    if len(value) != 6:
        return BLACK
    try:
        r = int(value[0:2], 16)
        g = int(value[2:4], 16)
        b = int(value[4:6], 16)
    except ValueError:
        return BLACK
    return rgb(r, g, b)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
GRAY = Color(0.5, 0.5, 0.5)
YELLOW = Color(1.0, 1.0, 0.0)
CYAN = Color(0.0, 1.0, 1.0)
MAGENTA = Color(1.0, 0.0, 1.0)


__all__ = [
    "BLACK",
    "BLUE",
    "CYAN",
    "Color",
    "GRAY",
    "GREEN",
    "MAGENTA",
    "RED",
    "WHITE",
    "YELLOW",
    "hex_color",
    "rgb",
]
