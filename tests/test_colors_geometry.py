from __future__ import annotations

import pytest

from pdfbuilder import BLACK, LETTER, WHITE, Color, cm, hex_color, inches, mm, rgb
from pdfbuilder.geometry import rotation_matrix


def test_rgb_scales_to_unit_range() -> None:
    assert rgb(255, 255, 255) == WHITE
    color = rgb(51, 102, 153)
    assert (color.r, color.g, color.b) == pytest.approx((0.2, 0.4, 0.6))


@pytest.mark.parametrize("value", ["#FF5500", "FF5500", "ff5500"])
def test_hex_color(value: str) -> None:
    assert hex_color(value) == rgb(255, 85, 0)


@pytest.mark.parametrize("value", ["", "#FFF", "GG0000", "#1234567"])
def test_invalid_hex_is_black(value: str) -> None:
    assert hex_color(value) == BLACK


def test_color_operators() -> None:
    color = Color(0.25, 0.5, 1.0)
    assert color.stroke_operator() == "0.250 0.500 1.000 RG"
    assert color.fill_operator() == "0.250 0.500 1.000 rg"


def test_units() -> None:
    assert inches(1) == 72
    assert mm(25.4) == pytest.approx(72)
    assert cm(2.54) == pytest.approx(72)
    assert LETTER.rotated().width == 792


def test_rotation_matrix() -> None:
    assert rotation_matrix(0) == pytest.approx((1, 0, 0, 1))
    assert rotation_matrix(30) == pytest.approx((0.8660254, 0.5, -0.5, 0.8660254))
    assert rotation_matrix(270) == pytest.approx((0, -1, 1, 0), abs=1e-12)
