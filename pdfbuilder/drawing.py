"""Line, shape, image and transform operators.

Shapes are written exactly as requested: zero-sized rectangles, coincident
line end points and the like are emitted without complaint.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import os
from typing import TYPE_CHECKING, BinaryIO, Iterator, Optional, Sequence, Tuple, Union

from PIL import Image

from .colors import Color
from .geometry import rotation_matrix
from .images import (
    EmbeddedImage,
    ImageDecodeError,
    decode_base64,
    decode_bytes,
    decode_file,
    decode_stream,
    encode_jpeg,
)

if TYPE_CHECKING:  # pragma: no cover
    from .document import Document

logger = logging.getLogger(__name__)

# Control point distance for a quarter-circle cubic Bezier.
BEZIER_K = 0.5522848

Point = Tuple[float, float]


def _pts(*values: float) -> str:
    return " ".join(f"{value:.2f}" for value in values)


class DrawingMixin:
    """Drawing operations mixed into :class:`~pdfbuilder.document.Document`."""

    # ------------------------------------------------------------------
    # Stroke and fill state
    # ------------------------------------------------------------------
    def set_line_width(self, width: float) -> "Document":
        self._page().emit(f"{width:.2f} w")
        return self

    def set_stroke_color(self, color: Color) -> "Document":
        self._page().emit(color.stroke_operator())
        return self

    def set_fill_color(self, color: Color) -> "Document":
        self._page().emit(color.fill_operator())
        return self

    def set_dash(self, pattern: Sequence[float], phase: float = 0.0) -> "Document":
        self._page().emit(f"[{_pts(*pattern)}] {phase:.2f} d")
        return self

    def clear_dash(self) -> "Document":
        self._page().emit("[] 0 d")
        return self

    # ------------------------------------------------------------------
    # Lines and rectangles
    # ------------------------------------------------------------------
    def line(self, x1: float, y1: float, x2: float, y2: float) -> "Document":
        page = self._page()
        h = page.height
        page.emit(f"{_pts(x1, h - y1)} m {_pts(x2, h - y2)} l S")
        return self

    def hline(self) -> "Document":
        """Horizontal line across the content area at the cursor."""

        return self.hline_at(self.y)

    def hline_at(self, y: float) -> "Document":
        page = self._page()
        return self.line(self.margins.left, y, page.width - self.margins.right, y)

    def _rect(self, x: float, y: float, width: float, height: float, operator: str) -> "Document":
        page = self._page()
        page.emit(f"{_pts(x, page.height - y - height, width, height)} re {operator}")
        return self

    def rect(self, x: float, y: float, width: float, height: float) -> "Document":
        return self._rect(x, y, width, height, "S")

    def rect_filled(self, x: float, y: float, width: float, height: float) -> "Document":
        return self._rect(x, y, width, height, "f")

    def rect_filled_stroke(self, x: float, y: float, width: float, height: float) -> "Document":
        return self._rect(x, y, width, height, "B")

    # ------------------------------------------------------------------
    # Curves and polygons
    # ------------------------------------------------------------------
    def circle(self, x: float, y: float, radius: float) -> "Document":
        return self.ellipse(x, y, radius, radius)

    def circle_filled(self, x: float, y: float, radius: float) -> "Document":
        return self.ellipse_filled(x, y, radius, radius)

    def ellipse(self, x: float, y: float, rx: float, ry: float) -> "Document":
        return self._ellipse(x, y, rx, ry, "S")

    def ellipse_filled(self, x: float, y: float, rx: float, ry: float) -> "Document":
        return self._ellipse(x, y, rx, ry, "f")

    def _ellipse(self, x: float, y: float, rx: float, ry: float, operator: str) -> "Document":
        page = self._page()
        y = page.height - y
        kx = rx * BEZIER_K
        ky = ry * BEZIER_K
        page.emit(
            f"{_pts(x + rx, y)} m",
            f"{_pts(x + rx, y + ky, x + kx, y + ry, x, y + ry)} c",
            f"{_pts(x - kx, y + ry, x - rx, y + ky, x - rx, y)} c",
            f"{_pts(x - rx, y - ky, x - kx, y - ry, x, y - ry)} c",
            f"{_pts(x + kx, y - ry, x + rx, y - ky, x + rx, y)} c",
            operator,
        )
        return self

    def polygon(self, points: Sequence[Point]) -> "Document":
        return self._polygon(points, "S")

    def polygon_filled(self, points: Sequence[Point]) -> "Document":
        return self._polygon(points, "f")

    def _polygon(self, points: Sequence[Point], operator: str) -> "Document":
        if len(points) < 3:
            logger.warning("Ignoring polygon with %d point(s); at least 3 are required", len(points))
            return self
        page = self._page()
        h = page.height
        (first_x, first_y), rest = points[0], points[1:]
        operators = [f"{_pts(first_x, h - first_y)} m"]
        operators.extend(f"{_pts(px, h - py)} l" for px, py in rest)
        operators.append(f"h {operator}")
        page.emit(*operators)
        return self

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def image(
        self,
        x: float,
        y: float,
        width: Optional[float],
        height: Optional[float],
        image: Image.Image,
    ) -> "Document":
        """Place a decoded image with its top-left corner at ``(x, y)``.

        The pixels are re-encoded as JPEG. When only one of *width* and
        *height* is given the other follows the image's aspect ratio; when
        neither is given the pixel size is used as the point size.
        """

        if not isinstance(image, Image.Image):
            raise ImageDecodeError(f"Unsupported image object: {type(image).__name__}")
        name = f"Im{len(self.images) + 1}"
        try:
            embedded = encode_jpeg(image, name)
        except (OSError, ValueError) as exc:
            raise ImageDecodeError(f"Could not encode image as JPEG: {exc}") from exc
        width, height = _fit_size(embedded, width, height)

        page = self._page()
        self.images[name] = embedded
        page.use_image(name)
        page.emit(
            "q",
            f"{_pts(width)} 0 0 {_pts(height)} {_pts(x, page.height - y - height)} cm",
            f"/{name} Do",
            "Q",
        )
        return self

    def image_from_file(
        self,
        x: float,
        y: float,
        width: Optional[float],
        height: Optional[float],
        path: Union[str, "os.PathLike[str]"],
    ) -> "Document":
        return self.image(x, y, width, height, decode_file(path))

    def image_from_reader(
        self, x: float, y: float, width: Optional[float], height: Optional[float], reader: BinaryIO
    ) -> "Document":
        return self.image(x, y, width, height, decode_stream(reader))

    def image_from_bytes(
        self, x: float, y: float, width: Optional[float], height: Optional[float], data: bytes
    ) -> "Document":
        return self.image(x, y, width, height, decode_bytes(data))

    def image_from_base64(
        self, x: float, y: float, width: Optional[float], height: Optional[float], text: str
    ) -> "Document":
        return self.image(x, y, width, height, decode_base64(text))

    # ------------------------------------------------------------------
    # Graphics state and transforms
    # ------------------------------------------------------------------
    def save_state(self) -> "Document":
        self._page().emit("q")
        return self

    def restore_state(self) -> "Document":
        self._page().emit("Q")
        return self

    @contextmanager
    def graphics_state(self) -> Iterator["Document"]:
        """Wrap the block in ``q`` / ``Q`` so transforms and colors do not leak."""

        self.save_state()
        try:
            yield self
        finally:
            self.restore_state()

    def translate(self, tx: float, ty: float) -> "Document":
        """Shift the coordinate system; positive *ty* moves down the page."""

        self._page().emit(f"1 0 0 1 {_pts(tx, -ty)} cm")
        return self

    def scale(self, sx: float, sy: float) -> "Document":
        self._page().emit(f"{_pts(sx)} 0 0 {_pts(sy)} 0 0 cm")
        return self

    def rotate(self, angle: float) -> "Document":
        """Rotate by *angle* degrees counter-clockwise about the PDF origin (bottom-left)."""

        a, b, c, d = rotation_matrix(angle)
        self._page().emit(f"{a:.3f} {b:.3f} {c:.3f} {d:.3f} 0 0 cm")
        return self


def _fit_size(image: EmbeddedImage, width: Optional[float], height: Optional[float]) -> Tuple[float, float]:
    if width is None and height is None:
        return float(image.width), float(image.height)
    if width is None:
        return height * image.width / image.height, height
    if height is None:
        return width, width * image.height / image.width
    return width, height


__all__ = ["BEZIER_K", "DrawingMixin"]
