"""Decode JPEG/PNG input and re-encode it as JPEG for embedding.

Every image is re-encoded as baseline JPEG (``/DCTDecode``) whatever its
source format, so PNG input loses its lossless quality and any transparency.
Transparent pixels are flattened onto white before encoding.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
import io
import logging
import os
from typing import BinaryIO, Union

from PIL import Image

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8"
JPEG_QUALITY = 90

_SUPPORTED_FORMATS = ["JPEG", "PNG"]


class ImageDecodeError(ValueError):
    """Raised when image input cannot be decoded."""


@dataclass
class EmbeddedImage:
    """An image resource ready to be written as an XObject."""

    name: str
    width: int
    height: int
    color_space: str
    data: bytes


def sniff_format(data: bytes) -> str:
    if data.startswith(PNG_SIGNATURE):
        return "PNG"
    if data.startswith(JPEG_SIGNATURE):
        return "JPEG"
    raise ImageDecodeError("Unsupported image data: expected a JPEG or PNG signature")


def decode_bytes(data: bytes) -> Image.Image:
    """Decode raw JPEG or PNG bytes into a fully loaded Pillow image."""

    data = bytes(data)
    if not data:
        raise ImageDecodeError("Image data is empty")
    image_format = sniff_format(data)
    try:
        image = Image.open(io.BytesIO(data), formats=_SUPPORTED_FORMATS)
        image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Could not decode {image_format} image: {exc}") from exc
    return image


def decode_stream(reader: BinaryIO) -> Image.Image:
    return decode_bytes(reader.read())


def decode_file(path: Union[str, "os.PathLike[str]"]) -> Image.Image:
    with open(path, "rb") as handle:
        data = handle.read()
    try:
        return decode_bytes(data)
    except ImageDecodeError as exc:
        raise ImageDecodeError(f"{os.fspath(path)}: {exc}") from exc


def decode_base64(text: str) -> Image.Image:
    """Decode standard base64, ignoring line breaks and other whitespace."""

    try:
        data = base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Invalid base64 image data: {exc}") from exc
    return decode_bytes(data)


def _flatten(image: Image.Image) -> Image.Image:
    has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
    if has_alpha:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode in ("RGB", "L"):
        return image
    return image.convert("RGB")


def encode_jpeg(image: Image.Image, name: str, quality: int = JPEG_QUALITY) -> EmbeddedImage:
    """Re-encode a decoded image as JPEG and wrap it as an :class:`EmbeddedImage`."""

    flattened = _flatten(image)
    buffer = io.BytesIO()
    flattened.save(buffer, format="JPEG", quality=quality)
    data = buffer.getvalue()
    color_space = "DeviceGray" if flattened.mode == "L" else "DeviceRGB"
    width, height = flattened.size
    logger.debug("Encoded image %s: %dx%d %s, %d JPEG bytes", name, width, height, color_space, len(data))
    return EmbeddedImage(name=name, width=width, height=height, color_space=color_space, data=data)


__all__ = [
    "EmbeddedImage",
    "ImageDecodeError",
    "JPEG_QUALITY",
    "decode_base64",
    "decode_bytes",
    "decode_file",
    "decode_stream",
    "encode_jpeg",
    "sniff_format",
]
