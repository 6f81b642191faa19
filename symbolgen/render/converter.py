"""
RU: Конвертер форматов: растеризация векторного рисунка (Pillow), PNG, data URI.
EN: Format converter. Rasterizes a VectorDrawing with supersampling followed by
a nearest-neighbour downsample (hard module edges, no anti-aliasing), and
wraps SVG/PNG payloads as embeddable data URIs.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Final, Tuple, Union
from urllib.parse import quote, unquote_to_bytes

from PIL import Image, ImageDraw

from symbolgen.model.enums import OutputFormat
from symbolgen.render.renderer import VectorDrawing

logger = logging.getLogger(__name__)

__all__ = [
    "RenderedImage",
    "rasterize",
    "to_png_bytes",
    "to_data_uri",
    "decode_data_uri",
    "svg_from_data_uri",
]

SVG_URI_PREFIX: Final[str] = "data:image/svg+xml;utf8,"
PNG_URI_PREFIX: Final[str] = "data:image/png;base64,"

_WHITE: Final[int] = 255
_BLACK: Final[int] = 0


def rasterize(drawing: VectorDrawing, scale: int = 2, supersample: int = 4) -> Image.Image:
    """
    Paint a drawing to a grayscale bitmap.

    The drawing is painted at `scale * supersample` and downsampled to
    `scale` with NEAREST, so every edge lands on a whole pixel.

    Args:
        drawing: Vector drawing (integer pixel rectangles).
        scale: Output pixels per drawing pixel.
        supersample: Intermediate oversampling factor.

    Returns:
        PIL Image in mode "L" of size (width * scale, height * scale).
    """
    if scale < 1 or supersample < 1:
        raise ValueError("scale and supersample must be >= 1")
    factor = scale * supersample
    big = Image.new("L", (drawing.width * factor, drawing.height * factor), _WHITE)
    draw = ImageDraw.Draw(big)
    for rect in drawing.rects:
        x0, y0 = rect.x * factor, rect.y * factor
        # rectangle() includes the far edge
        x1, y1 = x0 + rect.width * factor - 1, y0 + rect.height * factor - 1
        draw.rectangle((x0, y0, x1, y1), fill=_BLACK)
    if supersample == 1:
        return big
    return big.resize(
        (drawing.width * scale, drawing.height * scale),
        resample=Image.Resampling.NEAREST,
    )


def to_png_bytes(img: Image.Image) -> bytes:
    buf = BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    logger.debug("PNG encoded (%d bytes)", buf.getbuffer().nbytes)
    return buf.read()


def to_data_uri(content: Union[str, bytes], output_format: OutputFormat) -> str:
    """
    Wrap SVG text or PNG bytes as a data URI.

    SVG is percent-encoded UTF-8; PNG is base64.
    """
    if output_format is OutputFormat.VECTOR:
        text = content.decode("utf-8") if isinstance(content, bytes) else content
        return SVG_URI_PREFIX + quote(text, safe="")
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return PNG_URI_PREFIX + base64.b64encode(raw).decode("ascii")


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a data URI into (mime type, payload bytes).

    Raises:
        ValueError: not a data URI or the payload cannot be decoded.
    """
    if not uri.startswith("data:") or "," not in uri:
        raise ValueError("Not a data URI")
    header, _, body = uri[5:].partition(",")
    params = header.split(";")
    mime = params[0] or "text/plain"
    if "base64" in params[1:]:
        try:
            return mime, base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    return mime, unquote_to_bytes(body)


def svg_from_data_uri(uri: str) -> str:
    """Return the SVG markup of a vector data URI, or "" if it is not one."""
    try:
        mime, payload = decode_data_uri(uri)
    except ValueError:
        logger.debug("Not a decodable data URI: %.40s", uri)
        return ""
    if mime != OutputFormat.VECTOR.mime_type:
        return ""
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return ""


@dataclass(frozen=True)
class RenderedImage:
    """
    Final image in one output format.

    Attributes:
        output_format: VECTOR (SVG text) or RASTER (PNG bytes).
        width: Image width in pixels.
        height: Image height in pixels.
        quiet_zone: Quiet zone in modules carried from the drawing.
        content: SVG markup (str) or PNG bytes.
    """

    output_format: OutputFormat
    width: int
    height: int
    quiet_zone: int
    content: Union[str, bytes]

    @property
    def mime_type(self) -> str:
        return self.output_format.mime_type

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.content, self.output_format)

    @classmethod
    def from_drawing(
        cls,
        drawing: VectorDrawing,
        output_format: OutputFormat,
        scale: int = 2,
        supersample: int = 4,
    ) -> "RenderedImage":
        """Serialize a drawing as SVG or rasterize it to PNG."""
        if output_format is OutputFormat.VECTOR:
            return cls(
                output_format=output_format,
                width=drawing.width,
                height=drawing.height,
                quiet_zone=drawing.quiet_zone,
                content=drawing.to_svg(),
            )
        img = rasterize(drawing, scale=scale, supersample=supersample)
        return cls(
            output_format=output_format,
            width=img.width,
            height=img.height,
            quiet_zone=drawing.quiet_zone,
            content=to_png_bytes(img),
        )
