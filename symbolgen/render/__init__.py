"""
render

Векторный рендеринг символов и конвертация в PNG / data URI.

Public API:
    - render: AbstractSymbol -> VectorDrawing
    - VectorDrawing, Rect: векторное представление (to_svg())
    - RenderedImage: итоговое изображение (SVG или PNG) с data_uri
    - rasterize, to_png_bytes: растеризация через Pillow
    - to_data_uri, decode_data_uri, svg_from_data_uri: работа с data URI
"""

from symbolgen.render.converter import (
    RenderedImage,
    decode_data_uri,
    rasterize,
    svg_from_data_uri,
    to_data_uri,
    to_png_bytes,
)
from symbolgen.render.renderer import Rect, VectorDrawing, render

__all__ = [
    "Rect",
    "VectorDrawing",
    "render",
    "RenderedImage",
    "rasterize",
    "to_png_bytes",
    "to_data_uri",
    "decode_data_uri",
    "svg_from_data_uri",
]
