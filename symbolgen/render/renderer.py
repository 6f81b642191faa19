"""
RU: Векторный рендерер: прямоугольники штрихов/модулей + тихая зона, сериализация в SVG.
EN: Vector renderer. Turns an AbstractSymbol into a VectorDrawing (list of
filled rectangles on a canvas with quiet-zone margin) and SVG markup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, List, NamedTuple, Optional, Tuple

from symbolgen.config import DEFAULT_CONFIG, RenderProfile
from symbolgen.model.enums import OutputFormat, Symbology
from symbolgen.model.symbol import AbstractSymbol, BarSymbol, MatrixSymbol

logger = logging.getLogger(__name__)

__all__ = [
    "Rect",
    "VectorDrawing",
    "render",
]

SVG_NS: Final[str] = "http://www.w3.org/2000/svg"


class Rect(NamedTuple):
    """Filled rectangle in canvas pixels."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class VectorDrawing:
    """
    Rendered vector image.

    Attributes:
        width: Canvas width in pixels (quiet zone included).
        height: Canvas height in pixels (quiet zone included).
        unit: Pixels per module / bar unit.
        quiet_zone: Margin in units on every side.
        rects: Dark rectangles, never overlapping the margin.
    """

    width: int
    height: int
    unit: int
    quiet_zone: int
    rects: Tuple[Rect, ...]
    foreground: str = "black"
    background: str = "white"

    @property
    def margin(self) -> int:
        """Quiet zone in pixels."""
        return self.quiet_zone * self.unit

    def to_svg(self) -> str:
        parts: List[str] = [
            f'<svg xmlns="{SVG_NS}" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}" shape-rendering="crispEdges">',
            f'<rect width="100%" height="100%" fill="{self.background}"/>',
        ]
        parts.extend(
            f'<rect x="{r.x}" y="{r.y}" width="{r.width}" height="{r.height}" '
            f'fill="{self.foreground}"/>'
            for r in self.rects
        )
        parts.append("</svg>")
        return "\n".join(parts)


def _render_bars(symbol: BarSymbol, profile: RenderProfile) -> VectorDrawing:
    if profile.quiet_zone is None:
        raise ValueError("Linear symbologies need an explicit quiet zone")
    unit = profile.unit
    margin = profile.quiet_zone * unit
    rects = tuple(
        Rect(margin + x * unit, margin, w * unit, profile.height)
        for x, w in symbol.bars()
    )
    return VectorDrawing(
        width=symbol.total_units * unit + 2 * margin,
        height=profile.height + 2 * margin,
        unit=unit,
        quiet_zone=profile.quiet_zone,
        rects=rects,
    )


def _render_grid(symbol: MatrixSymbol, profile: RenderProfile) -> VectorDrawing:
    unit = profile.unit
    quiet = profile.quiet_zone if profile.quiet_zone is not None else symbol.quiet_zone
    margin = quiet * unit
    rects = tuple(
        Rect(margin + col * unit, margin + row * unit, unit, unit)
        for col, row in symbol.dark_modules()
    )
    return VectorDrawing(
        width=symbol.columns * unit + 2 * margin,
        height=symbol.rows * unit + 2 * margin,
        unit=unit,
        quiet_zone=quiet,
        rects=rects,
    )


def render(
    symbol: AbstractSymbol,
    symbology: Symbology,
    profile: Optional[RenderProfile] = None,
) -> VectorDrawing:
    """
    Draw a symbol as filled rectangles with a quiet-zone margin.

    Args:
        symbol: Encoder output (BarSymbol or MatrixSymbol).
        symbology: Selects the default geometry when `profile` is None.
        profile: Explicit geometry (unit, bar height, quiet zone).

    Returns:
        VectorDrawing; call `.to_svg()` for markup.
    """
    if profile is None:
        profile = DEFAULT_CONFIG.profile(symbology, OutputFormat.VECTOR)
    if isinstance(symbol, BarSymbol):
        drawing = _render_bars(symbol, profile)
    elif isinstance(symbol, MatrixSymbol):
        drawing = _render_grid(symbol, profile)
    else:
        raise TypeError(f"Unsupported symbol type: {type(symbol)!r}")
    logger.debug(
        "Rendered %s: %dx%d px, %d rects, quiet zone %d",
        symbology.value,
        drawing.width,
        drawing.height,
        len(drawing.rects),
        drawing.quiet_zone,
    )
    return drawing
