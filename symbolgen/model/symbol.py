"""
RU: Абстрактное представление символа: последовательность ширин штрихов (1D) или матрица модулей (2D).
EN: Immutable intermediate symbol produced by encoders and consumed by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple, Union

__all__ = [
    "BarSymbol",
    "MatrixSymbol",
    "AbstractSymbol",
    "widths_from_modules",
]


def widths_from_modules(modules: str) -> Tuple[int, ...]:
    """Convert a '1'/'0' module string (starting with ink) into run widths."""
    if not modules:
        return ()
    if modules[0] != "1":
        raise ValueError("Module pattern must start with a bar")
    widths: List[int] = []
    run = 1
    for prev, cur in zip(modules, modules[1:]):
        if cur == prev:
            run += 1
        else:
            widths.append(run)
            run = 1
    widths.append(run)
    return tuple(widths)


@dataclass(frozen=True)
class BarSymbol:
    """
    Linear symbol (EAN-13, Code128).

    Attributes:
        widths: Alternating bar/space widths in units, first entry is a bar.
        text: Human-readable interpretation (e.g. the full 13 EAN digits).
        codewords: Symbol values that produced the pattern (digits for EAN-13,
            code values incl. start/check/stop for Code128).
    """

    widths: Tuple[int, ...]
    text: str
    codewords: Tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.widths:
            raise ValueError("BarSymbol requires at least one bar")
        if any(w <= 0 for w in self.widths):
            raise ValueError("Bar widths must be positive")

    @property
    def total_units(self) -> int:
        return sum(self.widths)

    @property
    def bar_count(self) -> int:
        return (len(self.widths) + 1) // 2

    @property
    def modules(self) -> str:
        """Expand widths back into a '1'/'0' module string."""
        return "".join(
            ("1" if i % 2 == 0 else "0") * w for i, w in enumerate(self.widths)
        )

    def bars(self) -> Iterator[Tuple[int, int]]:
        """Yield (x_offset, width) in units for every ink bar."""
        x = 0
        for i, w in enumerate(self.widths):
            if i % 2 == 0:
                yield x, w
            x += w


@dataclass(frozen=True)
class MatrixSymbol:
    """
    Two-dimensional symbol (QR, DataMatrix).

    Attributes:
        modules: Row-major grid, True = dark module.
        quiet_zone: Recommended blank margin in modules.
    """

    modules: Tuple[Tuple[bool, ...], ...]
    quiet_zone: int
    text: str = ""

    def __post_init__(self) -> None:
        if not self.modules or not self.modules[0]:
            raise ValueError("MatrixSymbol requires a non-empty grid")
        width = len(self.modules[0])
        if any(len(row) != width for row in self.modules):
            raise ValueError("MatrixSymbol rows must have equal length")

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[bool]], quiet_zone: int, text: str = ""
    ) -> "MatrixSymbol":
        return cls(
            modules=tuple(tuple(bool(v) for v in row) for row in rows),
            quiet_zone=quiet_zone,
            text=text,
        )

    @property
    def rows(self) -> int:
        return len(self.modules)

    @property
    def columns(self) -> int:
        return len(self.modules[0])

    @property
    def size(self) -> int:
        """Grid dimension (rows) for square symbols."""
        return self.rows

    def dark_modules(self) -> Iterator[Tuple[int, int]]:
        """Yield (col, row) for every dark module."""
        for r, row in enumerate(self.modules):
            for c, dark in enumerate(row):
                if dark:
                    yield c, r

    def dark_count(self) -> int:
        return sum(1 for _ in self.dark_modules())


AbstractSymbol = Union[BarSymbol, MatrixSymbol]
