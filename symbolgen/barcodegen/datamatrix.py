"""
RU: Кодировщик DataMatrix ECC200: ASCII-кодирование, Reed-Solomon, диагональное размещение.
EN: DataMatrix ECC200 encoder (ISO/IEC 16022), square symbols 10x10 .. 144x144.

Pipeline:
    text -> ASCII codewords -> smallest fitting symbol -> pad -> RS blocks
    -> interleave -> diagonal placement -> finder/timing patterns -> grid
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, List, Sequence, Tuple

from symbolgen.exceptions import PayloadTooLargeError
from symbolgen.model.enums import Symbology
from symbolgen.model.symbol import MatrixSymbol

logger = logging.getLogger(__name__)

__all__ = [
    "SymbolSize",
    "SYMBOL_SIZES",
    "QUIET_ZONE",
    "encode_ascii",
    "select_size",
    "pad_codewords",
    "reed_solomon",
    "build_codewords",
    "place_modules",
    "encode",
]

QUIET_ZONE: Final[int] = 1

PAD: Final[int] = 129
UPPER_SHIFT: Final[int] = 235
DIGIT_PAIR_BASE: Final[int] = 130


@dataclass(frozen=True)
class SymbolSize:
    """
    One ECC200 square symbol size.

    Attributes:
        size: Symbol rows == columns, finder patterns included.
        region: Data region side in modules (without finder/timing).
        regions: Data regions per side.
        data_codewords: Total data capacity.
        ecc_codewords: Total error-correction codewords.
        blocks: Number of interleaved Reed-Solomon blocks.
    """

    size: int
    region: int
    regions: int
    data_codewords: int
    ecc_codewords: int
    blocks: int

    @property
    def mapping_size(self) -> int:
        return self.region * self.regions

    @property
    def ecc_per_block(self) -> int:
        return self.ecc_codewords // self.blocks


SYMBOL_SIZES: Final[Tuple[SymbolSize, ...]] = (
    SymbolSize(10, 8, 1, 3, 5, 1),
    SymbolSize(12, 10, 1, 5, 7, 1),
    SymbolSize(14, 12, 1, 8, 10, 1),
    SymbolSize(16, 14, 1, 12, 12, 1),
    SymbolSize(18, 16, 1, 18, 14, 1),
    SymbolSize(20, 18, 1, 22, 18, 1),
    SymbolSize(22, 20, 1, 30, 20, 1),
    SymbolSize(24, 22, 1, 36, 24, 1),
    SymbolSize(26, 24, 1, 44, 28, 1),
    SymbolSize(32, 14, 2, 62, 36, 1),
    SymbolSize(36, 16, 2, 86, 42, 1),
    SymbolSize(40, 18, 2, 114, 48, 1),
    SymbolSize(44, 20, 2, 144, 56, 1),
    SymbolSize(48, 22, 2, 174, 68, 1),
    SymbolSize(52, 24, 2, 204, 84, 2),
    SymbolSize(64, 14, 4, 280, 112, 2),
    SymbolSize(72, 16, 4, 368, 144, 4),
    SymbolSize(80, 18, 4, 456, 192, 4),
    SymbolSize(88, 20, 4, 576, 224, 4),
    SymbolSize(96, 22, 4, 696, 272, 4),
    SymbolSize(104, 24, 4, 816, 336, 6),
    SymbolSize(120, 18, 6, 1050, 408, 6),
    SymbolSize(132, 20, 6, 1304, 496, 8),
    SymbolSize(144, 22, 6, 1558, 620, 10),
)

MAX_DATA_CODEWORDS: Final[int] = SYMBOL_SIZES[-1].data_codewords


# === GF(256), primitive polynomial x^8 + x^5 + x^3 + x^2 + 1 ===


def _build_gf_tables() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= 0x12D
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


_GF_EXP, _GF_LOG = _build_gf_tables()


def _gf_mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _GF_EXP[_GF_LOG[a] + _GF_LOG[b]]


def _generator(degree: int) -> List[int]:
    """Coefficients (highest power first) of prod(x + a^i), i = 1..degree."""
    poly = [1]
    for i in range(1, degree + 1):
        nxt = [0] * (len(poly) + 1)
        for j, coef in enumerate(poly):
            nxt[j] ^= coef
            nxt[j + 1] ^= _gf_mul(coef, _GF_EXP[i])
        poly = nxt
    return poly


def reed_solomon(data: Sequence[int], ecc_count: int) -> List[int]:
    """
    Error-correction codewords for one block.

    Example:
        >>> reed_solomon([142, 164, 186], 5)
        [114, 25, 5, 88, 102]
    """
    gen = _generator(ecc_count)
    ecc = [0] * ecc_count
    for cw in data:
        factor = cw ^ ecc[0]
        ecc = ecc[1:] + [0]
        for k in range(ecc_count):
            ecc[k] ^= _gf_mul(gen[k + 1], factor)
    return ecc


# === Encodation ===


def _is_digit(b: int) -> bool:
    return 48 <= b <= 57


def encode_ascii(data: bytes) -> List[int]:
    """ASCII encodation: digit pairs packed, bytes >127 via Upper Shift."""
    out: List[int] = []
    i = 0
    while i < len(data):
        b = data[i]
        if _is_digit(b) and i + 1 < len(data) and _is_digit(data[i + 1]):
            out.append(DIGIT_PAIR_BASE + (b - 48) * 10 + (data[i + 1] - 48))
            i += 2
        elif b < 128:
            out.append(b + 1)
            i += 1
        else:
            out.extend((UPPER_SHIFT, b - 127))
            i += 1
    return out


def select_size(codeword_count: int) -> SymbolSize:
    """Smallest square symbol whose data capacity holds `codeword_count`."""
    for size in SYMBOL_SIZES:
        if size.data_codewords >= codeword_count:
            return size
    raise PayloadTooLargeError(
        f"DataMatrix payload needs {codeword_count} codewords, "
        f"max is {MAX_DATA_CODEWORDS}",
        symbology=Symbology.DATAMATRIX.value,
        context={"codewords": codeword_count, "max": MAX_DATA_CODEWORDS},
    )


def pad_codewords(codewords: Sequence[int], capacity: int) -> List[int]:
    """Fill up to capacity: plain 129 first, then 253-state randomized pads."""
    out = list(codewords)
    if len(out) < capacity:
        out.append(PAD)
    while len(out) < capacity:
        position = len(out) + 1
        pseudo = ((149 * position) % 253) + 1
        value = PAD + pseudo
        out.append(value - 254 if value > 254 else value)
    return out


def build_codewords(data: Sequence[int], size: SymbolSize) -> List[int]:
    """Interleave data across RS blocks and append interleaved ECC."""
    blocks = size.blocks
    result = list(data) + [0] * size.ecc_codewords
    for b in range(blocks):
        block_data = [data[i] for i in range(b, len(data), blocks)]
        ecc = reed_solomon(block_data, size.ecc_per_block)
        for k, cw in enumerate(ecc):
            result[len(data) + b + k * blocks] = cw
    return result


# === Placement (ISO/IEC 16022 Annex F) ===

_FIXED_DARK: Final[int] = 1


class _Placer:
    def __init__(self, nrow: int, ncol: int) -> None:
        self.nrow = nrow
        self.ncol = ncol
        self.grid: List[List[int]] = [[0] * ncol for _ in range(nrow)]

    def module(self, row: int, col: int, chr_: int, bit: int) -> None:
        if row < 0:
            row += self.nrow
            col += 4 - ((self.nrow + 4) % 8)
        if col < 0:
            col += self.ncol
            row += 4 - ((self.ncol + 4) % 8)
        self.grid[row][col] = 10 * chr_ + bit

    def utah(self, row: int, col: int, chr_: int) -> None:
        m = self.module
        m(row - 2, col - 2, chr_, 1)
        m(row - 2, col - 1, chr_, 2)
        m(row - 1, col - 2, chr_, 3)
        m(row - 1, col - 1, chr_, 4)
        m(row - 1, col, chr_, 5)
        m(row, col - 2, chr_, 6)
        m(row, col - 1, chr_, 7)
        m(row, col, chr_, 8)

    def corner(self, cells: Sequence[Tuple[int, int]], chr_: int) -> None:
        for bit, (row, col) in enumerate(cells, start=1):
            self.module(row, col, chr_, bit)

    def run(self) -> List[List[int]]:
        nrow, ncol = self.nrow, self.ncol
        n, c = nrow, ncol
        corner1 = ((n - 1, 0), (n - 1, 1), (n - 1, 2), (0, c - 2), (0, c - 1), (1, c - 1), (2, c - 1), (3, c - 1))
        corner2 = ((n - 3, 0), (n - 2, 0), (n - 1, 0), (0, c - 4), (0, c - 3), (0, c - 2), (0, c - 1), (1, c - 1))
        corner3 = ((n - 3, 0), (n - 2, 0), (n - 1, 0), (0, c - 2), (0, c - 1), (1, c - 1), (2, c - 1), (3, c - 1))
        corner4 = ((n - 1, 0), (n - 1, c - 1), (0, c - 3), (0, c - 2), (0, c - 1), (1, c - 3), (1, c - 2), (1, c - 1))

        chr_ = 1
        row, col = 4, 0
        while True:
            if row == nrow and col == 0:
                self.corner(corner1, chr_)
                chr_ += 1
            if row == nrow - 2 and col == 0 and ncol % 4:
                self.corner(corner2, chr_)
                chr_ += 1
            if row == nrow - 2 and col == 0 and ncol % 8 == 4:
                self.corner(corner3, chr_)
                chr_ += 1
            if row == nrow + 4 and col == 2 and ncol % 8 == 0:
                self.corner(corner4, chr_)
                chr_ += 1
            # вверх-вправо по диагонали
            while True:
                if 0 <= row < nrow and 0 <= col < ncol and not self.grid[row][col]:
                    self.utah(row, col, chr_)
                    chr_ += 1
                row -= 2
                col += 2
                if not (row >= 0 and col < ncol):
                    break
            row += 1
            col += 3
            # вниз-влево по диагонали
            while True:
                if 0 <= row < nrow and 0 <= col < ncol and not self.grid[row][col]:
                    self.utah(row, col, chr_)
                    chr_ += 1
                row += 2
                col -= 2
                if not (row < nrow and col >= 0):
                    break
            row += 3
            col += 1
            if not (row < nrow or col < ncol):
                break

        if not self.grid[nrow - 1][ncol - 1]:
            self.grid[nrow - 1][ncol - 1] = _FIXED_DARK
            self.grid[nrow - 2][ncol - 2] = _FIXED_DARK
        return self.grid


def place_modules(codewords: Sequence[int], size: SymbolSize) -> List[List[bool]]:
    """Place codeword bits and draw finder/timing patterns for every region."""
    mapping = _Placer(size.mapping_size, size.mapping_size).run()
    rs = size.region
    block = rs + 2
    grid = [[False] * size.size for _ in range(size.size)]

    for rr in range(size.regions):
        for rc in range(size.regions):
            top, left = rr * block, rc * block
            for k in range(block):
                grid[top + k][left] = True
                grid[top + block - 1][left + k] = True
                grid[top][left + k] = k % 2 == 0
                grid[top + k][left + block - 1] = k % 2 == 1

    for r, line in enumerate(mapping):
        for c, value in enumerate(line):
            if value == _FIXED_DARK:
                dark = True
            elif value >= 10:
                cw = codewords[value // 10 - 1]
                dark = bool((cw >> (8 - value % 10)) & 1)
            else:
                dark = False
            grid[(r // rs) * block + 1 + r % rs][(c // rs) * block + 1 + c % rs] = dark
    return grid


def encode(text: str) -> MatrixSymbol:
    """Encode text (UTF-8 bytes) into the smallest square ECC200 symbol."""
    data = encode_ascii(text.encode("utf-8"))
    size = select_size(len(data))
    padded = pad_codewords(data, size.data_codewords)
    codewords = build_codewords(padded, size)
    grid = place_modules(codewords, size)
    logger.debug(
        "DataMatrix %dx%d: %d data cw (%d used), %d ecc cw in %d blocks",
        size.size,
        size.size,
        size.data_codewords,
        len(data),
        size.ecc_codewords,
        size.blocks,
    )
    return MatrixSymbol.from_rows(grid, quiet_zone=QUIET_ZONE, text=text)
