from typing import List, Sequence, Set, Tuple

import pytest

from symbolgen.barcodegen import datamatrix
from symbolgen.exceptions import PayloadTooLargeError
from symbolgen.model.symbol import MatrixSymbol


def _size(side: int) -> datamatrix.SymbolSize:
    return next(s for s in datamatrix.SYMBOL_SIZES if s.size == side)


def _assert_finder(modules: Sequence[Sequence[bool]], size: datamatrix.SymbolSize) -> None:
    block = size.region + 2
    for rr in range(size.regions):
        for rc in range(size.regions):
            top, left = rr * block, rc * block
            for k in range(block):
                assert modules[top + k][left], "left edge must be solid"
                assert modules[top + block - 1][left + k], "bottom edge must be solid"
                assert modules[top][left + k] == (k % 2 == 0), "top edge alternates"
                assert modules[top + k][left + block - 1] == (k % 2 == 1), "right edge alternates"


# ISO/IEC 16022 "123456": codewords 142 164 186 114 25 5 88 102
GOLDEN_123456: Tuple[str, ...] = (
    "1010101010",
    "1100101101",
    "1100000100",
    "1100011101",
    "1100001000",
    "1000001111",
    "1110110000",
    "1111011001",
    "1001110100",
    "1111111111",
)

# 32x32 (2x2 regions of 14x14): symbol cells of codeword bits 1..8
CODEWORD_CELLS_32: Tuple[Tuple[int, Tuple[Tuple[int, int], ...]], ...] = (
    (0, ((7, 29), (7, 30), (8, 29), (8, 30), (4, 1), (9, 29), (9, 30), (5, 1))),
    (1, ((1, 1), (1, 2), (2, 1), (2, 2), (2, 3), (3, 1), (3, 2), (3, 3))),
    (2, ((29, 7), (29, 8), (30, 7), (30, 8), (30, 9), (1, 3), (1, 4), (1, 5))),
)


def _data_cells(size: datamatrix.SymbolSize) -> List[Tuple[int, int]]:
    block = size.region + 2
    positions = [
        (k // size.region) * block + 1 + k % size.region for k in range(size.mapping_size)
    ]
    return [(r, c) for r in positions for c in positions]


def _dark_data_cells(
    modules: Sequence[Sequence[bool]], size: datamatrix.SymbolSize
) -> Set[Tuple[int, int]]:
    return {(r, c) for r, c in _data_cells(size) if modules[r][c]}


class TestSizeTable:
    def test_sizes_are_consistent(self) -> None:
        for s in datamatrix.SYMBOL_SIZES:
            assert s.size == s.regions * (s.region + 2)
            assert s.ecc_codewords % s.blocks == 0
            # mapping matrix bits == codeword bits (+ up to 4 fixed corner modules)
            bits = s.mapping_size ** 2
            total = (s.data_codewords + s.ecc_codewords) * 8
            assert 0 <= bits - total <= 4

    def test_sorted_by_capacity(self) -> None:
        caps = [s.data_codewords for s in datamatrix.SYMBOL_SIZES]
        assert caps == sorted(caps)
        assert datamatrix.MAX_DATA_CODEWORDS == 1558


class TestEncodation:
    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"123456", [142, 164, 186]),
            (b"A", [66]),
            (b"1", [50]),
            (b"1A23", [50, 66, 153]),
            (b"\xe9", [235, 106]),
        ],
    )
    def test_ascii(self, data: bytes, expected: list) -> None:
        assert datamatrix.encode_ascii(data) == expected

    def test_padding(self) -> None:
        assert datamatrix.pad_codewords([142, 164, 186], 5) == [142, 164, 186, 129, 115]

    def test_no_padding_when_full(self) -> None:
        assert datamatrix.pad_codewords([1, 2, 3], 3) == [1, 2, 3]


class TestReedSolomon:
    def test_known_vector(self) -> None:
        assert datamatrix.reed_solomon([142, 164, 186], 5) == [114, 25, 5, 88, 102]

    def test_interleaved_blocks(self) -> None:
        size = _size(52)
        data = [(i * 7) % 254 + 1 for i in range(size.data_codewords)]
        codewords = datamatrix.build_codewords(data, size)
        assert codewords[: len(data)] == data
        assert len(codewords) == size.data_codewords + size.ecc_codewords
        for block in range(size.blocks):
            expected = datamatrix.reed_solomon(data[block :: size.blocks], size.ecc_per_block)
            assert codewords[len(data) + block :: size.blocks] == expected


class TestSizeSelection:
    @pytest.mark.parametrize(
        "count,side",
        [(1, 10), (3, 10), (4, 12), (44, 26), (45, 32), (1558, 144)],
    )
    def test_minimal_size(self, count: int, side: int) -> None:
        assert datamatrix.select_size(count).size == side

    def test_too_large(self) -> None:
        with pytest.raises(PayloadTooLargeError) as exc_info:
            datamatrix.select_size(1559)
        assert exc_info.value.context["max"] == 1558


class TestEncode:
    def test_smallest_symbol(self) -> None:
        symbol = datamatrix.encode("123456")
        assert isinstance(symbol, MatrixSymbol)
        assert (symbol.rows, symbol.columns) == (10, 10)
        assert symbol.quiet_zone >= 1
        _assert_finder(symbol.modules, _size(10))

    @pytest.mark.parametrize("text,side", [("A" * 40, 26), ("A" * 50, 32), ("Z" * 250, 64)])
    def test_multi_region_finder(self, text: str, side: int) -> None:
        symbol = datamatrix.encode(text)
        assert symbol.size == side
        _assert_finder(symbol.modules, _size(side))

    def test_deterministic(self) -> None:
        assert datamatrix.encode("HELLO") == datamatrix.encode("HELLO")

    def test_different_payloads_differ(self) -> None:
        first: Tuple = datamatrix.encode("HELLO").modules
        second: Tuple = datamatrix.encode("WORLD").modules
        assert first != second

    def test_payload_too_large(self) -> None:
        with pytest.raises(PayloadTooLargeError):
            datamatrix.encode("A" * 1600)


class TestPlacement:
    def test_golden_10x10(self) -> None:
        symbol = datamatrix.encode("123456")
        rows = tuple("".join("1" if m else "0" for m in row) for row in symbol.modules)
        assert rows == GOLDEN_123456

    def test_golden_10x10_from_codewords(self) -> None:
        grid = datamatrix.place_modules([142, 164, 186, 114, 25, 5, 88, 102], _size(10))
        rows = tuple("".join("1" if m else "0" for m in row) for row in grid)
        assert rows == GOLDEN_123456

    @pytest.mark.parametrize("index,cells", CODEWORD_CELLS_32)
    def test_bit_order_across_regions(
        self, index: int, cells: Tuple[Tuple[int, int], ...]
    ) -> None:
        size = _size(32)
        total = size.data_codewords + size.ecc_codewords
        for bit, cell in enumerate(cells):
            codewords = [0] * total
            codewords[index] = 0x80 >> bit
            grid = datamatrix.place_modules(codewords, size)
            assert _dark_data_cells(grid, size) == {cell}, f"bit {bit + 1}"

    def test_every_data_module_owned_once(self) -> None:
        size = _size(32)
        total = size.data_codewords + size.ecc_codewords
        seen: Set[Tuple[int, int]] = set()
        for index in range(total):
            codewords = [0] * total
            codewords[index] = 0xFF
            grid = datamatrix.place_modules(codewords, size)
            cells = _dark_data_cells(grid, size)
            assert len(cells) == 8
            assert not cells & seen
            seen |= cells
        assert seen == set(_data_cells(size))

    def test_fixed_corner_pattern(self) -> None:
        size = _size(12)
        total = size.data_codewords + size.ecc_codewords
        grid = datamatrix.place_modules([0] * total, size)
        assert _dark_data_cells(grid, size) == {(9, 9), (10, 10)}
        _assert_finder(grid, size)
