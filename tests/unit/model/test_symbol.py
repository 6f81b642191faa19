import dataclasses

import pytest

from symbolgen.model.symbol import BarSymbol, MatrixSymbol, widths_from_modules


class TestWidthsFromModules:
    @pytest.mark.parametrize(
        "modules,widths",
        [
            ("101", (1, 1, 1)),
            ("11011001100", (2, 1, 2, 2, 2, 2)),
            ("1", (1,)),
            ("", ()),
        ],
    )
    def test_runs(self, modules: str, widths: tuple) -> None:
        assert widths_from_modules(modules) == widths

    def test_must_start_with_bar(self) -> None:
        with pytest.raises(ValueError):
            widths_from_modules("0101")


class TestBarSymbol:
    def test_properties(self) -> None:
        symbol = BarSymbol(widths=(2, 1, 3, 1, 1), text="x")
        assert symbol.total_units == 8
        assert symbol.bar_count == 3
        assert symbol.modules == "11011101"
        assert list(symbol.bars()) == [(0, 2), (3, 3), (7, 1)]

    def test_immutable(self) -> None:
        symbol = BarSymbol(widths=(1,), text="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            symbol.text = "y"  # type: ignore[misc]

    @pytest.mark.parametrize("widths", [(), (1, 0, 1), (1, -2)])
    def test_invalid_widths(self, widths: tuple) -> None:
        with pytest.raises(ValueError):
            BarSymbol(widths=widths, text="x")


class TestMatrixSymbol:
    def test_from_rows(self) -> None:
        symbol = MatrixSymbol.from_rows([[1, 0], [0, 1]], quiet_zone=2, text="t")
        assert symbol.modules == ((True, False), (False, True))
        assert (symbol.rows, symbol.columns, symbol.size) == (2, 2, 2)
        assert list(symbol.dark_modules()) == [(0, 0), (1, 1)]
        assert symbol.dark_count() == 2

    def test_ragged_rows_rejected(self) -> None:
        with pytest.raises(ValueError):
            MatrixSymbol.from_rows([[True, False], [True]], quiet_zone=1)

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            MatrixSymbol(modules=(), quiet_zone=1)
