import re

import pytest

from symbolgen.barcodegen import code128, datamatrix, ean13, qr
from symbolgen.config import RenderProfile
from symbolgen.model.enums import Symbology
from symbolgen.model.symbol import BarSymbol, MatrixSymbol
from symbolgen.render.renderer import Rect, VectorDrawing, render


class TestBarRendering:
    def test_ean13_geometry(self) -> None:
        symbol = ean13.encode("590123412345")
        drawing = render(symbol, Symbology.EAN13)
        # 95 modules * 2px + 11X quiet zone on both sides
        assert drawing.width == 95 * 2 + 2 * 22
        assert drawing.height == 120 + 2 * 22
        assert drawing.quiet_zone == 11
        assert len(drawing.rects) == symbol.bar_count == 30
        assert drawing.rects[0] == Rect(22, 22, 2, 120)

    def test_bar_positions_follow_widths(self) -> None:
        symbol = BarSymbol(widths=(1, 2, 3), text="x")
        profile = RenderProfile(unit=3, height=10, quiet_zone=1)
        drawing = render(symbol, Symbology.CODE128, profile)
        assert drawing.rects == (Rect(3, 3, 3, 10), Rect(12, 3, 9, 10))
        assert drawing.width == 6 * 3 + 6

    def test_code128_vector_height_fixed(self) -> None:
        drawing = render(code128.encode("ABC"), Symbology.CODE128)
        assert {r.height for r in drawing.rects} == {100}

    def test_bars_need_quiet_zone(self) -> None:
        with pytest.raises(ValueError):
            render(ean13.encode("590123412345"), Symbology.EAN13, RenderProfile(unit=1))


class TestMatrixRendering:
    def test_datamatrix_quiet_zone(self) -> None:
        symbol = datamatrix.encode("123456")
        drawing = render(symbol, Symbology.DATAMATRIX)
        assert drawing.quiet_zone == 1
        assert drawing.width == drawing.height == 10 * 10 + 2 * 10
        assert len(drawing.rects) == symbol.dark_count()
        assert min(r.x for r in drawing.rects) >= drawing.margin
        assert max(r.y + r.height for r in drawing.rects) <= drawing.height - drawing.margin

    def test_qr_quiet_zone_four_modules(self) -> None:
        symbol = qr.encode("HELLO")
        drawing = render(symbol, Symbology.QR)
        assert drawing.width == 21 * 10 + 2 * 4 * 10

    def test_profile_quiet_zone_overrides_symbol(self) -> None:
        symbol = MatrixSymbol.from_rows([[True]], quiet_zone=4)
        drawing = render(symbol, Symbology.QR, RenderProfile(unit=5, quiet_zone=2))
        assert drawing.rects == (Rect(10, 10, 5, 5),)
        assert drawing.width == 25


class TestSvg:
    def test_markup(self) -> None:
        drawing = VectorDrawing(
            width=30, height=20, unit=1, quiet_zone=2, rects=(Rect(2, 2, 4, 16),)
        )
        svg = drawing.to_svg()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
        assert 'viewBox="0 0 30 20"' in svg
        assert 'shape-rendering="crispEdges"' in svg
        assert '<rect x="2" y="2" width="4" height="16" fill="black"/>' in svg
        assert svg.endswith("</svg>")

    def test_one_rect_per_bar(self) -> None:
        symbol = ean13.encode("5901234123457")
        svg = render(symbol, Symbology.EAN13).to_svg()
        assert len(re.findall(r'fill="black"', svg)) == symbol.bar_count
