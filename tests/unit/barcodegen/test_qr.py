import logging

import pytest

from symbolgen.barcodegen import qr
from symbolgen.exceptions import InvalidOptionError, PayloadTooLargeError
from symbolgen.model.enums import QRErrorCorrection
from symbolgen.model.symbol import MatrixSymbol


def _finder_at(modules, top: int, left: int) -> bool:
    """7x7 finder: dark ring, light ring, dark 3x3 core."""
    for r in range(7):
        for c in range(7):
            ring = max(abs(r - 3), abs(c - 3))
            expected = ring != 2
            if modules[top + r][left + c] != expected:
                return False
    return True


class TestQREncode:
    def test_version_one(self) -> None:
        symbol = qr.encode("HELLO")
        assert isinstance(symbol, MatrixSymbol)
        assert symbol.size == 21
        assert symbol.quiet_zone == qr.QUIET_ZONE == 4

    def test_no_border_in_grid(self) -> None:
        symbol = qr.encode("https://example.com")
        n = symbol.size
        assert _finder_at(symbol.modules, 0, 0)
        assert _finder_at(symbol.modules, 0, n - 7)
        assert _finder_at(symbol.modules, n - 7, 0)

    def test_grid_grows_with_payload(self) -> None:
        assert qr.encode("A" * 200).size > qr.encode("A").size

    def test_higher_ecc_needs_larger_symbol(self) -> None:
        text = "X" * 100
        low = qr.encode(text, error_correction=QRErrorCorrection.L)
        high = qr.encode(text, error_correction=QRErrorCorrection.H)
        assert high.size > low.size

    def test_error_correction_as_string(self) -> None:
        assert qr.encode("abc", error_correction="Q").size >= 21

    def test_deterministic(self) -> None:
        assert qr.encode("same payload") == qr.encode("same payload")

    def test_overflow(self) -> None:
        with pytest.raises(PayloadTooLargeError) as exc_info:
            qr.encode("A" * 3000, error_correction=QRErrorCorrection.H)
        assert exc_info.value.symbology == "qr"
        assert exc_info.value.__cause__ is not None

    def test_overflow_reports_utf8_bytes(self, caplog: pytest.LogCaptureFixture) -> None:
        pkg_logger = logging.getLogger("symbolgen")
        pkg_logger.addHandler(caplog.handler)
        try:
            with pytest.raises(PayloadTooLargeError) as exc_info:
                qr.encode("é" * 700, error_correction=QRErrorCorrection.H)
        finally:
            pkg_logger.removeHandler(caplog.handler)
        assert exc_info.value.context["bytes"] == 1400
        assert "QR payload of 1400 bytes" in caplog.text

    def test_unknown_level(self) -> None:
        with pytest.raises(InvalidOptionError):
            qr.encode("abc", error_correction="Z")
