from typing import Optional

import pytest

from symbolgen.barcodegen.validation import sanitize, validate
from symbolgen.exceptions import (
    EmptyPayloadError,
    InvalidCharsetError,
    InvalidLengthError,
)
from symbolgen.model.enums import Symbology


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  59012\n3412345\t ", "590123412345"),
        ("line1\r\nline2", "line1line2"),
        ("café", "caf"),
        ("A\x00B\x7fC", "ABC"),
        (None, ""),
        ("", ""),
        ("   ", ""),
    ],
)
def test_sanitize(raw: Optional[str], expected: str) -> None:
    assert sanitize(raw) == expected


@pytest.mark.parametrize("symbology", list(Symbology))
@pytest.mark.parametrize("raw", ["", "   ", "\r\n\t", None])
def test_empty_payload_rejected_for_every_symbology(
    symbology: Symbology, raw: Optional[str]
) -> None:
    with pytest.raises(EmptyPayloadError) as exc_info:
        validate(symbology, raw)
    assert exc_info.value.kind.value == "empty_payload"


class TestEAN13Validation:
    @pytest.mark.parametrize("raw", ["590123412345", "5901234123457", " 590123412345\n"])
    def test_accepts_12_or_13_digits(self, raw: str) -> None:
        assert validate(Symbology.EAN13, raw).isdigit()

    @pytest.mark.parametrize("raw", ["59012341234A", "5901-23412345", "590123 412345"])
    def test_non_digits(self, raw: str) -> None:
        with pytest.raises(InvalidCharsetError):
            validate(Symbology.EAN13, raw)

    @pytest.mark.parametrize("raw", ["12345", "12345678901", "12345678901234"])
    def test_wrong_length(self, raw: str) -> None:
        with pytest.raises(InvalidLengthError) as exc_info:
            validate(Symbology.EAN13, raw)
        assert exc_info.value.kind.value == "invalid_charset"


class TestCode128Validation:
    def test_gs1_parentheses_pass_through(self) -> None:
        text = "(01)09501101530008(10)ABC123"
        assert validate(Symbology.CODE128, text) == text

    @pytest.mark.parametrize("length", [81, 200])
    def test_long_payload_accepted(self, length: int) -> None:
        text = "A" * length
        assert validate(Symbology.CODE128, text) == text


@pytest.mark.parametrize("symbology", [Symbology.QR, Symbology.DATAMATRIX])
def test_matrix_symbologies_accept_any_text(symbology: Symbology) -> None:
    assert validate(symbology, " Hello, World! (01) #42 ") == "Hello, World! (01) #42"
