"""
RU: Кодировщик EAN-13: контрольная цифра, таблица чётности, шаблон модулей.
EN: EAN-13 encoder. Purely computational, no state between calls.
"""

from __future__ import annotations

import logging
from typing import Dict, Final, Tuple

from symbolgen.exceptions import InvalidCharsetError, InvalidCheckDigitError
from symbolgen.model.enums import Symbology
from symbolgen.model.symbol import BarSymbol, widths_from_modules

logger = logging.getLogger(__name__)

__all__ = [
    "compute_check_digit",
    "normalize",
    "module_pattern",
    "encode",
]

# Левые цифры: нечётная чётность (L), чётная (G); правые: R
_L_CODES: Final[Tuple[str, ...]] = (
    "0001101", "0011001", "0010011", "0111101", "0100011",
    "0110001", "0101111", "0111011", "0110111", "0001011",
)
_G_CODES: Final[Tuple[str, ...]] = (
    "0100111", "0110011", "0011011", "0100001", "0011101",
    "0111001", "0000101", "0010001", "0001001", "0010111",
)
_R_CODES: Final[Tuple[str, ...]] = (
    "1110010", "1100110", "1101100", "1000010", "1011100",
    "1001110", "1010000", "1000100", "1001000", "1110100",
)

# Parity of the six left-hand digits, keyed by the number-system digit
_PARITY: Final[Dict[int, str]] = {
    0: "LLLLLL",
    1: "LLGLGG",
    2: "LLGGLG",
    3: "LLGGGL",
    4: "LGLLGG",
    5: "LGGLLG",
    6: "LGGGLL",
    7: "LGLGLG",
    8: "LGLGGL",
    9: "LGGLGL",
}

EDGE_GUARD: Final[str] = "101"
CENTER_GUARD: Final[str] = "01010"
MODULE_COUNT: Final[int] = 95


def _digits(text: str) -> Tuple[int, ...]:
    if not text or any(c not in "0123456789" for c in text):
        raise InvalidCharsetError(
            "EAN-13 must contain digits only", symbology=Symbology.EAN13.value
        )
    return tuple(ord(c) - 48 for c in text)


def compute_check_digit(body: str) -> int:
    """
    Weighted modulo-10 check digit over the 12 payload digits.

    Weights run 1,3,1,3,... from the left (3,1,... from the right).

    Example:
        >>> compute_check_digit("590123412345")
        7
    """
    digits = _digits(body)
    if len(digits) != 12:
        raise ValueError(f"Check digit needs exactly 12 digits, got {len(digits)}")
    total = sum(d * (3 if i % 2 else 1) for i, d in enumerate(digits))
    return (10 - total % 10) % 10


def normalize(text: str) -> str:
    """
    Return the full 13-digit code.

    12 digits get the check digit appended; 13 digits are verified.

    Raises:
        InvalidCheckDigitError: 13th digit does not match recomputation.
        InvalidCharsetError: not 12/13 ASCII digits.
    """
    _digits(text)
    if len(text) == 12:
        return text + str(compute_check_digit(text))
    if len(text) == 13:
        expected = compute_check_digit(text[:12])
        actual = ord(text[12]) - 48
        if expected != actual:
            logger.warning(
                "EAN-13 check digit mismatch: expected %d, got %d", expected, actual
            )
            raise InvalidCheckDigitError(
                f"Invalid EAN-13 check digit: expected {expected}, got {actual}",
                expected=expected,
                actual=actual,
                symbology=Symbology.EAN13.value,
            )
        return text
    raise InvalidCharsetError(
        "EAN-13 must be 12 or 13 digits", symbology=Symbology.EAN13.value
    )


def module_pattern(code: str) -> str:
    """Map a verified 13-digit code to its 95-module bar pattern."""
    digits = _digits(code)
    if len(digits) != 13:
        raise ValueError("module_pattern expects 13 digits")
    parity = _PARITY[digits[0]]
    left = "".join(
        (_L_CODES if p == "L" else _G_CODES)[d] for p, d in zip(parity, digits[1:7])
    )
    right = "".join(_R_CODES[d] for d in digits[7:])
    pattern = EDGE_GUARD + left + CENTER_GUARD + right + EDGE_GUARD
    assert len(pattern) == MODULE_COUNT
    return pattern


def encode(text: str) -> BarSymbol:
    """Encode 12/13 digits into an EAN-13 bar symbol."""
    code = normalize(text)
    symbol = BarSymbol(
        widths=widths_from_modules(module_pattern(code)),
        text=code,
        codewords=tuple(ord(c) - 48 for c in code),
    )
    logger.debug("EAN-13 %s -> %d bars", code, symbol.bar_count)
    return symbol
