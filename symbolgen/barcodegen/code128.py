"""
RU: Кодировщик Code128 / GS1-128: разбор (AI)значение, выбор наборов A/B/C, контрольная сумма mod 103.
EN: Code128 encoder with GS1-128 application identifier handling.

Code values and bar patterns follow ISO/IEC 15417. Every pattern is 11
modules (3 bars, 3 spaces) except STOP, which carries the 2-module
termination bar (13 modules).
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, Final, List, Pattern, Tuple

from symbolgen.exceptions import InvalidCharsetError, InvalidGS1Error
from symbolgen.model.enums import Symbology
from symbolgen.model.symbol import BarSymbol, widths_from_modules

logger = logging.getLogger(__name__)

__all__ = [
    "CodeSet",
    "FNC1",
    "parse_gs1",
    "tokenize",
    "code_values",
    "checksum",
    "encode",
]

# Code 128 bar patterns, index = code value (0..106)
CODE128_PATTERNS: Final[Tuple[str, ...]] = (
    "11011001100", "11001101100", "11001100110", "10010011000", "10010001100",  # 0-4
    "10001001100", "10011001000", "10011000100", "10001100100", "11001001000",  # 5-9
    "11001000100", "11000100100", "10110011100", "10011011100", "10011001110",  # 10-14
    "10111001100", "10011101100", "10011100110", "11001110010", "11001011100",  # 15-19
    "11001001110", "11011100100", "11001110100", "11101101110", "11101001100",  # 20-24
    "11100101100", "11100100110", "11101100100", "11100110100", "11100110010",  # 25-29
    "11011011000", "11011000110", "11000110110", "10100011000", "10001011000",  # 30-34
    "10001000110", "10110001000", "10001101000", "10001100010", "11010001000",  # 35-39
    "11000101000", "11000100010", "10110111000", "10110001110", "10001101110",  # 40-44
    "10111011000", "10111000110", "10001110110", "11101110110", "11010001110",  # 45-49
    "11000101110", "11011101000", "11011100010", "11011101110", "11101011000",  # 50-54
    "11101000110", "11100010110", "11101101000", "11101100010", "11100011010",  # 55-59
    "11101111010", "11001000010", "11110001010", "10100110000", "10100001100",  # 60-64
    "10010110000", "10010000110", "10000101100", "10000100110", "10110010000",  # 65-69
    "10110000100", "10011010000", "10011000010", "10000110100", "10000110010",  # 70-74
    "11000010010", "11001010000", "11110111010", "11000010100", "10001111010",  # 75-79
    "10100111100", "10010111100", "10010011110", "10111100100", "10011110100",  # 80-84
    "10011110010", "11110100100", "11110010100", "11110010010", "11011011110",  # 85-89
    "11011110110", "11110110110", "10101111000", "10100011110", "10001011110",  # 90-94
    "10111101000", "10111100010", "11110101000", "11110100010", "10111011110",  # 95-99
    "10111101110", "11101011110", "11110101110", "11010000100", "11010010000",  # 100-104
    "11010011100", "1100011101011",  # 105 (START C), 106 (STOP)
)

_WIDTHS: Final[Tuple[Tuple[int, ...], ...]] = tuple(
    widths_from_modules(p) for p in CODE128_PATTERNS
)

CODE_C: Final[int] = 99
CODE_B: Final[int] = 100
CODE_A: Final[int] = 101
FNC1_VALUE: Final[int] = 102
START_A: Final[int] = 103
START_B: Final[int] = 104
START_C: Final[int] = 105
STOP: Final[int] = 106

# Токен FNC1 во входном потоке (не пересекается с кодами символов 0..127)
FNC1: Final[int] = -1

# Minimum digit run that justifies switching into Set C
MIN_C_RUN: Final[int] = 4


class CodeSet(str, Enum):
    A = "A"
    B = "B"
    C = "C"


_START: Final[Dict[CodeSet, int]] = {
    CodeSet.A: START_A,
    CodeSet.B: START_B,
    CodeSet.C: START_C,
}
_SWITCH: Final[Dict[CodeSet, int]] = {
    CodeSet.A: CODE_A,
    CodeSet.B: CODE_B,
    CodeSet.C: CODE_C,
}

# GS1 predefined fixed-length element strings: AI prefix -> total length (AI + data)
GS1_FIXED_LENGTH: Final[Dict[str, int]] = {
    "00": 20,
    "01": 16,
    "02": 16,
    "03": 16,
    "04": 18,
    "11": 8,
    "12": 8,
    "13": 8,
    "14": 8,
    "15": 8,
    "16": 8,
    "17": 8,
    "18": 8,
    "19": 8,
    "20": 4,
    "31": 10,
    "32": 10,
    "33": 10,
    "34": 10,
    "35": 10,
    "36": 10,
    "41": 16,
}

_GS1_GROUP: Final[Pattern[str]] = re.compile(r"\((\d{2,4})\)([^()]+)")


def _gs1_error(message: str, text: str, position: int) -> InvalidGS1Error:
    return InvalidGS1Error(
        message,
        symbology=Symbology.CODE128.value,
        context={"payload": text, "position": position},
    )


def parse_gs1(text: str) -> List[Tuple[str, str]]:
    """
    Split a GS1-128 human-readable string into (AI, value) groups.

    Example:
        >>> parse_gs1("(01)09501101530008(10)ABC123")
        [('01', '09501101530008'), ('10', 'ABC123')]

    Raises:
        InvalidGS1Error: unbalanced/nested parentheses, non-numeric or
            wrong-length AI, empty value, or fixed-length AI with a value of
            the wrong length.
    """
    groups: List[Tuple[str, str]] = []
    pos = 0
    while pos < len(text):
        m = _GS1_GROUP.match(text, pos)
        if m is None:
            raise _gs1_error(
                f"Malformed GS1 application identifier group at position {pos}",
                text,
                pos,
            )
        ai, value = m.group(1), m.group(2)
        total = GS1_FIXED_LENGTH.get(ai[:2])
        if total is not None and len(ai) + len(value) != total:
            raise _gs1_error(
                f"AI ({ai}) requires {total - len(ai)} data characters, got {len(value)}",
                text,
                pos,
            )
        groups.append((ai, value))
        pos = m.end()
    if not groups:
        raise _gs1_error("GS1 payload contains no application identifiers", text, 0)
    return groups


def is_gs1(text: str) -> bool:
    """Parentheses switch the encoder into GS1-128 mode."""
    return "(" in text or ")" in text


def tokenize(text: str) -> List[int]:
    """
    Turn the payload into encoder tokens (character codes plus FNC1).

    GS1 mode: FNC1 after the start code, AI digits and value chars, and an
    FNC1 separator after every variable-length field that is not last.
    """
    if not is_gs1(text):
        tokens = [ord(c) for c in text]
    else:
        groups = parse_gs1(text)
        tokens = [FNC1]
        for index, (ai, value) in enumerate(groups):
            tokens.extend(ord(c) for c in ai + value)
            last = index == len(groups) - 1
            if not last and ai[:2] not in GS1_FIXED_LENGTH:
                tokens.append(FNC1)
    bad = sorted({chr(t) for t in tokens if t > 127})
    if bad:
        raise InvalidCharsetError(
            "Code128 supports ASCII 0-127 only",
            symbology=Symbology.CODE128.value,
            context={"invalid": bad},
        )
    return tokens


def _is_digit(token: int) -> bool:
    return 48 <= token <= 57


def _digit_run(tokens: List[int], start: int) -> int:
    end = start
    while end < len(tokens) and _is_digit(tokens[end]):
        end += 1
    return end - start


def _is_control(token: int) -> bool:
    return 0 <= token < 32


def _char_value(code_set: CodeSet, token: int) -> int:
    if code_set is CodeSet.A:
        return token + 64 if token < 32 else token - 32
    return token - 32


def _choose_start(tokens: List[int]) -> CodeSet:
    first = 1 if tokens and tokens[0] == FNC1 else 0
    if first >= len(tokens):
        return CodeSet.B
    run = _digit_run(tokens, first)
    if run >= MIN_C_RUN and run % 2 == 0:
        return CodeSet.C
    return CodeSet.A if _is_control(tokens[first]) else CodeSet.B


def code_values(tokens: List[int]) -> Tuple[List[int], List[CodeSet]]:
    """
    Run the code-set state machine.

    Returns:
        (values, sets): code values starting with the start code (no
        checksum/stop), and the code set active after each value.
    """
    current = _choose_start(tokens)
    values = [_START[current]]
    sets = [current]

    def emit(value: int) -> None:
        values.append(value)
        sets.append(current)

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == FNC1:
            emit(FNC1_VALUE)
            i += 1
            continue

        if current is CodeSet.C:
            if _digit_run(tokens, i) >= 2:
                emit((tokens[i] - 48) * 10 + (tokens[i + 1] - 48))
                i += 2
                continue
            current = CodeSet.A if _is_control(token) else CodeSet.B
            emit(_SWITCH[current])
            continue

        run = _digit_run(tokens, i)
        if run >= MIN_C_RUN:
            if run % 2:
                emit(_char_value(current, token))
                i += 1
            current = CodeSet.C
            emit(CODE_C)
            continue
        if current is CodeSet.B and _is_control(token):
            current = CodeSet.A
            emit(CODE_A)
            continue
        if current is CodeSet.A and token >= 96:
            current = CodeSet.B
            emit(CODE_B)
            continue
        emit(_char_value(current, token))
        i += 1
    return values, sets


def checksum(values: List[int]) -> int:
    """Modulo-103 weighted sum over the start code and all data/switch values."""
    total = values[0] + sum(pos * v for pos, v in enumerate(values[1:], start=1))
    return total % 103


def encode(text: str) -> BarSymbol:
    """
    Encode printable ASCII (or a GS1 `(AI)value` string) as Code128.

    Deterministic: identical input gives identical codewords and widths.
    """
    tokens = tokenize(text)
    values, sets = code_values(tokens)
    check = checksum(values)
    all_values = values + [check, STOP]
    widths: List[int] = []
    for v in all_values:
        widths.extend(_WIDTHS[v])
    logger.debug(
        "Code128 %r -> %d values, sets=%s, check=%d",
        text,
        len(all_values),
        "".join(s.value for s in sets),
        check,
    )
    return BarSymbol(widths=tuple(widths), text=text, codewords=tuple(all_values))
