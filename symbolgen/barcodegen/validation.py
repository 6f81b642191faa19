"""
RU: Очистка и проверка входных данных перед кодированием.
EN: Input sanitizer and per-symbology validator. Runs before every encoder.
"""

from __future__ import annotations

import logging
import re
from typing import Final, Optional, Pattern

from symbolgen.exceptions import (
    EmptyPayloadError,
    InvalidCharsetError,
    InvalidLengthError,
)
from symbolgen.model.enums import Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "sanitize",
    "validate",
]

_CONTROL_WS: Final[Pattern[str]] = re.compile(r"[\r\n\t]")
_NON_PRINTABLE: Final[Pattern[str]] = re.compile(r"[^\x20-\x7E]")
_ASCII_DIGITS: Final[frozenset[str]] = frozenset("0123456789")


def sanitize(raw: Optional[str]) -> str:
    """
    Strip control characters and non-printable/non-ASCII chars, then trim.

    Symbology-agnostic; applied to every payload before dispatch.

    Example:
        >>> sanitize("  59012\\n3412345\\t ")
        '590123412345'
    """
    if not raw:
        return ""
    text = _CONTROL_WS.sub("", raw)
    text = _NON_PRINTABLE.sub("", text)
    return text.strip()


def validate(symbology: Symbology, raw: Optional[str]) -> str:
    """
    Sanitize `raw` and check it against the symbology's character rules.

    Args:
        symbology: Target symbology.
        raw: Raw user text.

    Returns:
        Sanitized payload, ready for the encoder.

    Raises:
        EmptyPayloadError: nothing left after sanitization.
        InvalidCharsetError: EAN-13 with non-digits or wrong digit count
            (InvalidLengthError), Code128 with non-printable chars.
    """
    text = sanitize(raw)
    if not text:
        logger.warning("Payload for %s is empty after sanitization", symbology.value)
        raise EmptyPayloadError(
            "Payload is empty after sanitization", symbology=symbology.value
        )

    if symbology is Symbology.EAN13:
        bad = sorted({c for c in text if c not in _ASCII_DIGITS})
        if bad:
            raise InvalidCharsetError(
                "EAN-13 must contain digits only",
                symbology=symbology.value,
                context={"invalid": bad},
            )
        if len(text) not in (12, 13):
            raise InvalidLengthError(
                f"EAN-13 must be 12 or 13 digits, got {len(text)}",
                symbology=symbology.value,
                context={"length": len(text)},
            )

    elif symbology is Symbology.CODE128:
        if _NON_PRINTABLE.search(text):
            raise InvalidCharsetError(
                "Code128 supports printable ASCII only",
                symbology=symbology.value,
            )

    logger.debug("Validated %s payload (%d chars)", symbology.value, len(text))
    return text
