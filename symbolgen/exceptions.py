"""
Централизованные исключения движка штрихкодов.

Иерархия типизированных исключений для валидации, кодирования и
рендеринга. UI получает ошибку целиком и показывает `kind` + message.

Example:
    >>> from symbolgen.exceptions import SymbolGenError
    >>> try:
    ...     encode("ean13", "5901234123450")
    ... except SymbolGenError as e:
    ...     print(e.kind, e)

Иерархия:
    SymbolGenError (базовое)
    ├── InvalidCharsetError
    │   ├── InvalidLengthError
    │   └── InvalidGS1Error
    ├── EmptyPayloadError
    ├── InvalidCheckDigitError
    ├── PayloadTooLargeError
    ├── UnsupportedSymbologyError
    ├── InvalidOptionError (также ValueError)
    └── BatchInputError
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, Optional

__all__: list[str] = [
    "ErrorKind",
    "SymbolGenError",
    "InvalidCharsetError",
    "InvalidLengthError",
    "InvalidGS1Error",
    "EmptyPayloadError",
    "InvalidCheckDigitError",
    "PayloadTooLargeError",
    "UnsupportedSymbologyError",
    "InvalidOptionError",
    "BatchInputError",
]


class ErrorKind(str, Enum):
    """Stable error identifiers exposed to UI collaborators."""

    INVALID_CHARSET = "invalid_charset"
    EMPTY_PAYLOAD = "empty_payload"
    INVALID_CHECK_DIGIT = "invalid_check_digit"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNSUPPORTED_SYMBOLOGY = "unsupported_symbology"
    INVALID_OPTION = "invalid_option"
    BATCH_INPUT = "batch_input"


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class SymbolGenError(Exception):
    """
    Базовое исключение для всех ошибок генерации кодов.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        symbology: Значение символики, вызвавшей ошибку (опционально)
        context: Дополнительный контекст для отладки (опционально)
        kind: Тип ошибки (ErrorKind), одинаковый для всех экземпляров класса
    """

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        *,
        symbology: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.symbology = symbology
        self.context: Dict[str, Any] = dict(context) if context else {}

    def __str__(self) -> str:
        if self.symbology:
            return f"[{self.symbology}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for UI / API responses."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "symbology": self.symbology,
            "context": dict(self.context),
        }


# ==============================================================================
# INPUT ERRORS
# ==============================================================================


class InvalidCharsetError(SymbolGenError):
    """Payload contains characters the target symbology cannot carry."""

    kind = ErrorKind.INVALID_CHARSET


class InvalidLengthError(InvalidCharsetError):
    """Payload has the right characters but the wrong digit count (EAN-13)."""


class InvalidGS1Error(InvalidCharsetError):
    """Malformed `(AI)value` grouping in a GS1-128 payload."""


class EmptyPayloadError(SymbolGenError):
    """Payload is empty after sanitization."""

    kind = ErrorKind.EMPTY_PAYLOAD


class InvalidCheckDigitError(SymbolGenError):
    """
    Контрольная цифра EAN-13 не совпадает с пересчитанной.

    Attributes:
        expected: Пересчитанная контрольная цифра
        actual: Контрольная цифра из входных данных
    """

    kind = ErrorKind.INVALID_CHECK_DIGIT

    def __init__(
        self,
        message: str,
        *,
        expected: int,
        actual: int,
        symbology: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            symbology=symbology,
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class PayloadTooLargeError(SymbolGenError):
    """Payload exceeds the capacity of the largest symbol version/size."""

    kind = ErrorKind.PAYLOAD_TOO_LARGE


class UnsupportedSymbologyError(SymbolGenError):
    """Symbology name or value not recognized by the dispatcher."""

    kind = ErrorKind.UNSUPPORTED_SYMBOLOGY


class InvalidOptionError(SymbolGenError, ValueError):
    """Unknown output format or QR error-correction level."""

    kind = ErrorKind.INVALID_OPTION


class BatchInputError(SymbolGenError):
    """Batch document (JSON list) cannot be parsed."""

    kind = ErrorKind.BATCH_INPUT
