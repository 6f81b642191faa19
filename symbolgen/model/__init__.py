"""Domain model: symbologies, requests, abstract symbols and history records."""

from .enums import OutputFormat, QRErrorCorrection, Symbology
from .record import GeneratedCode
from .request import EncodingRequest
from .symbol import AbstractSymbol, BarSymbol, MatrixSymbol, widths_from_modules

__all__ = [
    "Symbology",
    "OutputFormat",
    "QRErrorCorrection",
    "EncodingRequest",
    "GeneratedCode",
    "AbstractSymbol",
    "BarSymbol",
    "MatrixSymbol",
    "widths_from_modules",
]
