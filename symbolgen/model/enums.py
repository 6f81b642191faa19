"""
model/enums.py

(Краткое RU: Перечисления символик, форматов вывода и уровней коррекции ошибок QR.)

EN: Domain enums for the symbology engine. Closed sets only, no encoding
logic here (see symbolgen.barcodegen for that).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Final, Literal, Optional, Union

from symbolgen.exceptions import InvalidOptionError, UnsupportedSymbologyError

_logger: Final[logging.Logger] = logging.getLogger(__name__)

__all__ = [
    "Symbology",
    "OutputFormat",
    "QRErrorCorrection",
]


class OutputFormat(str, Enum):
    VECTOR = "vector"
    RASTER = "raster"

    @property
    def mime_type(self) -> str:
        return "image/svg+xml" if self is OutputFormat.VECTOR else "image/png"

    @classmethod
    def parse(cls, raw: Union["OutputFormat", str]) -> "OutputFormat":
        """Accept enum members, "vector"/"svg" and "raster"/"png"."""
        if isinstance(raw, OutputFormat):
            return raw
        value = str(raw).strip().lower()
        aliases: Dict[str, OutputFormat] = {
            "vector": cls.VECTOR,
            "svg": cls.VECTOR,
            "raster": cls.RASTER,
            "png": cls.RASTER,
        }
        if value not in aliases:
            raise InvalidOptionError(
                f"Unknown output format: {raw!r}",
                context={"option": "output_format", "supported": sorted(aliases)},
            )
        return aliases[value]


class QRErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @classmethod
    def parse(cls, raw: Union["QRErrorCorrection", str]) -> "QRErrorCorrection":
        """Accept enum members and level letters in any case."""
        if isinstance(raw, QRErrorCorrection):
            return raw
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            raise InvalidOptionError(
                f"Unknown QR error correction level: {raw!r}",
                symbology="qr",
                context={"option": "error_correction", "supported": [e.value for e in cls]},
            ) from None


class Symbology(str, Enum):
    QR = "qr"
    EAN13 = "ean13"
    DATAMATRIX = "datamatrix"
    CODE128 = "code128"

    @property
    def is_matrix(self) -> bool:
        return self in {Symbology.QR, Symbology.DATAMATRIX}

    @property
    def default_format(self) -> OutputFormat:
        # Code128 defaults to PNG
        if self is Symbology.CODE128:
            return OutputFormat.RASTER
        return OutputFormat.VECTOR

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            self.QR: "QR код",
            self.EAN13: "EAN-13",
            self.DATAMATRIX: "DataMatrix",
            self.CODE128: "Code 128 (GS1-128)",
        }
        names_en = {
            self.QR: "QR code",
            self.EAN13: "EAN-13",
            self.DATAMATRIX: "DataMatrix",
            self.CODE128: "Code 128 (GS1-128)",
        }
        return names_ru[self] if lang == "ru" else names_en[self]

    @classmethod
    def parse(cls, raw: Union["Symbology", str, None]) -> "Symbology":
        """
        Normalize a symbology given as enum, value or UI display name.

        Args:
            raw: e.g. Symbology.QR, "qr", "QR Code", "EAN-13", "ean128".

        Returns:
            Symbology member.

        Raises:
            UnsupportedSymbologyError: name not recognized.
        """
        if isinstance(raw, Symbology):
            return raw
        value = str(raw or "").strip().lower()
        found = _lookup_name(value)
        if found is None:
            _logger.warning("Unsupported symbology requested: %r", raw)
            raise UnsupportedSymbologyError(
                f"Unsupported symbology: {raw!r}",
                context={"supported": [s.value for s in cls]},
            )
        return found


_DISPLAY_NAMES: Final[Dict[Symbology, str]] = {
    Symbology.QR: "QR Code",
    Symbology.EAN13: "EAN-13",
    Symbology.DATAMATRIX: "DataMatrix",
    Symbology.CODE128: "Code128",
}

# GS1-128 is Code128 with FNC1; older clients send "ean128"
_LEGACY_ALIASES: Final[Dict[str, Symbology]] = {
    "ean128": Symbology.CODE128,
    "gs1128": Symbology.CODE128,
}


def _lookup_name(value: str) -> Optional[Symbology]:
    for sym in Symbology:
        if value == sym.value or value == _DISPLAY_NAMES[sym].lower():
            return sym
    return _LEGACY_ALIASES.get(value)
