"""
RU: QR-кодировщик поверх библиотеки qrcode (ISO/IEC 18004), байтовый режим.
EN: QR encoder. Version selection, RS interleaving and mask scoring are
delegated to `qrcode`; this module only pins byte mode, maps the
error-correction level and exposes the bare module grid.
"""

from __future__ import annotations

import logging
from typing import Dict, Final, Union

import qrcode
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.exceptions import DataOverflowError
from qrcode.util import MODE_8BIT_BYTE, QRData

from symbolgen.exceptions import PayloadTooLargeError
from symbolgen.model.enums import QRErrorCorrection, Symbology
from symbolgen.model.symbol import MatrixSymbol

logger = logging.getLogger(__name__)

__all__ = ["QUIET_ZONE", "MAX_VERSION", "encode"]

QUIET_ZONE: Final[int] = 4
MAX_VERSION: Final[int] = 40

_ECC_LEVELS: Final[Dict[QRErrorCorrection, int]] = {
    QRErrorCorrection.L: ERROR_CORRECT_L,
    QRErrorCorrection.M: ERROR_CORRECT_M,
    QRErrorCorrection.Q: ERROR_CORRECT_Q,
    QRErrorCorrection.H: ERROR_CORRECT_H,
}


def encode(
    text: str,
    error_correction: Union[QRErrorCorrection, str] = QRErrorCorrection.M,
) -> MatrixSymbol:
    """
    Encode text as a QR symbol in byte mode, smallest fitting version.

    Args:
        text: Payload; encoded as UTF-8 bytes.
        error_correction: L/M/Q/H (default M).

    Returns:
        MatrixSymbol without border, quiet_zone=4.

    Raises:
        PayloadTooLargeError: does not fit version 40 at this level.
    """
    level = QRErrorCorrection.parse(error_correction)
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ECC_LEVELS[level],
        border=0,
    )
    qr.add_data(QRData(text.encode("utf-8"), mode=MODE_8BIT_BYTE))
    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        size = len(text.encode("utf-8"))
        logger.warning("QR payload of %d bytes overflows version 40", size)
        raise PayloadTooLargeError(
            f"QR payload too large for version {MAX_VERSION} at level {level.value}",
            symbology=Symbology.QR.value,
            context={"bytes": size, "level": level.value},
        ) from e

    matrix = qr.get_matrix()
    logger.debug(
        "QR version %s level %s -> %dx%d", qr.version, level.value, len(matrix), len(matrix)
    )
    return MatrixSymbol.from_rows(matrix, quiet_zone=QUIET_ZONE, text=text)
