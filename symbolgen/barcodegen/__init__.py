"""
barcodegen

Кодировщики символик: из проверенной строки в абстрактный символ (BarSymbol / MatrixSymbol).

- EAN-13 и Code128/GS1-128: последовательность ширин штрихов
- DataMatrix ECC200 и QR: матрица модулей
- validation: очистка и проверка входных данных перед кодированием

Public API:
    - validate, sanitize: проверка входных данных
    - ean13, code128, datamatrix, qr: модули кодировщиков (у каждого есть encode(text))

Примеры:
    >>> from symbolgen.barcodegen import ean13
    >>> ean13.encode("590123412345").text
    '5901234123457'

Зависимости:
    qrcode (только QR)
"""

from symbolgen.barcodegen import code128, datamatrix, ean13, qr
from symbolgen.barcodegen.validation import sanitize, validate

__all__ = [
    "code128",
    "datamatrix",
    "ean13",
    "qr",
    "sanitize",
    "validate",
]
