"""
Пакет symbolgen
===============

Движок кодирования и рендеринга символик: QR, EAN-13, DataMatrix, Code128 (GS1-128).

Этот пакет предоставляет:
    - Проверку и очистку входных данных для каждой символики
    - Собственные кодировщики EAN-13, Code128/GS1-128 и DataMatrix ECC200
    - QR-кодирование через библиотеку qrcode
    - Векторный рендеринг (SVG) с тихой зоной и растеризацию (PNG, Pillow)
    - Data URI как единственный внешний формат
    - Пакетную генерацию (строки или JSON)

Пример базового использования:
    >>> from symbolgen import encode, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> uri = encode("ean13", "590123412345")
    >>> uri.startswith("data:image/svg+xml;utf8,")
    True

Управление логированием:
    >>> import os
    >>> os.environ['SYMBOLGEN_LOG_LEVEL'] = 'DEBUG'
    >>> os.environ['SYMBOLGEN_LOG_FILE'] = 'logs/symbolgen.log'

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Dict

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__description__ = "Symbology encoding and rendering engine (QR, EAN-13, DataMatrix, Code128)"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

_PACKAGE_LOGGER = "symbolgen"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    - Консольный обработчик (stderr) для WARNING и выше
    - Ротирующий файловый обработчик, если задана SYMBOLGEN_LOG_FILE
    - Уровень из SYMBOLGEN_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR,
      CRITICAL; по умолчанию INFO)

    Идемпотентна: повторные вызовы не добавляют обработчиков.
    """
    log_level_str = os.environ.get("SYMBOLGEN_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(_PACKAGE_LOGGER)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get("SYMBOLGEN_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета ('symbolgen.<module_name>').

    Args:
        module_name: Обычно `__name__`; "__main__" становится "symbolgen.main".

    Returns:
        logging.Logger, наследующий обработчики пакета.

    Example:
        >>> get_logger("my_plugin").name
        'symbolgen.my_plugin'
    """
    if module_name == _PACKAGE_LOGGER or module_name.startswith(_PACKAGE_LOGGER + "."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_PACKAGE_LOGGER}.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{clean_name}")


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить доступность сторонних зависимостей.

    Returns:
        {"pillow": bool, "qrcode": bool}
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    try:
        import qrcode  # noqa: F401

        dependencies["qrcode"] = True
    except ImportError:
        dependencies["qrcode"] = False

    return dependencies


# Сначала настраиваем логирование (перед импортом подмодулей)
_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from .config import (  # noqa: E402
    DEFAULT_CONFIG,
    EngineConfig,
    RenderProfile,
    load_config,
)
from .engine import (  # noqa: E402
    BatchItemResult,
    EncodeOptions,
    batch_encode,
    build_symbol,
    encode,
    encode_async,
    parse_batch_json,
    parse_batch_lines,
    render_image,
)
from .exceptions import (  # noqa: E402
    BatchInputError,
    EmptyPayloadError,
    ErrorKind,
    InvalidCharsetError,
    InvalidCheckDigitError,
    InvalidGS1Error,
    InvalidLengthError,
    InvalidOptionError,
    PayloadTooLargeError,
    SymbolGenError,
    UnsupportedSymbologyError,
)
from .model import (  # noqa: E402
    AbstractSymbol,
    BarSymbol,
    EncodingRequest,
    GeneratedCode,
    MatrixSymbol,
    OutputFormat,
    QRErrorCorrection,
    Symbology,
)
from .render import (  # noqa: E402
    RenderedImage,
    VectorDrawing,
    decode_data_uri,
    svg_from_data_uri,
)

__all__ = [
    # Метаданные версии
    "__version__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "check_dependencies",
    "load_config",
    # Конфигурация
    "EngineConfig",
    "RenderProfile",
    "DEFAULT_CONFIG",
    # Диспетчер
    "encode",
    "encode_async",
    "render_image",
    "build_symbol",
    "EncodeOptions",
    "parse_batch_lines",
    "parse_batch_json",
    "batch_encode",
    "BatchItemResult",
    # Модель
    "Symbology",
    "OutputFormat",
    "QRErrorCorrection",
    "EncodingRequest",
    "GeneratedCode",
    "AbstractSymbol",
    "BarSymbol",
    "MatrixSymbol",
    # Рендеринг
    "VectorDrawing",
    "RenderedImage",
    "decode_data_uri",
    "svg_from_data_uri",
    # Исключения
    "SymbolGenError",
    "ErrorKind",
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

_logger = get_logger(__name__)
_logger.debug("symbolgen v%s initialized (Python %s)", __version__, sys.version.split()[0])
