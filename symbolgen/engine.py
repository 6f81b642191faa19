"""
RU: Диспетчер: выбор кодировщика по символике, рендеринг, конвертация в data URI; пакетная генерация.
EN: Dispatcher facade. Stateless: every call validates, encodes, renders and
converts from scratch using the configuration it is given.

Example:
    >>> uri = encode("ean13", "590123412345")
    >>> uri.startswith("data:image/svg+xml;utf8,")
    True
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Final,
    Iterable,
    List,
    Optional,
    TypedDict,
    Union,
)

from symbolgen.barcodegen import code128, datamatrix, ean13, qr
from symbolgen.barcodegen.validation import validate
from symbolgen.config import DEFAULT_CONFIG, EngineConfig, RenderProfile
from symbolgen.exceptions import (
    BatchInputError,
    SymbolGenError,
    UnsupportedSymbologyError,
)
from symbolgen.model.enums import OutputFormat, QRErrorCorrection, Symbology
from symbolgen.model.record import GeneratedCode
from symbolgen.model.request import EncodingRequest
from symbolgen.model.symbol import AbstractSymbol
from symbolgen.render.converter import RenderedImage
from symbolgen.render.renderer import render

logger = logging.getLogger(__name__)

__all__ = [
    "EncodeOptions",
    "BatchItemResult",
    "ENCODERS",
    "build_symbol",
    "render_image",
    "encode",
    "encode_async",
    "parse_batch_lines",
    "parse_batch_json",
    "batch_encode",
]


class EncodeOptions(TypedDict, total=False):
    """
    Типобезопасные опции одного вызова кодирования.

    Все поля опциональны (total=False); отсутствующие берутся из EngineConfig.

    Example:
        >>> options: EncodeOptions = {"error_correction": "H"}
        >>> encode("qr", "https://example.com", options=options)  # doctest: +SKIP
    """

    error_correction: Union[QRErrorCorrection, str]  # Уровень коррекции QR (L/M/Q/H)
    profile: RenderProfile  # Переопределить геометрию для этого вызова


Encoder = Callable[[str, EncodeOptions, EngineConfig], AbstractSymbol]


def _encode_qr(text: str, options: EncodeOptions, config: EngineConfig) -> AbstractSymbol:
    level = QRErrorCorrection.parse(
        options.get("error_correction", config.qr_error_correction)
    )
    return qr.encode(text, error_correction=level)


ENCODERS: Final[Dict[Symbology, Encoder]] = {
    Symbology.QR: _encode_qr,
    Symbology.EAN13: lambda text, options, config: ean13.encode(text),
    Symbology.DATAMATRIX: lambda text, options, config: datamatrix.encode(text),
    Symbology.CODE128: lambda text, options, config: code128.encode(text),
}


def build_symbol(
    symbology: Union[Symbology, str],
    payload: Optional[str],
    options: Optional[EncodeOptions] = None,
    config: Optional[EngineConfig] = None,
) -> AbstractSymbol:
    """
    Validate the payload and run the symbology's encoder.

    Raises:
        UnsupportedSymbologyError: unknown symbology.
        InvalidOptionError: unknown QR error-correction level.
        SymbolGenError subclasses from validation and encoding.
    """
    sym = Symbology.parse(symbology)
    text = validate(sym, payload)
    return ENCODERS[sym](text, options or {}, config or DEFAULT_CONFIG)


def render_image(
    symbology: Union[Symbology, str],
    payload: Optional[str],
    output_format: Union[OutputFormat, str, None] = None,
    options: Optional[EncodeOptions] = None,
    config: Optional[EngineConfig] = None,
) -> RenderedImage:
    """
    Encode and render a payload to SVG or PNG.

    Args:
        symbology: Symbology enum, value or display name.
        payload: Raw user text.
        output_format: "vector"/"svg" or "raster"/"png"; None picks the
            symbology default (Code128 raster, others vector).
        options: Per-call overrides (QR error correction, geometry).
        config: Engine configuration (default: DEFAULT_CONFIG).

    Returns:
        RenderedImage with `content` and `data_uri`.

    Raises:
        InvalidOptionError: unknown output format or QR level.
        SymbolGenError: any validation/encoding failure, unchanged.
    """
    cfg = config or DEFAULT_CONFIG
    opts: EncodeOptions = options or {}
    try:
        sym = Symbology.parse(symbology)
        fmt = (
            OutputFormat.parse(output_format)
            if output_format is not None
            else sym.default_format
        )
        symbol = build_symbol(sym, payload, opts, cfg)
        profile = cfg.profile(sym, fmt, opts.get("profile"))
        drawing = render(symbol, sym, profile)
        image = RenderedImage.from_drawing(
            drawing, fmt, scale=cfg.raster_scale, supersample=cfg.supersample
        )
    except SymbolGenError as e:
        logger.warning("Code generation failed for %s: %s", symbology, e)
        raise

    logger.info(
        "Generated %s %s (%dx%d)", sym.value, fmt.value, image.width, image.height
    )
    return image


def encode(
    symbology: Union[Symbology, str],
    payload: Optional[str],
    output_format: Union[OutputFormat, str, None] = None,
    options: Optional[EncodeOptions] = None,
    config: Optional[EngineConfig] = None,
) -> str:
    """Encode a payload and return an embeddable data URI."""
    return render_image(symbology, payload, output_format, options, config).data_uri


async def encode_async(
    symbology: Union[Symbology, str],
    payload: Optional[str],
    output_format: Union[OutputFormat, str, None] = None,
    options: Optional[EncodeOptions] = None,
    config: Optional[EngineConfig] = None,
) -> str:
    """Async wrapper for encode (runs in the default thread pool)."""
    import asyncio

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, lambda: encode(symbology, payload, output_format, options, config)
    )


# ==============================================================================
# BATCH
# ==============================================================================


@dataclass(frozen=True)
class BatchItemResult:
    """
    Outcome of one batch item: a data URI or the typed error.

    Attributes:
        request: The input request, untouched.
        data_uri: Image in the requested/default format.
        svg_data_uri: Vector companion for raster Code128 items.
        error: Validation/encoding error when the item failed.
    """

    request: EncodingRequest
    data_uri: Optional[str] = None
    svg_data_uri: Optional[str] = None
    error: Optional[SymbolGenError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_record(self) -> Optional[GeneratedCode]:
        """History record for a successful item, None for a failed one."""
        if self.data_uri is None:
            return None
        return GeneratedCode(
            symbology=self.request.symbology,
            payload=self.request.payload,
            output_format=self.request.resolved_format,
            image=self.data_uri,
            description=self.request.description,
        )


def parse_batch_lines(
    text: str,
    symbology: Union[Symbology, str],
    output_format: Union[OutputFormat, str, None] = None,
) -> List[EncodingRequest]:
    """One request per non-blank line, all of the same symbology."""
    return [
        EncodingRequest.create(line.strip(), symbology, output_format)
        for line in text.splitlines()
        if line.strip()
    ]


def parse_batch_json(text: str) -> List[EncodingRequest]:
    """
    Parse a JSON array of `{"text": ..., "type": ..., "description": ...}`.

    Entries without text/type or with an unknown type are skipped with a
    warning.

    Raises:
        BatchInputError: invalid JSON or top-level value is not an array.
    """
    try:
        items: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise BatchInputError(
            f"Invalid batch JSON at line {e.lineno}, column {e.colno}",
            context={"line": e.lineno, "column": e.colno},
        ) from e
    if not isinstance(items, list):
        raise BatchInputError(
            f"Batch JSON must be an array, got {type(items).__name__}"
        )

    requests: List[EncodingRequest] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict) or not item.get("text") or not item.get("type"):
            logger.warning("Batch entry %d skipped: 'text' and 'type' are required", index)
            continue
        try:
            requests.append(
                EncodingRequest.create(
                    str(item["text"]),
                    str(item["type"]),
                    description=str(item.get("description", "")),
                )
            )
        except UnsupportedSymbologyError as e:
            logger.warning("Batch entry %d skipped: %s", index, e)
    logger.debug("Parsed %d of %d batch entries", len(requests), len(items))
    return requests


def _encode_item(request: EncodingRequest, config: EngineConfig) -> BatchItemResult:
    fmt = request.resolved_format
    try:
        data_uri = encode(request.symbology, request.payload, fmt, config=config)
        svg_uri = None
        if request.symbology is Symbology.CODE128 and fmt is OutputFormat.RASTER:
            svg_uri = encode(
                request.symbology, request.payload, OutputFormat.VECTOR, config=config
            )
    except SymbolGenError as e:
        return BatchItemResult(request=request, error=e)
    return BatchItemResult(request=request, data_uri=data_uri, svg_data_uri=svg_uri)


def batch_encode(
    requests: Iterable[EncodingRequest],
    parallel: bool = False,
    config: Optional[EngineConfig] = None,
) -> List[BatchItemResult]:
    """
    Encode every request independently. A failing item never aborts the batch.

    Args:
        requests: Batch items.
        parallel: Encode in a thread pool.
        config: Engine configuration shared by all items.

    Returns:
        One BatchItemResult per request, in input order.
    """
    cfg = config or DEFAULT_CONFIG
    items = list(requests)

    def gen(request: EncodingRequest) -> BatchItemResult:
        return _encode_item(request, cfg)

    if parallel:
        with ThreadPoolExecutor() as pool:
            results = list(pool.map(gen, items))
    else:
        results = [gen(r) for r in items]
    failed = sum(1 for r in results if not r.ok)
    logger.info(
        "Batch generation complete: %d items, %d failed", len(items), failed
    )
    return results
