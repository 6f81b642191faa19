# -*- coding: utf-8 -*-
"""
RU: Конфигурация рендеринга: профили размеров для каждой символики и формата, загрузка из JSON.
EN: Rendering configuration: per-(symbology, format) size profiles and JSON loading.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Tuple

from symbolgen.exceptions import UnsupportedSymbologyError
from symbolgen.model.enums import OutputFormat, QRErrorCorrection, Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "RenderProfile",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH: Final[Path] = Path("symbolgen.json")

# Code128 vector bar height, independent of unit
CODE128_VECTOR_HEIGHT: Final[int] = 100


@dataclass(frozen=True)
class RenderProfile:
    """
    Geometry for one (symbology, format) pair.

    Attributes:
        unit: Pixels per module / bar-width unit (x-dimension).
        height: Bar height in pixels (1D only, ignored for 2D).
        quiet_zone: Blank margin in units. None for 2D symbols means
            "use the quiet zone the encoder recommends".

    Examples:
        >>> RenderProfile(unit=2, height=80, quiet_zone=10).unit
        2
    """

    unit: int
    height: int = 0
    quiet_zone: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.unit < 1:
            raise ValueError("unit must be >= 1")
        if self.height < 0:
            raise ValueError("height must be >= 0")
        if self.quiet_zone is not None and self.quiet_zone < 1:
            raise ValueError("quiet_zone must be >= 1 module")


ProfileKey = Tuple[Symbology, OutputFormat]

_DEFAULT_PROFILES: Final[Dict[ProfileKey, RenderProfile]] = {
    # EAN-13: 11X quiet zone (left-hand minimum applied on every side)
    (Symbology.EAN13, OutputFormat.VECTOR): RenderProfile(unit=2, height=120, quiet_zone=11),
    (Symbology.EAN13, OutputFormat.RASTER): RenderProfile(unit=2, height=120, quiet_zone=11),
    # Code128: raster uses a wider x-dimension and taller bars
    (Symbology.CODE128, OutputFormat.VECTOR): RenderProfile(
        unit=2, height=CODE128_VECTOR_HEIGHT, quiet_zone=10
    ),
    (Symbology.CODE128, OutputFormat.RASTER): RenderProfile(unit=3, height=150, quiet_zone=10),
    (Symbology.QR, OutputFormat.VECTOR): RenderProfile(unit=10),
    (Symbology.QR, OutputFormat.RASTER): RenderProfile(unit=10),
    (Symbology.DATAMATRIX, OutputFormat.VECTOR): RenderProfile(unit=10),
    (Symbology.DATAMATRIX, OutputFormat.RASTER): RenderProfile(unit=10),
}


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine-wide settings. Passed explicitly; never cached by the engine.

    Attributes:
        raster_scale: Output pixels per drawing pixel for PNG export.
        supersample: Extra factor used while painting before the
            nearest-neighbour downsample.
        qr_error_correction: Default QR level when a call does not set one.
        profiles: Geometry per (symbology, format).
    """

    raster_scale: int = 2
    supersample: int = 4
    qr_error_correction: QRErrorCorrection = QRErrorCorrection.M
    profiles: Mapping[ProfileKey, RenderProfile] = field(
        default_factory=lambda: dict(_DEFAULT_PROFILES)
    )

    def __post_init__(self) -> None:
        if self.raster_scale < 1:
            raise ValueError("raster_scale must be >= 1")
        if self.supersample < 1:
            raise ValueError("supersample must be >= 1")

    def profile(
        self,
        symbology: Symbology,
        output_format: OutputFormat,
        override: Optional[RenderProfile] = None,
    ) -> RenderProfile:
        """
        Geometry for one (symbology, format) pair.

        `override` replaces the configured profile for a single call. The
        Code128 vector height stays pinned to CODE128_VECTOR_HEIGHT either way.
        """
        profile = override or self.profiles.get((symbology, output_format))
        if profile is None:
            return _DEFAULT_PROFILES[(symbology, output_format)]
        if symbology is Symbology.CODE128 and output_format is OutputFormat.VECTOR:
            return replace(profile, height=CODE128_VECTOR_HEIGHT)
        return profile

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """
        Build from a JSON-like mapping.

        Example:
            >>> EngineConfig.from_dict({
            ...     "raster_scale": 3,
            ...     "profiles": {"code128": {"raster": {"unit": 4, "height": 160}}},
            ... }).raster_scale
            3
        """
        profiles: Dict[ProfileKey, RenderProfile] = dict(_DEFAULT_PROFILES)
        for sym_name, per_format in (data.get("profiles") or {}).items():
            symbology = Symbology.parse(sym_name)
            for fmt_name, values in per_format.items():
                key = (symbology, OutputFormat.parse(fmt_name))
                profiles[key] = replace(profiles[key], **values)
        return cls(
            raster_scale=int(data.get("raster_scale", 2)),
            supersample=int(data.get("supersample", 4)),
            qr_error_correction=QRErrorCorrection.parse(
                str(data.get("qr_error_correction", "M"))
            ),
            profiles=profiles,
        )


DEFAULT_CONFIG: Final[EngineConfig] = EngineConfig()


def load_config(config_path: Optional[Path] = None) -> EngineConfig:
    """
    Load engine configuration from JSON, falling back to defaults.

    Missing file, invalid JSON or invalid values are logged as warnings and
    the default configuration is returned.

    Args:
        config_path: Path to the JSON file (default: ./symbolgen.json).

    Returns:
        EngineConfig with user values merged over defaults.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.info("Config file %s not found, using defaults", config_path)
        return DEFAULT_CONFIG

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"Config must be a JSON object, got {type(user_config).__name__}"
            )
        config = EngineConfig.from_dict(user_config)
    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d; using defaults",
            config_path,
            e.lineno,
            e.colno,
        )
        return DEFAULT_CONFIG
    except OSError as e:
        logger.warning("Could not read %s: %s; using defaults", config_path, e)
        return DEFAULT_CONFIG
    except (ValueError, TypeError, KeyError, AttributeError, UnsupportedSymbologyError) as e:
        logger.warning("Invalid config in %s: %s; using defaults", config_path, e)
        return DEFAULT_CONFIG

    logger.info("Config loaded from %s", config_path)
    logger.debug("Config: %r", config)
    return config
