"""Per-call encoding request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .enums import OutputFormat, Symbology

__all__ = ["EncodingRequest"]


@dataclass(frozen=True)
class EncodingRequest:
    """
    One encode call: payload, symbology and (optionally) output format.

    `output_format=None` means the symbology default is used.
    `description` is carried through batch processing untouched.
    """

    payload: str
    symbology: Symbology
    output_format: Optional[OutputFormat] = None
    description: str = ""

    @classmethod
    def create(
        cls,
        payload: str,
        symbology: Union[Symbology, str],
        output_format: Union[OutputFormat, str, None] = None,
        description: str = "",
    ) -> "EncodingRequest":
        return cls(
            payload=payload,
            symbology=Symbology.parse(symbology),
            output_format=(
                OutputFormat.parse(output_format) if output_format is not None else None
            ),
            description=description,
        )

    @property
    def resolved_format(self) -> OutputFormat:
        return self.output_format or self.symbology.default_format
