# RU: Запись о сгенерированном коде для внешнего хранилища истории. Движок её только создаёт.
# EN: Hand-off record for the history/persistence collaborator; the engine never reads it back.

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict

from .enums import OutputFormat, Symbology

logger = logging.getLogger(__name__)

__all__ = ["GeneratedCode"]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass
class GeneratedCode:
    """
    Generated image plus the inputs that produced it.

    Stored opaquely by the persistence layer:
        record = GeneratedCode(Symbology.QR, "hello", OutputFormat.VECTOR, uri)
        store.save(record.to_dict())
    """

    schema_version: ClassVar[str] = "1.0"

    symbology: Symbology
    payload: str
    output_format: OutputFormat
    image: str
    description: str = ""
    created_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        dct: Dict[str, Any] = asdict(self)
        dct["symbology"] = self.symbology.value
        dct["output_format"] = self.output_format.value
        dct["schema_version"] = self.schema_version
        return dct

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GeneratedCode":
        d = dict(d)
        if "schema_version" in d and d["schema_version"] != cls.schema_version:
            logger.warning(
                "Schema version mismatch (expected %s, got %s)",
                cls.schema_version,
                d["schema_version"],
            )
        d.pop("schema_version", None)
        d["symbology"] = Symbology.parse(d["symbology"])
        d["output_format"] = OutputFormat.parse(d["output_format"])
        return cls(**d)

    def __str__(self) -> str:
        shown = self.payload[:16] + ("..." if len(self.payload) > 16 else "")
        return f"GeneratedCode({self.symbology.value}, data={shown})"
