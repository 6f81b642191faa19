import logging

import pytest

from symbolgen.exceptions import UnsupportedSymbologyError
from symbolgen.model import EncodingRequest, GeneratedCode, OutputFormat, Symbology


class TestEncodingRequest:
    def test_create_parses_names(self) -> None:
        req = EncodingRequest.create("hello", "QR Code", "png", description="d")
        assert req.symbology is Symbology.QR
        assert req.output_format is OutputFormat.RASTER
        assert req.description == "d"

    def test_resolved_format_defaults(self) -> None:
        assert EncodingRequest.create("x", "code128").resolved_format is OutputFormat.RASTER
        assert EncodingRequest.create("x", "qr").resolved_format is OutputFormat.VECTOR
        explicit = EncodingRequest.create("x", "code128", "svg")
        assert explicit.resolved_format is OutputFormat.VECTOR

    def test_unknown_symbology(self) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            EncodingRequest.create("x", "aztec")


class TestGeneratedCode:
    def _record(self) -> GeneratedCode:
        return GeneratedCode(
            symbology=Symbology.EAN13,
            payload="590123412345",
            output_format=OutputFormat.VECTOR,
            image="data:image/svg+xml;utf8,%3Csvg%3E",
            description="shelf label",
        )

    def test_to_dict(self) -> None:
        d = self._record().to_dict()
        assert d["symbology"] == "ean13"
        assert d["output_format"] == "vector"
        assert d["schema_version"] == GeneratedCode.schema_version
        assert d["created_at"]

    def test_from_dict_restores_record(self) -> None:
        record = self._record()
        restored = GeneratedCode.from_dict(record.to_dict())
        assert restored == record

    def test_schema_mismatch_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        d = self._record().to_dict()
        d["schema_version"] = "0.9"
        # пакетный логгер не распространяет записи в корневой
        pkg_logger = logging.getLogger("symbolgen")
        pkg_logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.WARNING, logger="symbolgen"):
                GeneratedCode.from_dict(d)
        finally:
            pkg_logger.removeHandler(caplog.handler)
        assert "Schema version mismatch" in caplog.text

    def test_str_truncates_payload(self) -> None:
        record = GeneratedCode(
            symbology=Symbology.QR,
            payload="https://example.com/very/long/path",
            output_format=OutputFormat.VECTOR,
            image="data:,",
        )
        assert "..." in str(record)
