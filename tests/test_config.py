"""Tests for settings and logging configuration."""
from __future__ import annotations

import io
import logging

import pytest
from loguru import logger

from flatfile import FieldFormat, FlatFile
from flatfile.config import Settings, configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("ENV", "LOG_LEVEL", "FLATFILE_ENCODING", "FLATFILE_LINE_ENDING"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.APP_NAME == "flatfile"
        assert s.ENV == "development"
        assert s.LOG_LEVEL is None
        assert s.FLATFILE_ENCODING == "utf-8"
        assert s.FLATFILE_LINE_ENDING == "\n"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLATFILE_ENCODING", "latin-1")
        monkeypatch.setenv("FLATFILE_LINE_ENDING", "\r\n")
        s = Settings(_env_file=None)
        assert s.FLATFILE_ENCODING == "latin-1"
        assert s.FLATFILE_LINE_ENDING == "\r\n"

    def test_flat_file_uses_configured_encoding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from flatfile.core.codec import flatfile as flatfile_module

        monkeypatch.setattr(flatfile_module.settings, "FLATFILE_ENCODING", "latin-1")
        ff = FlatFile([FieldFormat("city", 0, 6)])
        assert ff.encoding == "latin-1"
        ff.read_from(io.BytesIO("Malmö ".encode("latin-1")))
        assert ff.value(0, "city") == "Malmö"


class TestLogging:
    @pytest.fixture
    def captured(self):
        configure_logging(level="DEBUG", force=True)
        messages: list[str] = []
        handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
        yield messages
        logger.remove(handler_id)
        logger.disable("flatfile")

    def test_codec_logs_once_enabled(self, captured: list[str]) -> None:
        ff = FlatFile([FieldFormat("name", 0, 8)])
        ff.read_from(io.BytesIO(b"Yoda    \nLuke    "))
        assert any("2 line(s) appended" in m for m in captured)

    def test_rejected_line_is_logged(self, captured: list[str]) -> None:
        ff = FlatFile(lambda raw: None)
        with pytest.raises(Exception):
            ff.read_from(io.BytesIO(b"Yoda    "))
        assert any("Stopped reading at line 1" in m for m in captured)

    def test_stdlib_logging_is_intercepted(self, captured: list[str]) -> None:
        logging.getLogger("some.library").warning("hello from stdlib")
        assert any("hello from stdlib" in m for m in captured)

    def test_configuration_names_the_application(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        from flatfile.config import logging_config

        monkeypatch.setattr(logging_config.settings, "APP_NAME", "roster-loader")
        monkeypatch.setattr(logging_config.settings, "APP_VERSION", "2.3.1")
        monkeypatch.setattr(logging_config.settings, "LOG_TO_FILE", False)
        try:
            configure_logging(level="INFO", force=True)
            assert "Logging configured for roster-loader 2.3.1" in capsys.readouterr().err
        finally:
            logger.disable("flatfile")
