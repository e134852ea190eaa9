"""
Tests for logging setup — level resolution and optional file output.
"""

import logging

import pytest

from devbootstrap.core.observability.logging_config import (
    FILE_ENV,
    LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV, "INFO")
        assert resolve_level() == "INFO"

    def test_default_warning(self, monkeypatch):
        monkeypatch.delenv(LEVEL_ENV, raising=False)
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_level(self, monkeypatch):
        monkeypatch.delenv(FILE_ENV, raising=False)
        setup_logging("INFO")

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_is_warning(self, monkeypatch):
        monkeypatch.delenv(FILE_ENV, raising=False)
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_output(self, tmp_path, monkeypatch):
        log_file = tmp_path / "bootstrap.log"
        monkeypatch.setenv(FILE_ENV, str(log_file))
        setup_logging("ERROR", log_file_level="DEBUG")

        logging.getLogger("devbootstrap.test").debug("probe exit 128")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "probe exit 128" in log_file.read_text()
