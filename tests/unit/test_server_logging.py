"""Unit tests for server logging setup and version reporting"""

import logging

import pytest

import airpad
from airpad.server import server_logging
from airpad.server.server_cli import arguments_parse
from airpad.server.server_logging import logFormatWithVersion_get, logging_setup


class TestVersion:
    """Test version reporting"""

    def test_version_is_static(self):
        """Test the package version is a plain release string"""
        assert airpad.__version__ == "1.0.0"

    def test_version_flag(self, capsys):
        """Test --version prints the package version and exits"""
        with pytest.raises(SystemExit) as exc_info:
            arguments_parse(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "airpad 1.0.0"


class TestLoggingSetup:
    """Test logging configuration"""

    def test_format_tagged_with_version(self):
        """Test the timestamp carries the version tag"""
        log_format = logFormatWithVersion_get("%(asctime)s - %(message)s")

        assert log_format == "%(asctime)s [v1.0.0] - %(message)s"

    def test_invalid_level_rejected(self):
        """Test an unknown level name raises ValueError"""
        with pytest.raises(ValueError, match="Invalid log level"):
            logging_setup("LOUD", "%(message)s", None)

    def test_file_handler_added(self, tmp_path, monkeypatch):
        """Test a configured log file gets its own handler"""
        captured = {}
        monkeypatch.setattr(
            server_logging.logging, "basicConfig", lambda **kwargs: captured.update(kwargs)
        )
        log_file = tmp_path / "airpad.log"

        logging_setup("debug", "%(asctime)s %(message)s", str(log_file))

        assert captured["level"] == logging.DEBUG
        assert captured["format"] == "%(asctime)s [v1.0.0] %(message)s"
        handler_types = [type(handler) for handler in captured["handlers"]]
        assert handler_types == [logging.StreamHandler, logging.FileHandler]
        for handler in captured["handlers"]:
            handler.close()
