"""Unit tests for server CLI parsing and startup wiring"""

import pytest

from airpad.common.config import BackendConfig
from airpad.input.factory import hostPointer_create
from airpad.server import main as server_main
from airpad.server.network import TrackpadListener
from airpad.server.server_cli import arguments_parse


class TestArgumentsParse:
    """Test server argument parsing"""

    def test_defaults_are_not_given(self):
        """Test unset flags parse as None so config values survive"""
        args = arguments_parse([])

        assert args.config is None
        assert args.host is None
        assert args.port is None
        assert args.backend is None
        assert args.advertise is None
        assert args.log_level is None

    def test_overrides(self):
        """Test every override flag"""
        args = arguments_parse(
            ["--host", "127.0.0.1", "--port", "0", "--backend", "uinput", "--display", ":1",
             "--no-advertise", "--log-level", "DEBUG", "--config", "airpad.yml"]
        )

        assert args.host == "127.0.0.1"
        assert args.port == 0
        assert args.backend == "uinput"
        assert args.display == ":1"
        assert args.advertise is False
        assert args.log_level == "DEBUG"
        assert args.config == "airpad.yml"

    def test_unknown_backend_rejected(self):
        """Test only supported backends are accepted"""
        with pytest.raises(SystemExit):
            arguments_parse(["--backend", "wayland"])


class TestStartupWiring:
    """Test config loading and listener construction"""

    def test_config_load_initializes_settings(self, tmp_path, reset_settings):
        """Test CLI overrides land in the initialized settings"""
        config_file = tmp_path / "config.yml"
        config_file.write_text("server:\n  port: 25000\n")
        args = arguments_parse(["--config", str(config_file), "--port", "0", "--no-advertise"])

        config = server_main.config_load(args)

        assert config.server.port == 0
        assert config.server.advertise is False
        assert server_main.settings.config is config

    def test_listener_without_advertisement(self, tmp_path, reset_settings, fake_host):
        """Test --no-advertise builds a listener with no advertiser"""
        config_file = tmp_path / "config.yml"
        config_file.write_text("")
        config = server_main.config_load(arguments_parse(["--config", str(config_file), "--no-advertise"]))

        listener = server_main.listener_create(config, fake_host)

        assert isinstance(listener, TrackpadListener)
        assert listener._advertiser is None

    def test_missing_config_exits_with_error(self, tmp_path, reset_settings):
        """Test an explicit missing config file stops startup"""
        args = arguments_parse(["--config", str(tmp_path / "absent.yml")])

        assert server_main.server_run(args) == 1

    def test_unknown_backend_in_config(self):
        """Test the factory rejects unsupported backend names"""
        with pytest.raises(ValueError, match="Unsupported backend"):
            hostPointer_create(BackendConfig(name="quartz"))
