"""Configuration file loading and management"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Server configuration settings"""
    host: str = "0.0.0.0"
    port: int = 0  # 0 = ephemeral; clients find it through the advertisement
    advertise: bool = True
    poll_interval_ms: int = 50


@dataclass
class UInputConfig:
    """Settings for the uinput pointer backend"""
    screen_width: int = 1920
    screen_height: int = 1080
    hi_res_units_per_pixel: int = 8


@dataclass
class BackendConfig:
    """Host pointer backend selection"""
    name: str = "x11"
    display: Optional[str] = None
    scroll_pixels_per_step: int = 15
    uinput: UInputConfig = field(default_factory=UInputConfig)


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """Complete application configuration"""
    server: ServerConfig = field(default_factory=ServerConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section_get(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return a sub-dictionary, treating an absent or empty section as {}"""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return section


def _typed_get(section: Dict[str, Any], key: str, kind: type, default: Any, where: str) -> Any:
    """
    Read one scalar from a config section, checking its type

    Args:
        section: Config section mapping
        key: Key within the section
        kind: Expected Python type
        default: Value when the key is absent or null
        where: Section path for error messages

    Returns:
        The configured value or default

    Raises:
        ValueError: If the value has the wrong type
    """
    value = section.get(key)
    if value is None:
        return default
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and kind is not bool:
        raise ValueError(f"Config key '{where}.{key}' must be {kind.__name__}, got bool")
    if not isinstance(value, kind):
        raise ValueError(
            f"Config key '{where}.{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/airpad/config.yml",
        "/etc/airpad/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary (empty for an empty file)

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
            ValueError: If the document is not a mapping
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Every key is optional; missing keys take the dataclass defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a key has the wrong type
        """
        defaults = Config()

        server_data = _section_get(data, "server")
        server = ServerConfig(
            host=_typed_get(server_data, "host", str, defaults.server.host, "server"),
            port=_typed_get(server_data, "port", int, defaults.server.port, "server"),
            advertise=_typed_get(server_data, "advertise", bool, defaults.server.advertise, "server"),
            poll_interval_ms=_typed_get(
                server_data, "poll_interval_ms", int, defaults.server.poll_interval_ms, "server"
            ),
        )

        backend_data = _section_get(data, "backend")
        uinput_data = _section_get(backend_data, "uinput")
        uinput_defaults = defaults.backend.uinput
        uinput = UInputConfig(
            screen_width=_typed_get(
                uinput_data, "screen_width", int, uinput_defaults.screen_width, "backend.uinput"
            ),
            screen_height=_typed_get(
                uinput_data, "screen_height", int, uinput_defaults.screen_height, "backend.uinput"
            ),
            hi_res_units_per_pixel=_typed_get(
                uinput_data,
                "hi_res_units_per_pixel",
                int,
                uinput_defaults.hi_res_units_per_pixel,
                "backend.uinput",
            ),
        )
        backend = BackendConfig(
            name=_typed_get(backend_data, "name", str, defaults.backend.name, "backend"),
            display=_typed_get(backend_data, "display", str, None, "backend"),
            scroll_pixels_per_step=_typed_get(
                backend_data,
                "scroll_pixels_per_step",
                int,
                defaults.backend.scroll_pixels_per_step,
                "backend",
            ),
            uinput=uinput,
        )

        logging_data = _section_get(data, "logging")
        logging_config = LoggingConfig(
            level=_typed_get(logging_data, "level", str, defaults.logging.level, "logging"),
            file=_typed_get(logging_data, "file", str, None, "logging"),
            format=_typed_get(logging_data, "format", str, defaults.logging.format, "logging"),
        )

        if backend.scroll_pixels_per_step <= 0:
            raise ValueError("Config key 'backend.scroll_pixels_per_step' must be positive")

        return Config(server=server, backend=backend, logging=logging_config)

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Unlike an explicit path, the standard search locations are optional:
        when nothing is found the built-in defaults are returned.

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                logger.debug("No config file found, using built-in defaults")
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values; None means "not given"

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                host="127.0.0.1",
                port=25000
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("host") is not None:
            config.server.host = overrides["host"]
        if overrides.get("port") is not None:
            config.server.port = overrides["port"]
        if overrides.get("advertise") is not None:
            config.server.advertise = overrides["advertise"]
        if overrides.get("backend") is not None:
            config.backend.name = overrides["backend"]
        if overrides.get("display") is not None:
            config.backend.display = overrides["display"]
        if overrides.get("log_level") is not None:
            config.logging.level = overrides["log_level"]

        return config
