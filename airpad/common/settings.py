"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Protocol-level constants (must match between server and handheld client)
2. Application constants (buffer sizes, defaults)
3. Runtime configuration from config.yml

Usage:
    from airpad.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    chunk = sock.recv(settings.RECEIVE_CHUNK_SIZE)
"""

from typing import Optional

from airpad.common.config import Config


class Settings:
    """Singleton settings manager combining config.yml and protocol constants

    Protocol constants here are shared by convention with the handheld client
    and are deliberately not exposed in config.yml.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Loaded configuration
        """
        self._config = config

    # =========================================================================
    # Protocol Constants
    # =========================================================================

    SERVICE_TYPE: str = "_airpad._tcp.local."
    """DNS-SD service type the handheld browses for"""

    SERVICE_NAME: str = "airpad-trackpad"
    """Instance name advertised under SERVICE_TYPE"""

    MESSAGE_DELIMITER: bytes = b"\n"
    """One encoded event per line"""

    # =========================================================================
    # Transport Constants
    # =========================================================================

    RECEIVE_CHUNK_SIZE: int = 4096
    """Bytes requested per socket receive"""

    MAX_BUFFER_SIZE: int = 64 * 1024
    """Largest undelimited backlog tolerated from a peer before failing it

    A single trackpad event encodes to well under 100 bytes, so anything
    near this size means the peer is not speaking the protocol.
    """

    LISTEN_BACKLOG: int = 4
    """Pending connection attempts queued by the kernel"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from airpad.common.settings import settings
"""
