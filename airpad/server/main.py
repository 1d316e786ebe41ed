"""airpad server main entry point"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import NoReturn, Optional

from airpad import __version__
from airpad.common.config import Config, ConfigLoader
from airpad.common.settings import settings
from airpad.input.backend import HostPointer, HostPointerError
from airpad.input.factory import hostPointer_create
from airpad.server.discovery import ServiceAdvertiser
from airpad.server.network import TrackpadListener
from airpad.server.pipeline import EventPipeline
from airpad.server.server_cli import arguments_parse
from airpad.server.server_logging import logging_setup
from airpad.server.state import server_state

logger = logging.getLogger(__name__)


def config_load(args: argparse.Namespace) -> Config:
    """
    Load configuration with CLI overrides and initialize settings

    Args:
        args: Parsed server CLI args

    Returns:
        Loaded config
    """
    config_path: Optional[Path] = Path(args.config) if args.config else None
    config = ConfigLoader.configWithOverrides_load(
        file_path=config_path,
        host=args.host,
        port=args.port,
        advertise=args.advertise,
        backend=args.backend,
        display=args.display,
        log_level=args.log_level,
    )
    settings.initialize(config)
    return config


def listener_create(config: Config, host_pointer: HostPointer) -> TrackpadListener:
    """
    Wire pipeline, advertiser and listener around a connected host pointer

    Args:
        config: Loaded config
        host_pointer: Connected host pointer backend

    Returns:
        Listener, not yet started
    """
    pipeline = EventPipeline(host=host_pointer, state=server_state)
    advertiser = ServiceAdvertiser() if config.server.advertise else None
    return TrackpadListener(
        host=config.server.host,
        port=config.server.port,
        handler=pipeline,
        state=server_state,
        advertiser=advertiser,
    )


def server_run(args: argparse.Namespace) -> int:
    """
    Run airpad server until interrupted

    Args:
        args: Parsed command line arguments

    Returns:
        Process exit code
    """
    try:
        config = config_load(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        logging_setup(config.logging.level, config.logging.format, config.logging.file)
    except (OSError, ValueError) as e:
        print(f"Error configuring logging: {e}", file=sys.stderr)
        return 1

    logger.info(f"airpad server v{__version__}")
    logger.info(f"Backend: {config.backend.name}")
    logger.info(f"Advertise: {settings.SERVICE_TYPE if config.server.advertise else 'disabled'}")

    try:
        host_pointer = hostPointer_create(config.backend)
        host_pointer.connection_establish()
    except (HostPointerError, ValueError) as e:
        logger.error(f"Failed to open host pointer: {e}")
        return 1

    listener = listener_create(config, host_pointer)
    signal.signal(signal.SIGTERM, lambda _signum, _frame: listener.loop_stop())

    try:
        if not listener.server_start():
            logger.error(server_state.status)
            return 1

        logger.info("Server running. Press Ctrl+C to stop.")
        listener.loop_run(config.server.poll_interval_ms / 1000.0)
    finally:
        listener.server_stop()
        host_pointer.connection_close()

    return 0


def main() -> NoReturn:
    """Main entry point"""
    args = arguments_parse()

    try:
        exit_code = server_run(args)
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
