"""Backend factory functions."""

from __future__ import annotations

from airpad.common.config import BackendConfig
from airpad.input.backend import HostPointer

SUPPORTED_BACKENDS: tuple[str, ...] = ("x11", "uinput")


def hostPointer_create(backend_config: BackendConfig) -> HostPointer:
    """
    Create the host pointer backend named in configuration.

    Backend modules are imported lazily so a host only needs the native
    library of the backend it actually uses.

    Args:
        backend_config: Backend section of the loaded config

    Returns:
        Unconnected host pointer

    Raises:
        ValueError: If the backend name is not supported
    """
    backend = backend_config.name.lower()

    if backend == "x11":
        from airpad.x11.backend import X11HostPointer

        return X11HostPointer(
            display_name=backend_config.display,
            scroll_pixels_per_step=backend_config.scroll_pixels_per_step,
        )

    if backend == "uinput":
        from airpad.uinput.backend import UInputHostPointer

        return UInputHostPointer(
            screen_width=backend_config.uinput.screen_width,
            screen_height=backend_config.uinput.screen_height,
            hi_res_units_per_pixel=backend_config.uinput.hi_res_units_per_pixel,
        )

    raise ValueError(
        f"Unsupported backend '{backend_config.name}'. Supported: {', '.join(SUPPORTED_BACKENDS)}."
    )
