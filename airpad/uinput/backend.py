"""uinput host pointer backend using evdev.

Works wherever the kernel input stack is honoured (Wayland compositors, the
console, X11). The virtual device reports absolute coordinates, so display
geometry comes from configuration rather than from a display server.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from evdev import AbsInfo, UInput, UInputError, ecodes

from airpad.common.types import DisplayBounds, ScreenPoint
from airpad.input.backend import HostPointer, HostPointerError

logger = logging.getLogger(__name__)

UINPUT_PATH: str = "/dev/uinput"
DEVICE_NAME: str = "airpad-virtual-trackpad"


class UInputHostPointer(HostPointer):
    """Host pointer backed by a virtual absolute pointer device."""

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        hi_res_units_per_pixel: int = 8,
        device_path: str = UINPUT_PATH,
    ) -> None:
        """
        Initialize uinput host pointer.

        Args:
            screen_width: Display width in pixels.
            screen_height: Display height in pixels.
            hi_res_units_per_pixel: High-resolution wheel units per scrolled pixel.
            device_path: uinput device node.
        """
        self._bounds: DisplayBounds = DisplayBounds(
            origin_x=0, origin_y=0, width=screen_width, height=screen_height
        )
        self._hi_res_units_per_pixel: int = hi_res_units_per_pixel
        self._device_path: str = device_path
        self._device: Optional[UInput] = None
        # uinput cannot be queried; the last position written is the pointer location
        self._position: ScreenPoint = self._bounds.center

    def connection_establish(self) -> None:
        """
        Create the virtual pointer device.

        Raises:
            HostPointerError: If uinput is unavailable or not writable.
        """
        width = int(self._bounds.width)
        height = int(self._bounds.height)
        capabilities = {
            ecodes.EV_KEY: [ecodes.BTN_LEFT, ecodes.BTN_RIGHT, ecodes.BTN_MIDDLE],
            ecodes.EV_ABS: [
                (ecodes.ABS_X, AbsInfo(value=0, min=0, max=width - 1, fuzz=0, flat=0, resolution=0)),
                (ecodes.ABS_Y, AbsInfo(value=0, min=0, max=height - 1, fuzz=0, flat=0, resolution=0)),
            ],
            ecodes.EV_REL: [ecodes.REL_WHEEL_HI_RES, ecodes.REL_HWHEEL_HI_RES],
        }
        try:
            self._device = UInput(capabilities, name=DEVICE_NAME, devnode=self._device_path)
        except (OSError, UInputError) as e:
            raise HostPointerError(f"Cannot create uinput device at {self._device_path}: {e}") from e
        logger.info(f"Created uinput pointer {DEVICE_NAME} ({width}x{height})")

    def connection_close(self) -> None:
        if self._device is not None:
            self._device.close()
            self._device = None

    def inputPermission_check(self) -> bool:
        """Write access to the uinput node is what authorizes injection."""
        return os.access(self._device_path, os.W_OK)

    def permissionSettings_open(self) -> bool:
        logger.info(
            f"Grant write access to {self._device_path} "
            "(e.g. a udev rule adding it to the 'input' group) and refresh permissions"
        )
        return False

    def displayBounds_get(self) -> DisplayBounds:
        return self._bounds

    def pointerPosition_get(self) -> ScreenPoint:
        return self._position

    def pointer_move(self, position: ScreenPoint) -> None:
        device = self._device_get()
        x, y = position.rounded()
        device.write(ecodes.EV_ABS, ecodes.ABS_X, x)
        device.write(ecodes.EV_ABS, ecodes.ABS_Y, y)
        device.syn()
        self._position = ScreenPoint(x=x, y=y)

    def button_press(self, position: ScreenPoint) -> None:
        device = self._device_get()
        device.write(ecodes.EV_KEY, ecodes.BTN_LEFT, 1)
        device.syn()

    def button_release(self, position: ScreenPoint) -> None:
        device = self._device_get()
        device.write(ecodes.EV_KEY, ecodes.BTN_LEFT, 0)
        device.syn()

    def wheel_scroll(self, delta_x: int, delta_y: int) -> None:
        """
        Scroll using high-resolution wheel axes for smooth motion.

        Positive delta_y scrolls up and positive delta_x scrolls left.
        REL_HWHEEL counts positive to the right, hence the sign flip.

        Args:
            delta_x: Horizontal pixel delta.
            delta_y: Vertical pixel delta.
        """
        device = self._device_get()
        if delta_y:
            device.write(ecodes.EV_REL, ecodes.REL_WHEEL_HI_RES, delta_y * self._hi_res_units_per_pixel)
        if delta_x:
            device.write(ecodes.EV_REL, ecodes.REL_HWHEEL_HI_RES, -delta_x * self._hi_res_units_per_pixel)
        device.syn()

    def _device_get(self) -> UInput:
        """
        Return the open virtual device.

        Raises:
            HostPointerError: If connection_establish() has not succeeded.
        """
        if self._device is None:
            raise HostPointerError("uinput device not created")
        return self._device
