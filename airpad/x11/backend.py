"""X11 host pointer backend using the XTest extension."""

from __future__ import annotations

import logging
from typing import Optional

from Xlib import X
from Xlib.error import DisplayError
from Xlib.ext import xtest

from airpad.common.types import DisplayBounds, ScreenPoint
from airpad.input.backend import HostPointer, HostPointerError
from airpad.x11.display import DisplayManager

logger = logging.getLogger(__name__)

PRIMARY_BUTTON: int = 1

# Core protocol wheel buttons
WHEEL_UP: int = 4
WHEEL_DOWN: int = 5
WHEEL_LEFT: int = 6
WHEEL_RIGHT: int = 7

# Bounds the time one scroll event may hold the control loop
MAX_WHEEL_CLICKS_PER_EVENT: int = 20


def wheelClicks_compute(accumulated: int, pixels_per_step: int) -> tuple[int, int]:
    """
    Convert accumulated pixels to whole wheel clicks plus the carried remainder.

    X11 wheel buttons are discrete; pixels short of a full step stay in the
    remainder so small deltas add up across events.

    Args:
        accumulated: Signed pixel total including earlier remainder.
        pixels_per_step: Pixels represented by one wheel click.

    Returns:
        (signed click count, signed pixel remainder).
    """
    clicks = abs(accumulated) // pixels_per_step
    if accumulated < 0:
        clicks = -clicks
    return clicks, accumulated - clicks * pixels_per_step


class X11HostPointer(HostPointer):
    """Host pointer backed by an X11 display and XTest fake input."""

    def __init__(self, display_name: Optional[str] = None, scroll_pixels_per_step: int = 15) -> None:
        """
        Initialize X11 host pointer.

        Args:
            display_name: X11 display name, None for $DISPLAY.
            scroll_pixels_per_step: Pixels of scroll per wheel click.
        """
        self._display_manager: DisplayManager = DisplayManager(display_name=display_name)
        self._scroll_pixels_per_step: int = scroll_pixels_per_step
        # Signed pixels not yet emitted as a wheel click, per axis
        self._pending_x: int = 0
        self._pending_y: int = 0

    def connection_establish(self) -> None:
        """
        Connect to the X server.

        Raises:
            HostPointerError: If the display cannot be opened.
        """
        try:
            self._display_manager.connection_establish()
        except DisplayError as e:
            raise HostPointerError(f"Cannot open X11 display: {e}") from e

    def connection_close(self) -> None:
        self._display_manager.connection_close()

    def inputPermission_check(self) -> bool:
        """XTest is the only gate on synthetic input under X11."""
        try:
            return self._display_manager.extension_check("XTEST")
        except RuntimeError:
            return False

    def permissionSettings_open(self) -> bool:
        logger.info("X11 has no input permission settings; enable the XTEST extension on the X server")
        return False

    def displayBounds_get(self) -> DisplayBounds:
        try:
            return self._display_manager.displayBounds_get()
        except RuntimeError as e:
            raise HostPointerError(str(e)) from e

    def pointerPosition_get(self) -> ScreenPoint:
        return self._display_manager.pointerPosition_get()

    def pointer_move(self, position: ScreenPoint) -> None:
        display = self._display_manager.display_get()
        x, y = position.rounded()
        xtest.fake_input(display, X.MotionNotify, detail=0, x=x, y=y)
        display.sync()

    def button_press(self, position: ScreenPoint) -> None:
        # XTest buttons act wherever the pointer is; position is where it already sits
        display = self._display_manager.display_get()
        xtest.fake_input(display, X.ButtonPress, detail=PRIMARY_BUTTON)
        display.sync()

    def button_release(self, position: ScreenPoint) -> None:
        display = self._display_manager.display_get()
        xtest.fake_input(display, X.ButtonRelease, detail=PRIMARY_BUTTON)
        display.sync()

    def wheel_scroll(self, delta_x: int, delta_y: int) -> None:
        """
        Scroll by pixel deltas using wheel button clicks.

        Positive delta_y scrolls up and positive delta_x scrolls left,
        matching the handheld's content-follows-finger convention. Pixels
        short of a full click carry over to the next call; clicks beyond
        MAX_WHEEL_CLICKS_PER_EVENT are dropped.

        Args:
            delta_x: Horizontal pixel delta.
            delta_y: Vertical pixel delta.
        """
        display = self._display_manager.display_get()
        step = self._scroll_pixels_per_step
        vertical, self._pending_y = wheelClicks_compute(self._pending_y + delta_y, step)
        horizontal, self._pending_x = wheelClicks_compute(self._pending_x + delta_x, step)

        sent = False
        for button, clicks in (
            (WHEEL_UP if vertical > 0 else WHEEL_DOWN, abs(vertical)),
            (WHEEL_LEFT if horizontal > 0 else WHEEL_RIGHT, abs(horizontal)),
        ):
            if clicks > MAX_WHEEL_CLICKS_PER_EVENT:
                logger.debug(f"Capping {clicks} wheel clicks on button {button}")
                clicks = MAX_WHEEL_CLICKS_PER_EVENT
            for _ in range(clicks):
                xtest.fake_input(display, X.ButtonPress, detail=button)
                xtest.fake_input(display, X.ButtonRelease, detail=button)
                sent = True
        if sent:
            display.sync()
