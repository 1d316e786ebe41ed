"""X11 display connection and management"""

import logging
from typing import Optional

from Xlib import display as xdisplay
from Xlib.display import Display

from airpad.common.types import DisplayBounds, ScreenPoint

logger = logging.getLogger(__name__)


class DisplayManager:
    """Manages X11 display connection and screen information"""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize display manager

        Args:
            display_name: X11 display name (e.g., ':0'), None for $DISPLAY
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name

    def connection_establish(self) -> None:
        """Establish connection to X11 display"""
        self._display = xdisplay.Display(self._display_name)
        logger.debug(f"Connected to X11 display {self._display.get_display_name()}")

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None

    def display_get(self) -> Display:
        """
        Get X11 display object

        Returns:
            X11 Display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def displayBounds_get(self) -> DisplayBounds:
        """
        Get geometry of the default screen's root window

        Returns:
            Display bounds

        Raises:
            RuntimeError: If not connected to display
        """
        display = self.display_get()
        root = display.screen().root
        geom = root.get_geometry()
        return DisplayBounds(
            origin_x=geom.x, origin_y=geom.y, width=geom.width, height=geom.height
        )

    def pointerPosition_get(self) -> ScreenPoint:
        """
        Query the pointer position relative to the root window

        Returns:
            Current pointer location
        """
        display = self.display_get()
        pointer_data = display.screen().root.query_pointer()
        return ScreenPoint(x=pointer_data.root_x, y=pointer_data.root_y)

    def extension_check(self, name: str) -> bool:
        """
        Check whether the server offers an extension

        Args:
            name: Extension name, e.g. 'XTEST'

        Returns:
            True if the extension is present
        """
        return self.display_get().query_extension(name) is not None

    def __enter__(self) -> "DisplayManager":
        """Context manager entry"""
        self.connection_establish()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit"""
        self.connection_close()
