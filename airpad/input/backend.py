"""Host pointer facility protocol.

Everything the event pipeline needs from the host platform: an authorization
check, a way to send the user to the authorization settings, the primary
display geometry, the live pointer location, and synthetic pointer actions.
"""

from __future__ import annotations

from typing import Protocol

from airpad.common.types import DisplayBounds, ScreenPoint


class HostPointerError(RuntimeError):
    """Raised by a host pointer backend when the platform rejects a request."""


class HostPointer(Protocol):
    """Abstract host pointer backend interface."""

    def connection_establish(self) -> None:
        """Open the connection to the host input facility."""

    def connection_close(self) -> None:
        """Close the connection to the host input facility."""

    def inputPermission_check(self) -> bool:
        """
        Report whether this process may synthesize pointer input right now.

        Returns:
            True if injection is authorized.
        """

    def permissionSettings_open(self) -> bool:
        """
        Open the platform surface where the user grants input authorization.

        Returns:
            True if a settings surface was opened.
        """

    def displayBounds_get(self) -> DisplayBounds:
        """
        Get primary display geometry.

        Returns:
            Display bounds.

        Raises:
            HostPointerError: If no display can be queried.
        """

    def pointerPosition_get(self) -> ScreenPoint:
        """
        Get current pointer location.

        Returns:
            Pointer location in host pixels.
        """

    def pointer_move(self, position: ScreenPoint) -> None:
        """Move the pointer to an absolute position."""

    def button_press(self, position: ScreenPoint) -> None:
        """Press the primary button at position."""

    def button_release(self, position: ScreenPoint) -> None:
        """Release the primary button at position."""

    def wheel_scroll(self, delta_x: int, delta_y: int) -> None:
        """
        Scroll both axes by pixel-unit deltas.

        Args:
            delta_x: Horizontal delta in pixels.
            delta_y: Vertical delta in pixels.
        """
