"""Coordinate translation from handheld units to host display units."""

from __future__ import annotations

import logging

from airpad.common.types import (
    DisplayBounds,
    MoveEvent,
    NormalizedPoint,
    ScreenPoint,
    ScrollDelta,
)
from airpad.input.backend import HostPointer, HostPointerError

logger = logging.getLogger(__name__)


class DisplayUnavailableError(RuntimeError):
    """Raised when display geometry cannot be obtained for a move."""


def screenPoint_compute(normalized: NormalizedPoint, bounds: DisplayBounds) -> ScreenPoint:
    """
    Map a normalized position onto a display.

    Args:
        normalized: Fractions of display width/height.
        bounds: Target display geometry.

    Returns:
        Screen point, unclamped.
    """
    origin = bounds.origin
    return ScreenPoint(
        x=origin.x + normalized.x * bounds.width,
        y=origin.y + normalized.y * bounds.height,
    )


def scrollDelta_truncate(delta: ScrollDelta) -> tuple[int, int]:
    """
    Convert a raw scroll delta to integer host units, truncating toward zero.

    Args:
        delta: Raw device delta.

    Returns:
        (dx, dy) integers.
    """
    return int(delta.dx), int(delta.dy)


class CoordinateTranslator:
    """Resolves move targets against the current host display."""

    def __init__(self, host: HostPointer) -> None:
        self._host: HostPointer = host

    def moveTarget_resolve(self, event: MoveEvent) -> ScreenPoint:
        """
        Compute the screen target of a move, querying display geometry fresh.

        Args:
            event: Move event.

        Returns:
            Target screen point.

        Raises:
            DisplayUnavailableError: If the host cannot report a display.
        """
        try:
            bounds = self._host.displayBounds_get()
        except (HostPointerError, OSError) as e:
            raise DisplayUnavailableError(f"Could not query display: {e}") from e
        target = screenPoint_compute(event.position, bounds)
        logger.debug(
            f"Translated ({event.position.x:.4f}, {event.position.y:.4f}) -> "
            f"({target.x:.1f}, {target.y:.1f}) on {bounds.width}x{bounds.height}"
        )
        return target
