"""Applies translated trackpad events as synthetic host pointer actions."""

from __future__ import annotations

import logging
from typing import Optional

from airpad.common.types import (
    ClickEvent,
    EventKind,
    MoveEvent,
    ScreenPoint,
    ScrollEvent,
    TrackpadEvent,
)
from airpad.input.backend import HostPointer
from airpad.input.translator import scrollDelta_truncate

logger = logging.getLogger(__name__)


class InjectionError(RuntimeError):
    """Raised when the host rejects a synthetic pointer action."""

    def __init__(self, kind: EventKind, cause: Exception) -> None:
        super().__init__(f"{kind.value} injection failed: {cause}")
        self.kind: EventKind = kind
        self.cause: Exception = cause


class InputInjector:
    """
    Turns events into host pointer primitives.

    The injector performs no permission check of its own: callers gate every
    call on a freshly read permission flag.
    """

    def __init__(self, host: HostPointer) -> None:
        self._host: HostPointer = host

    def event_apply(self, event: TrackpadEvent, target: Optional[ScreenPoint] = None) -> None:
        """
        Inject one event.

        Args:
            event: Decoded event
            target: Screen target for a move; ignored for other kinds

        Raises:
            InjectionError: If the host facility fails
            ValueError: If a move is applied without a target
        """
        if isinstance(event, MoveEvent) and target is None:
            raise ValueError("Move events require a translated target")
        try:
            if isinstance(event, MoveEvent):
                self._host.pointer_move(target)
            elif isinstance(event, ClickEvent):
                self.click_apply()
            elif isinstance(event, ScrollEvent):
                delta_x, delta_y = scrollDelta_truncate(event.delta)
                self._host.wheel_scroll(delta_x, delta_y)
        except Exception as e:
            raise InjectionError(event.kind, e) from e

    def click_apply(self) -> ScreenPoint:
        """
        Press and release the primary button where the pointer is now.

        Returns:
            Location the click was issued at
        """
        location = self._host.pointerPosition_get()
        self._host.button_press(location)
        self._host.button_release(location)
        logger.debug(f"Click at ({location.x:.0f}, {location.y:.0f})")
        return location
