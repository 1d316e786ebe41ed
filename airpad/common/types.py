"""Common types and data structures for airpad"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class EventKind(Enum):
    """Trackpad event discriminants, valued by their wire names"""
    MOVE = "move"
    CLICK = "singleClick"
    SCROLL = "scroll"


class Liveness(Enum):
    """Peer session lifecycle states"""
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def isTerminal(self) -> bool:
        """Check if no further transitions can leave this state"""
        return self in (Liveness.FAILED, Liveness.CANCELLED)


@dataclass(frozen=True)
class NormalizedPoint:
    """
    Resolution-independent position as fractions of display width/height.

    Components are nominally within [0.0, 1.0]. Values outside that range are
    accepted and simply map to points off the display.
    """
    x: float
    y: float


@dataclass(frozen=True)
class ScreenPoint:
    """Host display coordinates in pixels"""
    x: float
    y: float

    def rounded(self) -> tuple[int, int]:
        """Return integer pixel coordinates for host APIs"""
        return round(self.x), round(self.y)


@dataclass(frozen=True)
class ScrollDelta:
    """Signed scroll delta pair in the sending device's units"""
    dx: float
    dy: float


@dataclass(frozen=True)
class DisplayBounds:
    """Display geometry: origin plus extent, in host pixels"""
    origin_x: float
    origin_y: float
    width: float
    height: float

    @property
    def origin(self) -> ScreenPoint:
        """Top-left corner of the display"""
        return ScreenPoint(x=self.origin_x, y=self.origin_y)

    @property
    def center(self) -> ScreenPoint:
        """Center of the display"""
        return ScreenPoint(
            x=self.origin_x + self.width / 2, y=self.origin_y + self.height / 2
        )


@dataclass(frozen=True)
class MoveEvent:
    """Absolute pointer move to a normalized display position"""
    position: NormalizedPoint
    kind: EventKind = field(default=EventKind.MOVE, init=False)


@dataclass(frozen=True)
class ClickEvent:
    """Single left click at wherever the pointer currently is"""
    kind: EventKind = field(default=EventKind.CLICK, init=False)


@dataclass(frozen=True)
class ScrollEvent:
    """Two-axis scroll by a raw delta"""
    delta: ScrollDelta
    kind: EventKind = field(default=EventKind.SCROLL, init=False)


TrackpadEvent = Union[MoveEvent, ClickEvent, ScrollEvent]
