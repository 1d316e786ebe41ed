"""Wire codec for trackpad event envelopes

One envelope is a JSON object with a string discriminant and a two-component
point:

    {"type": "move", "point": {"x": 0.25, "y": 0.5}}

The handheld client's serializer writes the point as a bare array
(``"point": [0.25, 0.5]``); both forms decode identically.
"""

import json
import math
from typing import Any, Dict

from airpad.common.types import (
    ClickEvent,
    EventKind,
    MoveEvent,
    NormalizedPoint,
    ScrollDelta,
    ScrollEvent,
    TrackpadEvent,
)


class DecodeError(ValueError):
    """Raised when bytes are not a well-formed trackpad envelope"""


def _component_parse(value: Any, name: str) -> float:
    """
    Validate one numeric point component

    Args:
        value: Raw JSON value
        name: Component name for error messages

    Returns:
        Component as float

    Raises:
        DecodeError: If value is not a finite number
    """
    # bool is an int subclass in Python but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"point.{name} must be a number, got {type(value).__name__}")
    try:
        component = float(value)
    except OverflowError:
        raise DecodeError(f"point.{name} is out of range") from None
    if not math.isfinite(component):
        raise DecodeError(f"point.{name} must be finite, got {value!r}")
    return component


def _point_parse(raw: Any) -> tuple[float, float]:
    """
    Parse a point in object or array form

    Args:
        raw: Raw JSON value of the "point" field

    Returns:
        (x, y) tuple

    Raises:
        DecodeError: If the point is malformed
    """
    if isinstance(raw, dict):
        if "x" not in raw or "y" not in raw:
            raise DecodeError("point must contain both 'x' and 'y'")
        return _component_parse(raw["x"], "x"), _component_parse(raw["y"], "y")
    if isinstance(raw, list):
        if len(raw) != 2:
            raise DecodeError(f"point array must have 2 components, got {len(raw)}")
        return _component_parse(raw[0], "x"), _component_parse(raw[1], "y")
    raise DecodeError(f"point must be an object or array, got {type(raw).__name__}")


def envelope_parse(envelope: Dict[str, Any]) -> TrackpadEvent:
    """
    Build a typed event from an already-parsed envelope object

    Args:
        envelope: JSON object

    Returns:
        Decoded event

    Raises:
        DecodeError: If a field is missing or invalid
    """
    if "type" not in envelope:
        raise DecodeError("missing 'type' field")
    raw_kind = envelope["type"]
    if not isinstance(raw_kind, str):
        raise DecodeError(f"'type' must be a string, got {type(raw_kind).__name__}")
    try:
        kind = EventKind(raw_kind)
    except ValueError:
        raise DecodeError(f"unknown event type {raw_kind!r}") from None

    if "point" not in envelope:
        raise DecodeError("missing 'point' field")
    x, y = _point_parse(envelope["point"])

    if kind is EventKind.MOVE:
        return MoveEvent(position=NormalizedPoint(x=x, y=y))
    if kind is EventKind.SCROLL:
        return ScrollEvent(delta=ScrollDelta(dx=x, dy=y))
    # Clicks land at the live pointer location; the transmitted point is unused
    return ClickEvent()


def event_decode(data: bytes) -> TrackpadEvent:
    """
    Decode one envelope into a typed event

    Decoding is all-or-nothing and has no side effects.

    Args:
        data: Encoded envelope, without delimiter

    Returns:
        Decoded event

    Raises:
        DecodeError: If the bytes are not a valid envelope
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"envelope is not UTF-8: {e}") from e
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"envelope is not JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise DecodeError(f"envelope must be a JSON object, got {type(parsed).__name__}")
    return envelope_parse(parsed)


def event_encode(event: TrackpadEvent) -> bytes:
    """
    Encode an event in canonical object form

    Args:
        event: Event to encode

    Returns:
        UTF-8 JSON bytes, without delimiter
    """
    if isinstance(event, MoveEvent):
        point = {"x": event.position.x, "y": event.position.y}
    elif isinstance(event, ScrollEvent):
        point = {"x": event.delta.dx, "y": event.delta.dy}
    else:
        point = {"x": 0.0, "y": 0.0}
    return json.dumps({"type": event.kind.value, "point": point}).encode("utf-8")
