"""Unit tests for event injection onto the host pointer"""

import pytest

from airpad.common.types import (
    ClickEvent,
    EventKind,
    MoveEvent,
    NormalizedPoint,
    ScreenPoint,
    ScrollDelta,
    ScrollEvent,
)
from airpad.input.backend import HostPointerError
from airpad.input.injector import InjectionError, InputInjector
from airpad.protocol.codec import event_decode


class TestMoveInjection:
    """Test absolute move injection"""

    def test_single_move_at_target(self, fake_host):
        """Test one move action at the translated target"""
        injector = InputInjector(fake_host)

        injector.event_apply(
            MoveEvent(position=NormalizedPoint(x=0.5, y=0.5)), ScreenPoint(500, 400)
        )

        assert fake_host.actions == [("move", ScreenPoint(500, 400))]

    def test_move_without_target_rejected(self, fake_host):
        """Test a move cannot be applied untranslated"""
        with pytest.raises(ValueError):
            InputInjector(fake_host).event_apply(MoveEvent(position=NormalizedPoint(x=0, y=0)))
        assert fake_host.actions == []


class TestClickInjection:
    """Test click injection at the live pointer location"""

    @pytest.mark.parametrize(
        "payload",
        [b"[0.0, 0.0]", b"[0.9, 0.1]", b'{"x": -50, "y": 9999}', b'{"x": 0.5, "y": 0.5}'],
    )
    def test_click_uses_pointer_location_not_payload(self, host_factory, payload):
        """Test press/release land on the held pointer whatever point was sent"""
        held = ScreenPoint(x=321, y=654)
        host = host_factory(pointer=held)
        event = event_decode(b'{"type": "singleClick", "point": ' + payload + b"}")

        InputInjector(host).event_apply(event, ScreenPoint(1, 1))

        assert host.actions == [("press", held), ("release", held)]

    def test_click_reads_pointer_at_call_time(self, fake_host):
        """Test the pointer is queried per click, not cached"""
        injector = InputInjector(fake_host)

        injector.event_apply(ClickEvent())
        fake_host.pointer = ScreenPoint(x=77, y=88)
        injector.event_apply(ClickEvent())

        assert fake_host.actions[2:] == [
            ("press", ScreenPoint(x=77, y=88)),
            ("release", ScreenPoint(x=77, y=88)),
        ]


class TestScrollInjection:
    """Test scroll injection"""

    def test_scroll_single_two_axis_action(self, fake_host):
        """Test scroll is one wheel action carrying both axes, truncated"""
        InputInjector(fake_host).event_apply(ScrollEvent(delta=ScrollDelta(dx=3.8, dy=-7.2)))

        assert fake_host.actions == [("scroll", 3, -7)]


class TestInjectionFailure:
    """Test host failures are wrapped"""

    def test_host_error_wrapped(self, fake_host):
        """Test host rejection becomes InjectionError with kind and cause"""
        cause = HostPointerError("rejected")
        fake_host.fail_with = cause

        with pytest.raises(InjectionError) as exc_info:
            InputInjector(fake_host).event_apply(ScrollEvent(delta=ScrollDelta(dx=1, dy=1)))

        assert exc_info.value.kind is EventKind.SCROLL
        assert exc_info.value.cause is cause

    def test_injector_has_no_state_between_calls(self, fake_host):
        """Test a failure does not affect the next injection"""
        injector = InputInjector(fake_host)
        fake_host.fail_with = OSError("busy")
        with pytest.raises(InjectionError):
            injector.event_apply(ClickEvent())

        fake_host.fail_with = None
        injector.event_apply(ClickEvent())

        assert [action[0] for action in fake_host.actions] == ["press", "release"]
