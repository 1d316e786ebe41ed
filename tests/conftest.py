"""Pytest configuration and shared fixtures for airpad tests

This module provides common fixtures and test utilities used across
unit tests.
"""

import logging
from typing import Generator

import pytest

from airpad.common.config import Config
from airpad.common.settings import settings
from airpad.common.types import DisplayBounds, ScreenPoint
from airpad.input.backend import HostPointerError
from airpad.server.state import ServerState, server_state


class FakeHostPointer:
    """Host pointer double recording every primitive action."""

    def __init__(
        self,
        bounds: DisplayBounds = DisplayBounds(origin_x=0, origin_y=0, width=1000, height=800),
        pointer: ScreenPoint = ScreenPoint(x=10, y=20),
        permitted: bool = True,
    ) -> None:
        """Initialize fake host state."""
        self.bounds: DisplayBounds | None = bounds
        self.pointer: ScreenPoint = pointer
        self.permitted: bool = permitted
        self.actions: list[tuple] = []
        self.permission_checks: int = 0
        self.bounds_queries: int = 0
        self.fail_with: Exception | None = None

    def connection_establish(self) -> None:
        """Nothing to connect."""

    def connection_close(self) -> None:
        """Nothing to close."""

    def inputPermission_check(self) -> bool:
        """Return configured permission and count the query."""
        self.permission_checks += 1
        return self.permitted

    def permissionSettings_open(self) -> bool:
        """No settings surface."""
        return False

    def displayBounds_get(self) -> DisplayBounds:
        """Return bounds, or fail when no display is configured."""
        self.bounds_queries += 1
        if self.bounds is None:
            raise HostPointerError("no display")
        return self.bounds

    def pointerPosition_get(self) -> ScreenPoint:
        """Return the fixed pointer location."""
        return self.pointer

    def _record(self, action: tuple) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.actions.append(action)

    def pointer_move(self, position: ScreenPoint) -> None:
        """Record a move."""
        self._record(("move", position))

    def button_press(self, position: ScreenPoint) -> None:
        """Record a press."""
        self._record(("press", position))

    def button_release(self, position: ScreenPoint) -> None:
        """Record a release."""
        self._record(("release", position))

    def wheel_scroll(self, delta_x: int, delta_y: int) -> None:
        """Record a scroll."""
        self._record(("scroll", delta_x, delta_y))


@pytest.fixture
def fake_host() -> FakeHostPointer:
    """Permitted fake host with a 1000x800 display at the origin"""
    return FakeHostPointer()


@pytest.fixture
def host_factory() -> type[FakeHostPointer]:
    """FakeHostPointer class, for tests needing non-default geometry or permission"""
    return FakeHostPointer


@pytest.fixture
def state() -> Generator[ServerState, None, None]:
    """Server state singleton, reset around each test"""
    server_state.reset()
    yield server_state
    server_state.reset()


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Initialize settings with defaults and clear them afterwards"""
    settings.initialize(Config())
    yield
    settings._config = None


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
