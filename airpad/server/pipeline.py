"""
Per-message event pipeline: decode, permission gate, translate, inject.

Every failure below a single message is contained here and reported through
``ServerState.last_event_summary``; nothing raised while handling one message
reaches the session's receive loop.
"""

from __future__ import annotations

import logging
import time

from airpad.common.types import EventKind, MoveEvent, ScreenPoint
from airpad.input.backend import HostPointer
from airpad.input.injector import InjectionError, InputInjector
from airpad.input.translator import CoordinateTranslator, DisplayUnavailableError
from airpad.protocol.codec import DecodeError, event_decode
from airpad.server.state import ServerState

logger = logging.getLogger(__name__)

PERMISSION_ABSENT_SUMMARY: str = "Received event, but no input permission."

__all__ = [
    "EventPipeline",
    "PERMISSION_ABSENT_SUMMARY",
]


class EventPipeline:
    """Routes framed messages from a session to the host pointer."""

    def __init__(self, host: HostPointer, state: ServerState) -> None:
        """
        Initialize pipeline stages around one host pointer.

        Args:
            host: Host pointer facility
            state: Display-facing server state
        """
        self._host: HostPointer = host
        self._state: ServerState = state
        self._translator: CoordinateTranslator = CoordinateTranslator(host)
        self._injector: InputInjector = InputInjector(host)

    def permissions_refresh(self) -> bool:
        """
        Re-read input authorization from the host and publish it.

        Returns:
            Current permission flag
        """
        permitted = bool(self._host.inputPermission_check())
        if permitted != self._state.has_input_permission:
            logger.info(f"Input permission {'granted' if permitted else 'absent'}")
        self._state.has_input_permission = permitted
        return permitted

    def message_handle(self, data: bytes) -> None:
        """
        Handle one framed message.

        Args:
            data: Envelope bytes without delimiter
        """
        try:
            event = event_decode(data)
        except DecodeError as e:
            logger.warning(f"Error decoding message: {e}")
            self._state.last_event_summary = f"Error decoding message: {e}"
            return

        # Permission can be revoked between messages, so never trust a cached flag
        if not self.permissions_refresh():
            self._state.last_event_summary = PERMISSION_ABSENT_SUMMARY
            return

        target: ScreenPoint | None = None
        if isinstance(event, MoveEvent):
            try:
                target = self._translator.moveTarget_resolve(event)
            except DisplayUnavailableError as e:
                logger.warning(f"Dropped move event: {e}")
                self._state.last_event_summary = f"Dropped move event: {e}"
                return

        try:
            self._injector.event_apply(event, target)
        except InjectionError as e:
            logger.error(f"Injection failed: {e.cause}")
            self._state.last_event_summary = f"Injection failed: {e}"
            return

        self._state.last_event_summary = self.summary_format(event.kind, len(data))
        logger.debug(self._state.last_event_summary)

    @staticmethod
    def summary_format(kind: EventKind, size: int) -> str:
        """Describe a successfully applied event"""
        return f"Received {kind.value} ({size} bytes) at {time.strftime('%H:%M:%S')}"
