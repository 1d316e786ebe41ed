"""Server state management - singleton pattern"""

from typing import Optional

IDLE_STATUS: str = "Idle"
NO_EVENT_SUMMARY: str = "None"


class ServerState:
    """
    Singleton holding the display-facing server status.

    Written only from the control loop that drives the listener and its
    session; a status display may read individual fields from elsewhere,
    with no guarantee that two fields were read from the same update.
    """

    _instance: Optional["ServerState"] = None

    def __new__(cls) -> "ServerState":
        """Ensure only one instance exists (singleton pattern)"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize state variables (only once)"""
        if self._initialized:
            return

        # Listener/connection phase as human-readable text
        self.status: str = IDLE_STATUS

        # Outcome of the most recent message
        self.last_event_summary: str = NO_EVENT_SUMMARY

        # Most recently observed input authorization
        self.has_input_permission: bool = False

        self._initialized = True

    def reset(self) -> None:
        """Reset state to initial values"""
        self.status = IDLE_STATUS
        self.last_event_summary = NO_EVENT_SUMMARY
        self.has_input_permission = False

    def idle_set(self) -> None:
        """Return to idle after the listener stops; permission is left as last observed"""
        self.status = IDLE_STATUS
        self.last_event_summary = NO_EVENT_SUMMARY

    @classmethod
    def instance_get(cls) -> "ServerState":
        """Get the singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


# Global singleton instance
server_state = ServerState.instance_get()
