"""TCP listener and single-peer session for trackpad event ingestion"""

import logging
import select
import socket
from typing import List, Optional, Protocol

from airpad.common.settings import settings
from airpad.common.types import Liveness
from airpad.server.discovery import DiscoveryError, ServiceAdvertiser
from airpad.server.state import ServerState, server_state

logger = logging.getLogger(__name__)

PEER_CLOSED_REASON: str = "Connection closed by peer"


class MessageHandler(Protocol):
    """Consumer of framed messages from the live session"""

    def message_handle(self, data: bytes) -> None:
        ...

    def permissions_refresh(self) -> bool:
        ...


def endpoint_format(endpoint: tuple) -> str:
    """Render a socket address as host:port"""
    return f"{endpoint[0]}:{endpoint[1]}"


class PeerSession:
    """
    The one accepted peer connection.

    Lifecycle: CONNECTING -> READY -> FAILED | CANCELLED. Terminal states are
    final. A session only ever receives; it never writes to its socket.
    """

    def __init__(self, peer_socket: socket.socket, endpoint: tuple) -> None:
        """
        Initialize session around an accepted socket

        Args:
            peer_socket: Accepted connection, now owned by this session
            endpoint: Peer address, for display only
        """
        self.socket: socket.socket = peer_socket
        self.endpoint: tuple = endpoint
        self.liveness: Liveness = Liveness.CONNECTING
        self.failure_reason: Optional[str] = None
        self.buffer: bytes = b""

    def __repr__(self) -> str:
        return f"PeerSession({endpoint_format(self.endpoint)}, {self.liveness.value})"

    def session_start(self) -> bool:
        """
        Move from CONNECTING to READY

        Returns:
            True if the session is now READY
        """
        if self.liveness is not Liveness.CONNECTING:
            return False
        self.socket.setblocking(False)
        self.liveness = Liveness.READY
        logger.debug(f"Session {endpoint_format(self.endpoint)} ready")
        return True

    def data_receive(self) -> List[bytes]:
        """
        Perform one receive and return every complete message framed so far

        Returns:
            Complete messages without delimiters (possibly empty)

        Raises:
            ConnectionError: If the peer closed, the socket failed, or the
                peer overflowed the receive buffer
        """
        # A completion arriving after cancel/fail must not touch the released socket
        if self.liveness is not Liveness.READY:
            return []

        try:
            data = self.socket.recv(settings.RECEIVE_CHUNK_SIZE)
        except BlockingIOError:
            return []
        except OSError as e:
            raise ConnectionError(f"Socket error: {e}") from e
        if not data:
            raise ConnectionError(PEER_CLOSED_REASON)

        self.buffer += data

        messages: List[bytes] = []
        while settings.MESSAGE_DELIMITER in self.buffer:
            line, self.buffer = self.buffer.split(settings.MESSAGE_DELIMITER, 1)
            if line.strip():
                messages.append(line)

        if len(self.buffer) > settings.MAX_BUFFER_SIZE:
            raise ConnectionError(
                f"Buffer size limit exceeded ({len(self.buffer)} > {settings.MAX_BUFFER_SIZE} bytes)"
            )

        return messages

    def session_fail(self, reason: str) -> None:
        """Enter FAILED and release the socket (no-op once terminal)"""
        if self.liveness.isTerminal():
            return
        self.liveness = Liveness.FAILED
        self.failure_reason = reason
        self._socket_release()

    def session_cancel(self) -> None:
        """Enter CANCELLED and release the socket (no-op once terminal)"""
        if self.liveness.isTerminal():
            return
        self.liveness = Liveness.CANCELLED
        self._socket_release()

    def _socket_release(self) -> None:
        """Close the socket and drop any partial message"""
        self.buffer = b""
        try:
            self.socket.close()
        except OSError as e:
            logger.error(f"Error closing connection to {endpoint_format(self.endpoint)}: {e}")


class TrackpadListener:
    """
    Accepts peers and keeps at most one live session.

    A new connection attempt always wins: any live session is cancelled
    synchronously before the newcomer is started. All accept, receive and
    state handling happens on the thread calling events_process().
    """

    def __init__(
        self,
        host: str,
        port: int,
        handler: MessageHandler,
        state: ServerState = server_state,
        advertiser: Optional[ServiceAdvertiser] = None,
    ) -> None:
        """
        Initialize listener

        Args:
            host: Address to bind to
            port: Port to listen on, 0 for ephemeral
            handler: Receives each framed message
            state: Display-facing server state
            advertiser: Optional service advertisement, registered on start
        """
        self.host: str = host
        self.requested_port: int = port
        self.port: Optional[int] = None
        self._handler: MessageHandler = handler
        self._state: ServerState = state
        self._advertiser: Optional[ServiceAdvertiser] = advertiser
        self.server_socket: Optional[socket.socket] = None
        self._session: Optional[PeerSession] = None
        self.is_running: bool = False

    @property
    def session(self) -> Optional[PeerSession]:
        """The live session, if any"""
        return self._session

    def server_start(self) -> bool:
        """
        Bind, listen and advertise

        Returns:
            True if listening; False if the socket could not be set up, in
            which case the reason is in the server status and start may be
            retried
        """
        if self.is_running:
            return True

        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.requested_port))
            server_socket.listen(settings.LISTEN_BACKLOG)
            server_socket.setblocking(False)
        except OSError as e:
            server_socket.close()
            self._state.status = f"Failed to create listener: {e}"
            logger.error(self._state.status)
            return False

        self.server_socket = server_socket
        self.port = server_socket.getsockname()[1]
        self.is_running = True
        self._state.status = f"Listening on port {self.port}"
        logger.info(f"Listening on {self.host}:{self.port}")

        self._handler.permissions_refresh()
        if not self._state.has_input_permission:
            logger.warning("No input permission; events will be received but not applied")

        if self._advertiser is not None:
            try:
                self._advertiser.service_register(self.port)
            except DiscoveryError as e:
                logger.warning(f"Service advertisement unavailable: {e}")

        return True

    def server_stop(self) -> None:
        """Cancel the live session, stop listening and withdraw the advertisement"""
        self.is_running = False
        self.session_release()

        if self.server_socket is not None:
            try:
                self.server_socket.close()
            except OSError as e:
                logger.error(f"Error closing server socket: {e}")
            finally:
                self.server_socket = None
        self.port = None

        if self._advertiser is not None:
            self._advertiser.service_unregister()

        self._state.idle_set()
        logger.info("Server stopped")

    def session_release(self) -> None:
        """Cancel and forget the live session, if any"""
        session = self._session
        self._session = None
        if session is not None:
            session.session_cancel()
            logger.info(f"Session {endpoint_format(session.endpoint)} cancelled")

    def connection_accept(self) -> Optional[PeerSession]:
        """
        Accept one pending connection attempt, preempting any live session

        Returns:
            The new live session, or None if nothing could be accepted
        """
        if self.server_socket is None:
            return None

        try:
            peer_socket, address = self.server_socket.accept()
        except BlockingIOError:
            return None
        except OSError as e:
            logger.error(f"Error accepting connection: {e}")
            return None

        if self._session is not None:
            logger.info(
                f"New peer {endpoint_format(address)} replaces {endpoint_format(self._session.endpoint)}"
            )
            self.session_release()

        session = PeerSession(peer_socket, address)
        self._session = session
        session.session_start()
        self._state.status = f"Connected to {endpoint_format(address)}"
        logger.info(self._state.status)
        return session

    def sessionData_receive(self, session: PeerSession) -> None:
        """
        Run one receive on a session and hand each message to the handler

        Args:
            session: Session whose socket reported readable
        """
        if not self._sessionLive_check(session):
            logger.debug(f"Ignoring completion for stale {session!r}")
            return

        try:
            messages = session.data_receive()
        except ConnectionError as e:
            self.session_fail(session, str(e))
            return

        for message in messages:
            if not self._sessionLive_check(session):
                break
            self._handler.message_handle(message)

    def session_fail(self, session: PeerSession, reason: str) -> None:
        """
        Fail a session after a transport error and clear the live slot

        Args:
            session: Failing session
            reason: Transport error description
        """
        session.session_fail(reason)
        if self._session is session:
            self._session = None
        if reason == PEER_CLOSED_REASON:
            self._state.status = reason
        else:
            self._state.status = f"Connection failed: {reason}"
        logger.warning(f"Session {endpoint_format(session.endpoint)} ended: {reason}")

    def events_process(self, timeout: float = 0.0) -> None:
        """
        Run one control-loop iteration: wait for readiness, accept, receive

        Args:
            timeout: Seconds to wait for socket readiness
        """
        if self.server_socket is None:
            return

        session = self._session
        read_list: List[socket.socket] = [self.server_socket]
        if session is not None and session.liveness is Liveness.READY:
            read_list.append(session.socket)

        readable, _, _ = select.select(read_list, [], [], timeout)

        if self.server_socket in readable:
            self.connection_accept()
        if session is not None and session.socket in readable:
            self.sessionData_receive(session)

    def loop_run(self, poll_interval: float) -> None:
        """
        Drive the listener until loop_stop() or server_stop() is called

        Args:
            poll_interval: Seconds each select may block
        """
        while self.is_running:
            self.events_process(poll_interval)

    def loop_stop(self) -> None:
        """Ask loop_run() to return after the current iteration"""
        self.is_running = False

    def _sessionLive_check(self, session: PeerSession) -> bool:
        """Check that session is the live one and still READY"""
        return session is self._session and session.liveness is Liveness.READY
