"""WebSocket connection session with the crackwatch SockJS endpoint."""

import asyncio
from enum import Enum
from typing import Any, NoReturn

import structlog
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import WebSocketException

from ..models.config import DEFAULT_ENDPOINT
from .errors import NetworkError

log = structlog.stdlib.get_logger()

# DDP connect message, required before the server accepts method calls.
HANDSHAKE_FRAME = r'["{\"msg\":\"connect\",\"version\":\"1\",\"support\":[\"1\",\"pre2\",\"pre1\"]}"]'

_IO_ERRORS = (OSError, WebSocketException, TimeoutError, UnicodeDecodeError)


class SessionState(Enum):
    """Lifecycle of a connection session."""
    DISCONNECTED = "disconnected"
    TRANSPORT_OPEN = "transport_open"
    HANDSHAKE_SENT = "handshake_sent"
    READY = "ready"
    FRAME_SENT = "frame_sent"
    AWAITING_FRAME = "awaiting_frame"
    CLOSED = "closed"
    FAILED = "failed"


_EXCHANGE_STATES = frozenset({
    SessionState.READY,
    SessionState.FRAME_SENT,
    SessionState.AWAITING_FRAME,
})


class ConnectionSession:
    """One WebSocket connection, used for a single query and then closed.

    The session knows how to open the transport and move text frames in
    and out. It knows nothing about what the frames mean.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        connect_timeout: float | None = 10.0,
        receive_timeout: float | None = 30.0,
    ) -> None:
        """Initialize the session.

        Args:
            endpoint: WebSocket URL of the SockJS endpoint
            connect_timeout: Seconds allowed for the opening handshake
            receive_timeout: Seconds allowed to wait for any single frame
                (None waits forever)
        """
        self.endpoint = endpoint
        self.connect_timeout = connect_timeout
        self.receive_timeout = receive_timeout
        self._ws: ClientConnection | None = None
        self._state = SessionState.DISCONNECTED

    @property
    def state(self) -> SessionState:
        return self._state

    async def open(self) -> None:
        """Connect and send the transport negotiation frame.

        Raises:
            NetworkError: If the endpoint cannot be reached or refuses us
        """
        if self._state is not SessionState.DISCONNECTED:
            raise RuntimeError(f"Cannot open a session in state {self._state.value}")

        try:
            self._ws = await connect(self.endpoint, open_timeout=self.connect_timeout)
        except _IO_ERRORS as e:
            await self._fail(e, stage="connect")
        self._state = SessionState.TRANSPORT_OPEN

        try:
            await self._ws.send(HANDSHAKE_FRAME)
        except _IO_ERRORS as e:
            await self._fail(e, stage="handshake")
        self._state = SessionState.HANDSHAKE_SENT

        log.debug("WebSocket session ready", endpoint=self.endpoint)
        self._state = SessionState.READY

    async def send_frame(self, payload: str) -> None:
        """Write one text frame.

        Raises:
            NetworkError: If the write fails
        """
        ws = self._require_exchange("send")
        try:
            await ws.send(payload)
        except _IO_ERRORS as e:
            await self._fail(e, stage="send")
        log.debug("Frame sent", endpoint=self.endpoint, payload=payload)
        self._state = SessionState.FRAME_SENT

    async def receive_frame(self) -> str:
        """Wait for the next frame and return it undecoded.

        Raises:
            NetworkError: If the read fails, the connection closes or the
                receive timeout expires
        """
        ws = self._require_exchange("receive")
        self._state = SessionState.AWAITING_FRAME
        try:
            message = await asyncio.wait_for(ws.recv(), timeout=self.receive_timeout)
            if isinstance(message, bytes):
                message = message.decode("utf-8")
        except _IO_ERRORS as e:
            await self._fail(e, stage="receive")
        log.debug("Frame received", endpoint=self.endpoint, frame=message)
        return message

    async def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        ws, self._ws = self._ws, None
        self._state = SessionState.CLOSED
        if ws is None:
            return
        try:
            await ws.close()
        except _IO_ERRORS as e:
            log.debug("Error while closing WebSocket", endpoint=self.endpoint, error=str(e))

    def _require_exchange(self, operation: str) -> ClientConnection:
        if self._state not in _EXCHANGE_STATES or self._ws is None:
            raise RuntimeError(f"Cannot {operation} in state {self._state.value}")
        return self._ws

    async def _fail(self, error: BaseException, stage: str) -> NoReturn:
        """Log the cause, tear down the transport and raise NetworkError."""
        log.warning(
            "WebSocket session failed",
            endpoint=self.endpoint,
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )
        ws, self._ws = self._ws, None
        self._state = SessionState.FAILED
        if ws is not None:
            try:
                await ws.close()
            except _IO_ERRORS as close_error:
                log.debug("Error while closing failed WebSocket", error=str(close_error))
        raise NetworkError(original_error=error, endpoint=self.endpoint, stage=stage) from error

    async def __aenter__(self) -> "ConnectionSession":
        """Open the session on entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        """Always close on exit."""
        await self.close()
