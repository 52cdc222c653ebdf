"""TCP connection to an NEC display.

The display listens on a plain TCP port (7142 by default) and answers each
command with a single frame terminated by CR. Only one command may be in
flight at a time because frames carry no request identifier.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from ..errors import DisplayConnectionError, DisplayIOError, MalformedFrameError
from ..protocol.framing import DELIMITER, Frame, decode_length, parse_frame

logger = logging.getLogger(__name__)

DEFAULT_PORT = 7142
READ_TIMEOUT_S = 2.0
MAX_REPLY_SIZE = 64
LENGTH_FIELD_END = 7  # SOH, reserved, dest, source, type, length(2)


def _declared_size(buffer: bytes) -> int | None:
    """Total frame size implied by the length field, or None if unreadable."""
    try:
        length = decode_length(bytes(buffer[5:LENGTH_FIELD_END]))
    except MalformedFrameError:
        return None
    return min(LENGTH_FIELD_END + length + 2, MAX_REPLY_SIZE)


@dataclass
class DisplayInfo:
    """Endpoint information for an open session."""

    host: str = ""
    port: int = DEFAULT_PORT
    peer: str = ""


class TCPConnection:
    """Manages the TCP session to a display.

    Usage::

        conn = TCPConnection("10.0.0.240")
        conn.open()
        frame = conn.send_and_receive(frame_bytes)
        conn.close()
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = READ_TIMEOUT_S,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._display_info = DisplayInfo(host=host, port=port)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    @property
    def display_info(self) -> DisplayInfo:
        return self._display_info

    def __enter__(self) -> TCPConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> DisplayInfo:
        """Resolve the address and connect to the display.

        Returns:
            DisplayInfo for the connected endpoint.

        Raises:
            DisplayConnectionError: If the address cannot be resolved or the
                connection is refused or times out.
        """
        if self._sock is not None:
            return self._display_info

        try:
            sock = socket.create_connection(
                (self._host, self._port), timeout=self._timeout
            )
        except OSError as e:
            raise DisplayConnectionError(
                f"cannot connect to monitor at {self._host}:{self._port}: {e}"
            ) from e

        sock.settimeout(self._timeout)
        self._sock = sock
        peer = sock.getpeername()
        self._display_info = DisplayInfo(
            host=self._host,
            port=self._port,
            peer=f"{peer[0]}:{peer[1]}",
        )
        logger.info("Connected to %s:%d", self._host, self._port)
        return self._display_info

    def close(self) -> None:
        """Close the TCP session."""
        if self._sock is None:
            return

        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._sock = None
            logger.info("Disconnected")

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise DisplayConnectionError("Not connected to display")
        return self._sock

    def write(self, data: bytes) -> int:
        """Write a complete frame to the display.

        Returns:
            Number of bytes written.

        Raises:
            DisplayConnectionError: If not connected.
            DisplayIOError: If the write fails.
        """
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except OSError as e:
            raise DisplayIOError(f"cannot write to socket: {e}") from e
        return len(data)

    def read(self, timeout: float | None = None) -> bytes:
        """Read one reply frame, up to and including the CR delimiter.

        Once the length field has arrived, reading continues until the
        declared frame size is buffered, so a block check byte equal to CR
        does not end the read early. Reading never exceeds
        ``MAX_REPLY_SIZE`` bytes.

        Args:
            timeout: Read timeout in seconds, defaults to the session timeout.

        Raises:
            DisplayConnectionError: If not connected.
            DisplayIOError: If the read times out or the display closes
                the connection before a full reply arrives.
        """
        sock = self._require_socket()
        sock.settimeout(self._timeout if timeout is None else timeout)

        buffer = bytearray()
        expected: int | None = None
        try:
            while len(buffer) < MAX_REPLY_SIZE:
                chunk = sock.recv(MAX_REPLY_SIZE - len(buffer))
                if not chunk:
                    raise DisplayIOError(
                        "connection closed by display before end of reply"
                    )
                buffer.extend(chunk)
                if expected is None and len(buffer) >= LENGTH_FIELD_END:
                    expected = _declared_size(buffer)
                if expected is not None:
                    if len(buffer) >= expected:
                        break
                elif DELIMITER in chunk:
                    break
        except socket.timeout as e:
            raise DisplayIOError("timed out waiting for reply") from e
        except DisplayIOError:
            raise
        except OSError as e:
            raise DisplayIOError(f"cannot read from socket: {e}") from e

        return bytes(buffer)

    def send_and_receive(
        self,
        data: bytes,
        timeout: float | None = None,
    ) -> Frame:
        """Send a frame and read back the validated reply.

        Raises:
            DisplayIOError: On write or read failure.
            ProtocolError: If the reply fails validation.
        """
        self.write(data)
        return parse_frame(self.read(timeout))
