"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps a single accepted client socket with the small API the
request handler needs: a buffered reader for the request, a send method for
the response, and a close that happens exactly once.

=============================================================================
ONE REQUEST, ONE CONNECTION
=============================================================================

The server never offers keep-alive. Each connection carries exactly one
request and one response, then it is closed:

    NEW ──────► READING ──────► WRITING ──────► CLOSED
     │             │                              ▲
     └─────────────┴──────────────────────────────┘
                 (read error, timeout, client gone)

Because the response is sent with "Connection: close" and no
Content-Length, closing the socket is what tells the client the body
has ended. A connection that is never closed is a response that never
finishes.

=============================================================================
IDLE TIMEOUT
=============================================================================

The socket timeout is set once, when the connection is wrapped. Every
blocking read on the connection (including reads through `reader`) then
raises socket.timeout (TimeoutError) if the client goes quiet for longer
than `timeout` seconds. A slow or idle client therefore costs one thread
for at most that long.

=============================================================================
"""

import socket
import time
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import BinaryIO, Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states."""
    NEW = "new"            # Just accepted, nothing read yet
    READING = "reading"    # Reading the request header block
    WRITING = "writing"    # Sending the response
    CLOSED = "closed"      # Socket released


@dataclass
class Connection:
    """
    Represents one accepted client connection.

    The handler that receives a Connection owns it exclusively; nothing else
    reads from, writes to, or closes it.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier used to prefix log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        timeout: Idle timeout in seconds for blocking reads.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    timeout: Optional[float] = 30.0

    _reader: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address."""
        return self.address[0] if self.address else ""

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    @property
    def closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    # =========================================================================
    # READING
    # =========================================================================

    @property
    def reader(self) -> BinaryIO:
        """
        Buffered binary stream over the socket.

        Supports readline(), so the request header block can be consumed
        one line at a time. Created lazily and reused for the lifetime of
        the connection, since the buffer may already hold bytes the caller
        has not consumed yet.
        """
        if self._reader is None:
            self._reader = self.socket.makefile("rb")
        self.state = ConnectionState.READING
        return self._reader

    # =========================================================================
    # WRITING
    # =========================================================================

    def send(self, data: bytes) -> None:
        """
        Send bytes to the client.

        Uses sendall() so partial writes are retried until everything is
        sent. Socket errors (reset, broken pipe, timeout) propagate to the
        caller, which decides how to log them.
        """
        self.state = ConnectionState.WRITING
        self.socket.sendall(data)

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        1. shutdown(SHUT_WR): send FIN so the client sees end-of-body
        2. close the buffered reader, if one was created
        3. close(): release the file descriptor

        Safe to call more than once; only the first call does anything.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Client already gone

        if self._reader is not None:
            try:
                self._reader.close()
            except OSError:
                pass
            self._reader = None

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    # =========================================================================
    # CONTEXT MANAGER: For use with 'with' statement
    # =========================================================================

    def __enter__(self):
        """
        Allows using Connection with 'with' for guaranteed cleanup:

            with conn:
                path = parser.parse(conn.reader)
                conn.send(header)
            # Connection closed here, whatever happened above
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
