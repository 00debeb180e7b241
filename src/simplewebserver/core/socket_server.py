"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

This module owns the listening socket. It binds, listens, and then sits in
an accept loop handing every new client to a callback. It never reads or
writes a byte of HTTP itself.

SOCKET LIFECYCLE (Server Side):
────────────────────────────────

    1. socket()    Create a socket file descriptor
    2. bind()      Associate the socket with an IP:PORT
    3. listen()    Mark socket as a "listening" socket
    4. accept()    Wait for and accept an incoming connection
                   └─ Returns a NEW socket just for that client
    5. close()     Release the socket resources

=============================================================================
FAILURE MODEL
=============================================================================

    bind() fails    → logged, OSError raised to the caller. The accept loop
                      is never entered and nothing is retried.

    accept() fails  → logged, the loop ends. The server stops accepting for
                      good; handlers already running are left to finish.

Per-connection problems never reach this module: they belong to the handler
the connection was given to.

=============================================================================
"""

import socket
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Low-level TCP socket server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SocketServer Internals                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► _create_socket()   socket() + SO_REUSEADDR              │
    │        ├──► bind()             fatal on failure                      │
    │        ├──► listen()                                                 │
    │        └──► _accept_loop()     blocks here                           │
    │                 └──► while running:                                  │
    │                         accept()      wait for a client              │
    │                         Connection()  wrap client socket             │
    │                         handler(conn) hand off, don't wait           │
    │                                                                      │
    │    shutdown()        ask the loop to stop                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until the loop ends
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        Args:
            config: Server configuration containing host, port, backlog, etc.

        The socket is created lazily in start().
        """
        self.config = config
        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the socket is listening; tests wait on it
        self._listening_event = threading.Event()

        # Set when the accept loop has ended for any reason
        self._shutdown_event = threading.Event()

        self._bound_address: Optional[Tuple[str, int]] = None

    @property
    def is_running(self) -> bool:
        """Check if the accept loop is running."""
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        Get the server's bound address (IP, port).

        After bind this is the real address, so port 0 in the config
        resolves to the port the OS picked.
        """
        if self._bound_address is not None:
            return self._bound_address
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create and configure the server socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # SO_REUSEADDR: avoid "Address already in use" while old
        # connections sit in TIME_WAIT after a restart
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # accept() wakes up this often so shutdown() is noticed
        sock.settimeout(self.config.accept_timeout)

        return sock

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and accept connections.

        This method BLOCKS until the accept loop ends, either through an
        accept error or shutdown().

        Args:
            connection_handler: Called once per accepted connection. It must
                                return promptly (start a thread, queue work)
                                since the loop does not accept again until
                                it returns.

        Raises:
            OSError: If the socket can't be bound. Not retried.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Error binding to port {self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            self._shutdown_event.set()
            raise

        self._bound_address = self._socket.getsockname()[:2]
        self._running = True
        self._shutdown_event.clear()
        self._listening_event.set()

        logger.info(f"Server listening on {self.address[0]}:{self.address[1]}")

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """
        Main loop for accepting connections.

        ┌─────────────────────────────────────────────────────────────────┐
        │                     Accept Loop Flow                             │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │   while self._running:                                           │
        │       ├──► accept()                                              │
        │       │       ├── timeout    → loop, re-check _running           │
        │       │       └── OSError    → log, stop accepting               │
        │       ├──► Connection(client_socket, ...)                        │
        │       └──► connection_handler(conn)                              │
        │                                                                  │
        └─────────────────────────────────────────────────────────────────┘
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._running:
                    logger.error(f"No longer accepting: {e}")
                break

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                timeout=self.config.read_timeout,
            )

            connection_handler(conn)

    def shutdown(self):
        """
        Stop the accept loop.

        Takes effect within accept_timeout seconds. Handlers that are
        already running are not interrupted. Safe to call more than once.
        """
        logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        """Close the listening socket."""
        self._running = False

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass  # Already closed
            self._socket = None

        self._listening_event.clear()
        self._shutdown_event.set()
        logger.info("Socket server stopped")

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the socket to be bound and listening.

        Returns:
            True if listening, False on timeout.
        """
        return self._listening_event.wait(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the accept loop to end.

        Returns:
            True if the loop ended, False on timeout.
        """
        return self._shutdown_event.wait(timeout)
