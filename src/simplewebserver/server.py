"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer (main thread)                                         │
    │       accept() ──► Connection ──► _handle_connection()               │
    │                                        │                             │
    │                                        └──► new Thread               │
    │                                               RequestHandler.handle  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THREAD-PER-CONNECTION
=============================================================================

Every accepted connection gets a brand new thread. There is no pool, no
queue and no limit: the accept loop starts the thread and immediately goes
back to accept().

The thread receives the Connection and is its only owner from then on.
Handlers share nothing mutable, so no locks are needed. They finish in
whatever order they finish.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection
from .handlers import ContentDelivery, RequestHandler


logger = logging.getLogger(__name__)


class WebServer:
    """
    Minimal concurrent file server.

    Usage:
        server = WebServer(ServerConfig(port=8080, root_dir="./www"))
        if not server.start():
            sys.exit(1)
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._handler = RequestHandler(
            delivery=ContentDelivery(
                root_dir=self.config.root_dir,
                server_tag=self.config.server_tag,
            ),
            server_name=self.config.server_name,
        )

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the real port once listening."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def start(self, port: Optional[int] = None) -> bool:
        """
        Start the server (blocking).

        Args:
            port: Override config port.

        Returns:
            False if the port could not be bound. True once the accept
            loop has ended (accept error or shutdown()).
        """
        if port is not None:
            self.config.port = port

        self._setup_logging()
        logger.info(f"Serving files from {self.config.document_root}")

        try:
            self._socket_server.start(self._handle_connection)
        except OSError:
            return False
        return True

    def shutdown(self):
        """Stop accepting connections. Running handlers are not interrupted."""
        self._socket_server.shutdown()

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_listening(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_for_shutdown(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("simplewebserver").setLevel(level)

    # =========================================================================
    # CONNECTION DISPATCH
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Start a handler thread for a new connection.

        Called by SocketServer on the accept thread, so it must not block.
        """
        worker = threading.Thread(
            target=self._handler.handle,
            args=(conn,),
            name=f"worker-{conn.id}",
            daemon=True,
        )
        worker.start()
