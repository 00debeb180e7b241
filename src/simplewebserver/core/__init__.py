"""
=============================================================================
CORE - Socket-level building blocks
=============================================================================

    SocketServer   owns the listening socket and the accept loop
    Connection     wraps one accepted client socket

Nothing in this package knows about HTTP. The accept loop hands each
Connection to a callback; what happens to it afterwards is decided one
layer up, in the server.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Accepts connections
    "Connection",       # Wrapper for client socket
    "ConnectionState",  # Connection lifecycle states
]
