"""
=============================================================================
SIMPLEWEBSERVER - Minimal concurrent HTTP/1.1 file server
=============================================================================

Accepts TCP connections and answers each one, in its own thread, with a
file from the document root:

    - HTML files are sent line by line, with <cs371date> and <cs371server>
      tags filled in
    - .jpg/.jpeg/.png/.gif/.ico files are sent as raw bytes
    - missing files get a short 404 page

One request per connection, GET only, "Connection: close" on every reply.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    simplewebserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m simplewebserver)
    ├── server.py            # WebServer: accept loop + thread per connection
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # Listening socket and accept loop
    │   └── connection.py    # Client socket wrapper
    ├── http/
    │   ├── request.py       # Header block reading, GET path extraction
    │   ├── content_types.py # Suffix → Content-Type
    │   └── response.py      # 200 OK header block
    └── handlers/
        ├── worker.py        # RequestHandler (one connection, end to end)
        └── delivery.py      # File bodies and the 404 page

=============================================================================
QUICK START
=============================================================================

    from simplewebserver import WebServer, ServerConfig

    server = WebServer(ServerConfig(port=8080, root_dir="./www"))
    server.start()   # blocks

=============================================================================
"""

__version__ = "1.0.0"

from .server import WebServer
from .config import ServerConfig

__all__ = ["WebServer", "ServerConfig", "__version__"]
