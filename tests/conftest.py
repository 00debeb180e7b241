"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator, List
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simplewebserver import WebServer, ServerConfig
from simplewebserver.core import Connection


INDEX_HTML = (
    b"<html>\n"
    b"<body>\n"
    b"<p>Today is <cs371date></p>\n"
    b"<p>Served by <cs371server></p>\n"
    b"<p>Plain line</p>\n"
    b"</body>\n"
    b"</html>\n"
)

# Every byte value, including \r and \n, so any newline mangling shows up
IMAGE_BYTES = bytes(range(256)) * 16


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def docroot(tmp_path: Path) -> Path:
    """Document root with an HTML page, images and a sub-directory."""
    (tmp_path / "index.html").write_bytes(INDEX_HTML)
    (tmp_path / "logo.png").write_bytes(IMAGE_BYTES)
    (tmp_path / "photo.JPG").write_bytes(IMAGE_BYTES[::-1])
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "about.html").write_bytes(b"<h1>About</h1>\n")
    return tmp_path


class FakeConnection:
    """Records everything sent to it, in order."""

    def __init__(self):
        self.sent: List[bytes] = []

    def send(self, data: bytes) -> None:
        self.sent.append(data)

    @property
    def data(self) -> bytes:
        return b"".join(self.sent)


@pytest.fixture
def fake_conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def conn_pair() -> Generator[tuple, None, None]:
    """
    A Connection wrapping one end of a socketpair, plus the other end.

    The second element plays the client.
    """
    server_sock, client_sock = socket.socketpair()
    conn = Connection(socket=server_sock, address=("local", 0), timeout=2.0)
    client_sock.settimeout(5.0)

    yield conn, client_sock

    conn.close()
    client_sock.close()


def recv_all(sock: socket.socket) -> bytes:
    """Read from a socket until the peer closes it."""
    chunks = []
    while True:
        chunk = sock.recv(65536)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def split_response(raw: bytes) -> tuple:
    """Split a raw response into (header text, body bytes)."""
    head, _, body = raw.partition(b"\r\n\r\n")
    return head.decode("latin-1"), body


def fetch(port: int, request: bytes, timeout: float = 5.0) -> bytes:
    """Send a raw request to the server and return the raw response."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        s.sendall(request)
        return recv_all(s)


def get(port: int, path: str) -> bytes:
    return fetch(port, f"GET {path} HTTP/1.1\r\nHost: localhost\r\n\r\n".encode())


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: WebServer):
        self.server = server
        self.result = None
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Start server in background thread."""
        def run():
            self.result = self.server.start()

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_listening(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def test_server(docroot: Path) -> Generator[TestServer, None, None]:
    """A running server on an OS-assigned port, serving `docroot`."""
    server = WebServer(ServerConfig(
        host="127.0.0.1",
        port=0,
        root_dir=str(docroot),
        read_timeout=1.0,
        accept_timeout=0.1,
        server_tag="test.server.local",
        log_level="WARNING",
    ))

    test_srv = TestServer(server)
    test_srv.start()

    yield test_srv

    test_srv.stop()
