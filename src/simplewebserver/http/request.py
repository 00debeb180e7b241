"""
=============================================================================
HTTP REQUEST READING
=============================================================================

The server only ever needs ONE thing from a request: the path on the
"GET " line. Everything else in the header block is read (so the client
isn't left with unread data) and thrown away.

    ┌─────────────────────────────────────────────────────────────────┐
    │  GET /index.html HTTP/1.1\r\n      ← path = "/index.html"       │
    │  Host: localhost:8080\r\n          ← read, discarded            │
    │  User-Agent: curl/8.0\r\n          ← read, discarded            │
    │  \r\n                              ← blank line: stop reading   │
    └─────────────────────────────────────────────────────────────────┘

=============================================================================
WHAT THE PARSER DOES NOT DO
=============================================================================

- No method other than GET is recognised. A request without a GET line
  yields the empty path.
- No URL decoding, no query-string stripping, no "../" handling. The path
  is returned exactly as the client sent it.
- No request body is read.
- Only the first "GET " line counts; later ones are ignored.

=============================================================================
READ FAILURES
=============================================================================

    idle timeout           → RequestReadError (request abandoned)
    EOF / reset / other    → stop, return whatever path was seen so far

=============================================================================
"""

import io
import socket
import logging
from typing import BinaryIO


logger = logging.getLogger(__name__)


GET_PREFIX = "GET "


class RequestReadError(Exception):
    """
    Raised when the client goes idle before finishing its header block.

    Carries the path captured before the timeout (possibly empty) so the
    caller can log what the client was asking for.
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


def extract_path(request_line: str) -> str:
    """
    Get the resource path from a "GET " line.

    Takes everything after the prefix up to the first space, which drops
    the trailing protocol token:

        >>> extract_path("GET /index.html HTTP/1.1")
        '/index.html'
        >>> extract_path("GET /old-style")
        '/old-style'
    """
    return request_line[len(GET_PREFIX):].split(" ", 1)[0]


class RequestParser:
    """
    Reads an HTTP request header block and extracts the GET path.

    Stateless: one parser can be shared by every handler thread.
    """

    def parse(self, stream: BinaryIO, conn_id: str = "-") -> str:
        """
        Read lines until the blank line that ends the header block.

        Args:
            stream: Binary stream supporting readline() (a socket makefile,
                    or io.BytesIO in tests).
            conn_id: Connection id used to prefix log lines.

        Returns:
            The requested path, or "" if no GET line was seen.

        Raises:
            RequestReadError: If the stream times out.
        """
        path = ""
        seen_get = False

        while True:
            try:
                raw_line = stream.readline()
            except socket.timeout as e:
                raise RequestReadError(f"Request read timed out: {e}", path) from e
            except (OSError, ValueError) as e:
                logger.warning(f"[{conn_id}] Request error: {e}")
                break

            if not raw_line:
                # Client closed its side before the blank line
                logger.debug(f"[{conn_id}] End of stream before blank line")
                break

            line = raw_line.decode("latin-1").rstrip("\r\n")

            if not seen_get and line.startswith(GET_PREFIX):
                path = extract_path(line)
                seen_get = True

            logger.debug(f"[{conn_id}] Request line: ({line})")

            if not line:
                break

        return path


def parse_request_path(raw: bytes) -> str:
    """
    Convenience function to get the GET path from raw request bytes.

    Args:
        raw: Raw request bytes.

    Returns:
        The requested path, or "" if there is no GET line.
    """
    return RequestParser().parse(io.BytesIO(raw))
