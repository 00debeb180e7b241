"""
=============================================================================
HTTP RESPONSE HEADER
=============================================================================

Every response the server sends starts with the same header block:

    HTTP/1.1 200 OK\r\n
    Date: Oct 17, 2026, 3:04:05 PM GMT\r\n
    Server: SimpleWebServer/1.0\r\n
    Connection: close\r\n
    Content-Type: text/html\r\n
    \r\n

=============================================================================
WHY NO CONTENT-LENGTH?
=============================================================================

The header is written BEFORE the body is produced, and HTML bodies are
rewritten line by line on the way out, so the length isn't known up front.
Instead the server promises "Connection: close": the body ends when the
socket does. That's the HTTP/1.0-style framing HTTP/1.1 still allows.

=============================================================================
WHY ALWAYS 200?
=============================================================================

The status line goes out before the file is opened. If the file turns out
not to exist, the client gets a 404 page under a 200 status. Clients see
exactly that; the status is not patched up after the fact.

=============================================================================
"""

from datetime import datetime, timezone
from typing import Optional

from .content_types import ContentType


CRLF = "\r\n"

STATUS_LINE = "HTTP/1.1 200 OK"

DEFAULT_SERVER_NAME = "SimpleWebServer/1.0"


# Fixed English names so output doesn't depend on the process locale
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_server_date(dt: datetime) -> str:
    """
    Format a datetime in medium date-time style.

    Medium is the default style of the common date-time formatters this
    output mirrors; it is what clients of this server have always seen.

    Format: Mon D, YYYY, H:MM:SS AM|PM
    Example: Oct 17, 2026, 3:04:05 PM

    Used for the Date header and for <cs371date> tags in served pages.
    """
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return (
        f"{MONTHS[dt.month - 1]} {dt.day}, {dt.year}, "
        f"{hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"
    )


def build_header(
    content_type: ContentType,
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> bytes:
    """
    Build the response header block, blank line included.

    Args:
        content_type: Echoed in the Content-Type header.
        server_name: Value of the Server header.
        now: Time for the Date header (default: current UTC time).

    Returns:
        The encoded header block.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    lines = [
        STATUS_LINE,
        f"Date: {format_server_date(now)} GMT",
        f"Server: {server_name}",
        "Connection: close",
        f"Content-Type: {content_type}",
    ]
    return (CRLF.join(lines) + CRLF + CRLF).encode("latin-1")


def write_header(conn, content_type: ContentType, server_name: str = DEFAULT_SERVER_NAME,
                 now: Optional[datetime] = None) -> None:
    """
    Write the response header block to a connection.

    Socket errors propagate; the request handler logs them and closes the
    connection.
    """
    conn.send(build_header(content_type, server_name=server_name, now=now))
