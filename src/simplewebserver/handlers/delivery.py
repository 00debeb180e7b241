"""
=============================================================================
CONTENT DELIVERY
=============================================================================

Streams the body of a response: the requested file, or a small 404 page.

=============================================================================
PATH RESOLUTION
=============================================================================

The file on disk is the document root with the request path glued on:

    root  = "/srv/www"
    path  = "/pics/cat.png"
    file  = "/srv/www/pics/cat.png"

This is plain string concatenation. There is NO containment check, so a
path such as "/../secret.txt" is followed wherever it leads. Existence is
only discovered when the file is opened.

=============================================================================
BODY FORMATS
=============================================================================

    text/html   Read line by line. A line containing <cs371date> gets the
                current date/time appended; a line containing <cs371server>
                gets the server tag appended. The markers stay in place.
                Every line is written followed by "\\n".

    image/*     The whole file, byte for byte, as one write.

    missing     <html><body><h3>404 not found</h3></body></html>
                (the 200 OK header has already been sent)

=============================================================================
"""

import os
import logging
from datetime import datetime
from typing import Callable, Optional

from ..http.content_types import ContentType
from ..http.response import format_server_date


logger = logging.getLogger(__name__)


DATE_TAG = b"<cs371date>"
SERVER_TAG = b"<cs371server>"

NOT_FOUND_BODY = b"<html><body><h3>404 not found</h3></body></html>"

DEFAULT_SERVER_TAG = "simplewebserver.localdomain"

# Any failure to open the path means there is no file to serve:
# missing, a directory, no permission, name too long, embedded NUL
MISSING_FILE_ERRORS = (OSError, ValueError)


class ResourceNotFoundError(Exception):
    """
    Raised after the 404 body has been written for a missing resource.

    Attributes:
        path: The resolved filesystem path that could not be opened.
    """

    def __init__(self, path: str):
        super().__init__(f"Resource not found: {path}")
        self.path = path


class ContentDelivery:
    """
    Writes response bodies for resolved request paths.

    Holds only configuration, so one instance is shared by all handler
    threads.

    Usage:
        delivery = ContentDelivery(root_dir="./www")
        write_header(conn, ContentType.HTML)
        delivery.deliver(conn, "/index.html", ContentType.HTML)
    """

    def __init__(
        self,
        root_dir: Optional[str] = None,
        server_tag: str = DEFAULT_SERVER_TAG,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            root_dir: Document root. None = current working directory,
                      looked up on every request.
            server_tag: Text appended after <cs371server>.
            clock: Returns the time used for <cs371date> (local time).
        """
        self.root_dir = root_dir
        self.server_tag = server_tag
        self.clock = clock

    def resolve(self, path: str) -> str:
        """Join the request path onto the document root."""
        root = self.root_dir if self.root_dir is not None else os.getcwd()
        return root + path

    def deliver(self, conn, path: str, content_type: ContentType) -> None:
        """
        Write the body for `path` to the connection.

        Args:
            conn: Connection to write to (anything with send(bytes)).
            path: Request path as extracted from the GET line.
            content_type: Result of classify(path).

        Raises:
            ResourceNotFoundError: The file couldn't be opened. The 404
                                   body has already been written.
            OSError: Socket or file read errors.
        """
        resolved = self.resolve(path)

        try:
            stream = open(resolved, "rb")
        except MISSING_FILE_ERRORS:
            conn.send(NOT_FOUND_BODY)
            raise ResourceNotFoundError(resolved)

        with stream:
            if content_type is ContentType.HTML:
                self._send_html(conn, stream)
            elif content_type.is_image:
                self._send_image(conn, stream)
            else:
                logger.debug(f"No delivery rule for {content_type}, body left empty")

    def _send_html(self, conn, stream) -> None:
        """Send a text file line by line, filling in tags."""
        date_text = format_server_date(self.clock()).encode("utf-8")
        server_text = self.server_tag.encode("utf-8")

        for raw_line in stream:
            line = raw_line.rstrip(b"\r\n")
            if DATE_TAG in line:
                line += date_text
            if SERVER_TAG in line:
                line += server_text
            conn.send(line + b"\n")

    def _send_image(self, conn, stream) -> None:
        """Send a binary file verbatim."""
        size = os.fstat(stream.fileno()).st_size
        conn.send(stream.read(size))
