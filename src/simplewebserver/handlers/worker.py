"""
=============================================================================
REQUEST HANDLER
=============================================================================

One RequestHandler.handle() call processes one connection from start to
finish, in its own thread:

    ┌──────────────────────────────────────────────────────────────────┐
    │                                                                   │
    │   RequestParser.parse()      read header block → path            │
    │          │                                                        │
    │   classify(path)             path → content type                  │
    │          │                                                        │
    │   write_header()             HTTP/1.1 200 OK + headers            │
    │          │                                                        │
    │   ContentDelivery.deliver()  file body, or 404 page               │
    │          │                                                        │
    │   conn.close()               always, exactly once                 │
    │                                                                   │
    └──────────────────────────────────────────────────────────────────┘

Failures end the handler, never the server:

    RequestReadError       client went idle; nothing is sent
    ResourceNotFoundError  404 body already sent; logged
    OSError                client vanished mid-write; logged

=============================================================================
"""

import logging
from typing import Optional

from ..core.connection import Connection
from ..http.request import RequestParser, RequestReadError
from ..http.content_types import classify
from ..http.response import write_header, DEFAULT_SERVER_NAME
from .delivery import ContentDelivery, ResourceNotFoundError


logger = logging.getLogger(__name__)


class RequestHandler:
    """
    Handles a single HTTP request on a single connection.

    The handler keeps no per-connection state, so the server shares one
    instance between all worker threads; each call gets its own Connection.
    """

    def __init__(
        self,
        delivery: Optional[ContentDelivery] = None,
        parser: Optional[RequestParser] = None,
        server_name: str = DEFAULT_SERVER_NAME,
    ):
        self.delivery = delivery or ContentDelivery()
        self.parser = parser or RequestParser()
        self.server_name = server_name

    def handle(self, conn: Connection) -> None:
        """
        Read the request on `conn`, send the response, close `conn`.

        Never raises for per-connection problems; they are logged.
        """
        logger.debug(f"[{conn.id}] Handling connection from {conn.client_ip}")

        with conn:
            try:
                path = self.parser.parse(conn.reader, conn.id)
                content_type = classify(path)
                write_header(conn, content_type, server_name=self.server_name)
                self.delivery.deliver(conn, path, content_type)
            except RequestReadError as e:
                logger.warning(f"[{conn.id}] Request abandoned (path so far: {e.path!r}): {e}")
            except ResourceNotFoundError as e:
                logger.warning(f"[{conn.id}] 404 {e.path}")
            except OSError as e:
                logger.error(f"[{conn.id}] Output error: {e}")

        logger.debug(f"[{conn.id}] Done handling connection")
