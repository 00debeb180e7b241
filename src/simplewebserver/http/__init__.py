"""
=============================================================================
HTTP - The protocol subset the server speaks
=============================================================================

    request.py        read the header block, pull out the GET path
    content_types.py  path suffix → Content-Type
    response.py       the fixed 200 OK header block

=============================================================================
"""

from .request import RequestParser, RequestReadError, parse_request_path, extract_path
from .content_types import ContentType, classify
from .response import build_header, write_header, format_server_date

__all__ = [
    # Request
    "RequestParser",
    "RequestReadError",
    "parse_request_path",
    "extract_path",
    # Content types
    "ContentType",
    "classify",
    # Response
    "build_header",
    "write_header",
    "format_server_date",
]
