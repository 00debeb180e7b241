"""
=============================================================================
HANDLERS - What happens to a connection after it is accepted
=============================================================================

    worker.py     RequestHandler: parse → classify → header → body → close
    delivery.py   ContentDelivery: resolve the path and stream the body

=============================================================================
"""

from .delivery import ContentDelivery, ResourceNotFoundError, NOT_FOUND_BODY
from .worker import RequestHandler

__all__ = [
    "ContentDelivery",
    "ResourceNotFoundError",
    "NOT_FOUND_BODY",
    "RequestHandler",
]
