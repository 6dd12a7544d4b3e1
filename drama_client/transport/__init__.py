"""Transport layer: the single network call underneath the client façade."""

from .base import Transport, TransportResponse
from .httpx_transport import HttpxTransport

__all__ = ["Transport", "TransportResponse", "HttpxTransport"]
