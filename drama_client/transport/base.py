"""
Base Transport Interface

This module defines the abstract transport the client façade sends its
requests through. Implementations perform exactly one network call per
``send`` and never retry on their own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict

from ..models.context import RequestContext


@dataclass
class TransportResponse:
    """A completed HTTP exchange, whatever its status."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """
    Abstract base class for transports.

    The transport is responsible for:
    - Issuing the HTTP request described by a RequestContext
    - Decoding the response body (JSON when possible)
    - Raising TransportFailure when no HTTP response was obtained

    A transport should NOT contain:
    - Retry or backoff logic
    - Envelope interpretation
    - Logging of request/response payloads
    """

    @abstractmethod
    async def send(self, context: RequestContext) -> TransportResponse:
        """
        Perform one attempt of the call described by ``context``.

        Args:
            context: The request to send, including headers and timeout

        Returns:
            TransportResponse for any HTTP status, 2xx or not

        Raises:
            TransportFailure: When the host could not be reached or timed out
        """
        pass

    async def aclose(self) -> None:
        """Release pooled connections. No-op by default."""
        return None
