"""Transport backed by ``httpx.AsyncClient``."""

import logging
from typing import Any, Optional

import httpx

from ..errors import TransportFailure
from ..models.context import RequestContext
from .base import Transport, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Sends requests through a pooled ``httpx.AsyncClient``."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            client: Optional preconfigured client (e.g. one using
                ``httpx.MockTransport`` in tests). A default client is created
                lazily otherwise and closed by ``aclose``.
        """
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def send(self, context: RequestContext) -> TransportResponse:
        kwargs = {
            "headers": context.headers,
            "params": context.params or None,
            "timeout": context.timeout_ms / 1000,
        }
        if context.body is not None:
            kwargs["json"] = context.body

        try:
            response = await self.client.request(context.method, context.full_url, **kwargs)
        except httpx.RequestError as e:
            # Connection, DNS, timeout and body decoding errors all land here
            message = str(e) or type(e).__name__
            raise TransportFailure(message, request_id=context.id) from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            data=self._decode(response),
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug("Response body is not JSON, keeping text (status=%s)", response.status_code)
            return response.text

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
