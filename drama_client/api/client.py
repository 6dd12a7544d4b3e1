"""Main client interface for the drama backend."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ..config.constants import REQUEST_ID_HEADER
from ..config.settings import ClientConfig
from ..errors import ApplicationFailure, ClientError, HttpFailure, RetryExhausted, TransportFailure
from ..models.context import RequestContext
from ..models.envelope import EnvelopeUnwrapper, error_message_from_body
from ..observability.correlation import Correlator
from ..observability.logging import DiagnosticsLogger, now_ms
from ..observability.redaction import Redactor
from ..reliability.error_classifier import ErrorNormalizer
from ..transport.base import Transport, TransportResponse
from ..transport.httpx_transport import HttpxTransport

logger = logging.getLogger(__name__)


class DramaAPIClient:
    """
    High-level client for the drama backend API.

    Every call goes through the same pipeline: correlation id, default
    headers, per-route retry defaults and a request record on the way out;
    a response or error record on the way back, followed by envelope
    unwrapping, a delayed retry, or a normalized ClientError.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], int] = now_ms,
        correlator: Optional[Correlator] = None,
        diagnostics: Optional[DiagnosticsLogger] = None,
        normalizer: Optional[ErrorNormalizer] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (defaults to ``ClientConfig()``)
            transport: Transport performing the network call (httpx by default)
            sleep: Coroutine used for backoff delays, in seconds
            clock: Wall-clock in milliseconds, used for durations
            correlator: Correlation id source
            diagnostics: Structured request/response/error logger
            normalizer: Maps raw error text onto user-facing messages
        """
        self.config = config or ClientConfig()
        self.transport = transport or HttpxTransport()
        self.retry_policy = self.config.retry_policy
        self.correlator = correlator or Correlator()
        self.normalizer = normalizer or ErrorNormalizer()
        self.clock = clock
        self.diagnostics = diagnostics or DiagnosticsLogger(
            redactor=Redactor(
                body_keys=self.config.body_redact_keys,
                header_keys=self.config.header_redact_keys,
                mask=self.config.redaction_mask,
            ),
            clock=clock,
        )
        self.unwrapper = EnvelopeUnwrapper(self.normalizer)
        self._sleep = sleep

    async def __aenter__(self) -> "DramaAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def get(self, url: str, **options) -> Any:
        return await self.request("GET", url, **options)

    async def post(self, url: str, data: Any = None, **options) -> Any:
        return await self.request("POST", url, data, **options)

    async def put(self, url: str, data: Any = None, **options) -> Any:
        return await self.request("PUT", url, data, **options)

    async def patch(self, url: str, data: Any = None, **options) -> Any:
        return await self.request("PATCH", url, data, **options)

    async def delete(self, url: str, **options) -> Any:
        return await self.request("DELETE", url, **options)

    async def request(
        self,
        method: str,
        url: str,
        data: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        retry_limit: Optional[int] = None,
        retry_delay_base_ms: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """
        Issue one logical call and return the envelope's ``data``.

        Args:
            method: HTTP method
            url: Route relative to the API root (or an absolute URL)
            data: JSON body
            params: Query parameters; ``None`` values are dropped
            headers: Extra headers merged over the defaults
            retry_limit: Maximum additional attempts (route default otherwise)
            retry_delay_base_ms: Linear backoff base (route default otherwise)
            timeout_ms: Per-call timeout (client default otherwise)

        Returns:
            The unwrapped ``data`` of a successful envelope

        Raises:
            ClientError: A subclass carrying the normalized message
        """
        context = self._build_context(
            method, url, data, params, headers, retry_limit, retry_delay_base_ms, timeout_ms
        )

        while True:
            self.diagnostics.log_request(context)

            response: Optional[TransportResponse] = None
            try:
                response = await self.transport.send(context)
            except TransportFailure as error:
                failure: ClientError = error
            else:
                if response.ok:
                    self.diagnostics.log_response(context, response)
                    return self.unwrapper.unwrap(context, response.status_code, response.data)
                failure = self._http_failure(context, response)

            self.diagnostics.log_error(context, failure, response)

            if not self.retry_policy.should_retry(context, failure.status_code):
                raise self._finalize(context, failure)

            context = self.retry_policy.next_attempt(context)
            delay_ms = self.retry_policy.next_delay_ms(context)
            logger.debug(
                "Retrying request %s (%d/%d) in %dms",
                context.id, context.retry_count, context.retry_limit, delay_ms,
            )
            await self._sleep(delay_ms / 1000)

    def _build_context(
        self,
        method: str,
        url: str,
        data: Any,
        params: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
        retry_limit: Optional[int],
        retry_delay_base_ms: Optional[int],
        timeout_ms: Optional[int],
    ) -> RequestContext:
        context = RequestContext(
            method=method,
            url=url,
            base_url=self.config.api_root,
            headers={**self.config.default_headers, **(headers or {})},
            params={k: v for k, v in (params or {}).items() if v is not None},
            body=data,
            retry_limit=retry_limit,
            retry_delay_base_ms=retry_delay_base_ms,
            timeout_ms=timeout_ms or self.config.timeout_ms,
        )
        context = self.correlator.assign(context)
        context = context.evolve(
            headers={**context.headers, REQUEST_ID_HEADER: context.id},
            started_at_ms=self.clock(),
        )
        return self.retry_policy.apply_route_defaults(context)

    def _http_failure(self, context: RequestContext, response: TransportResponse) -> HttpFailure:
        raw_message = error_message_from_body(
            response.data, f"Request failed with status code {response.status_code}"
        )
        body = response.data
        if isinstance(body, dict) and body.get("success") is False:
            error = body.get("error")
            code = error.get("code") if isinstance(error, dict) else None
            return ApplicationFailure(
                raw_message, request_id=context.id, status_code=response.status_code, code=code
            )
        return HttpFailure(raw_message, request_id=context.id, status_code=response.status_code)

    def _finalize(self, context: RequestContext, failure: ClientError) -> ClientError:
        """Normalize the terminal failure of a call."""
        classification = self.normalizer.classify(failure.raw_message)
        failure.with_message(classification.message, classification.category)

        exhausted = (
            context.retry_limit
            and context.retry_count >= context.retry_limit
            and self.retry_policy.is_retry_eligible(context.method, context.url, failure.status_code)
        )
        if exhausted:
            error = RetryExhausted(classification.message, last_error=failure, attempts=context.retry_count + 1)
            error.category = classification.category
            return error
        return failure
