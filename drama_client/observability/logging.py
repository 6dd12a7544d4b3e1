"""
Structured diagnostics for outgoing API calls.

This module provides the request/response/error records emitted around every
call, with standard fields like request_id, url and method. Each record is
written as a ``[key=value ...] message`` line, and the full structured payload
is attached to the LogRecord as its ``payload`` attribute. Headers, params
and bodies pass through the Redactor before they reach a record.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from ..errors import ClientError
from ..models.context import RequestContext
from ..transport.base import TransportResponse
from .redaction import Redactor

logger = logging.getLogger(__name__)

DIAGNOSTICS_LOGGER_NAME = "drama_client.http"


def now_ms() -> int:
    return int(time.time() * 1000)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler; used by the CLI, never on import."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


class DiagnosticsLogger:
    """Structured logger for API requests, responses and errors."""

    def __init__(
        self,
        redactor: Optional[Redactor] = None,
        clock: Callable[[], int] = now_ms,
        logger_name: str = DIAGNOSTICS_LOGGER_NAME,
    ):
        """
        Args:
            redactor: Redactor applied to headers, params and bodies
            clock: Returns the current wall-clock time in milliseconds
            logger_name: Name of the underlying stdlib logger
        """
        self.redactor = redactor or Redactor()
        self.clock = clock
        self.logger = logging.getLogger(logger_name)

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"{key}={value}" for key, value in kwargs.items() if value is not None]
        return f"[{' '.join(fields)}] {message}"

    def _emit(self, level: int, message: str, payload: Dict[str, Any]) -> None:
        try:
            self.logger.log(
                level,
                self._format_message(
                    message,
                    request_id=payload.get("request_id"),
                    method=payload.get("method"),
                    url=payload.get("url"),
                    status=payload.get("status"),
                    duration_ms=payload.get("duration"),
                ),
                extra={"payload": payload},
            )
        except Exception:  # noqa: BLE001
            # Diagnostics must never break the call they describe
            logger.warning("Failed to emit %s record", message, exc_info=True)

    def _duration(self, context: Optional[RequestContext]) -> Optional[int]:
        if context is None or context.started_at_ms is None:
            return None
        return self.clock() - context.started_at_ms

    def _base_fields(self, context: Optional[RequestContext]) -> Dict[str, Any]:
        if context is None:
            return {"request_id": None, "url": None, "method": None}
        return {
            "request_id": context.id,
            "url": context.full_url,
            "method": context.method,
        }

    def log_request(self, context: RequestContext) -> None:
        """Log an outgoing attempt."""
        payload = self._base_fields(context)
        payload.update(
            headers=self.redactor.redact_headers(context.headers),
            params=self.redactor.redact(context.params),
            data=self.redactor.redact(context.body),
        )
        self._emit(logging.INFO, "API Request", payload)

    def log_response(self, context: RequestContext, response: TransportResponse) -> None:
        """Log a completed 2xx attempt; duration counts from the first attempt."""
        payload = self._base_fields(context)
        payload.update(
            status=response.status_code,
            duration=self._duration(context),
            headers=self.redactor.redact_headers(response.headers),
            data=self.redactor.redact(response.data),
        )
        self._emit(logging.INFO, "API Response", payload)

    def log_error(
        self,
        context: Optional[RequestContext],
        error: Exception,
        response: Optional[TransportResponse] = None,
    ) -> None:
        """
        Log a failed attempt.

        The error message is logged unredacted: it is diagnostic text, not a
        credential field. Response detail is included only when a response
        was received.
        """
        payload = self._base_fields(context)
        status = response.status_code if response is not None else None
        if status is None and isinstance(error, ClientError):
            status = error.status_code

        payload["status"] = status
        duration = self._duration(context)
        if duration is not None:
            payload["duration"] = duration
        if response is not None:
            payload["response_headers"] = self.redactor.redact_headers(response.headers)
            payload["response_data"] = self.redactor.redact(response.data)
        payload["message"] = getattr(error, "raw_message", None) or str(error)

        self._emit(logging.ERROR, "API Error", payload)
