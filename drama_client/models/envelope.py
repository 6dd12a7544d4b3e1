"""Uniform response envelope returned by every backend endpoint."""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from ..errors import ApplicationFailure
from ..reliability.error_classifier import ErrorNormalizer
from .context import RequestContext

INVALID_ENVELOPE_MESSAGE = "invalid response envelope"


class EnvelopeError(BaseModel):
    """Error detail carried by a ``success=false`` envelope."""
    message: Optional[str] = None
    code: Optional[str] = None


class ResponseEnvelope(BaseModel):
    """``{success, data?, error?}`` wrapper; ``success`` selects which half is meaningful."""
    success: bool
    data: Any = None
    error: Optional[EnvelopeError] = None

    class Config:
        extra = "allow"


def error_message_from_body(body: Any, fallback: Optional[str] = None) -> Optional[str]:
    """
    Pull the most specific error text out of a response body.

    Prefers ``error.message``, then a top-level ``message``, then ``fallback``.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
    return fallback


class EnvelopeUnwrapper:
    """Resolves an envelope to its ``data`` or raises ApplicationFailure."""

    def __init__(self, normalizer: Optional[ErrorNormalizer] = None):
        self.normalizer = normalizer or ErrorNormalizer()

    def unwrap(self, context: RequestContext, status_code: int, body: Any) -> Any:
        """
        Return ``data`` of a successful envelope.

        Raises:
            ApplicationFailure: For ``success=false`` envelopes or bodies that
                are not envelopes at all. The message is normalized; presenting
                it is the caller's responsibility.
        """
        try:
            envelope = ResponseEnvelope.model_validate(body)
        except ValidationError:
            raise self._failure(context, status_code, INVALID_ENVELOPE_MESSAGE, None)

        if envelope.success:
            return envelope.data

        error = envelope.error or EnvelopeError()
        raise self._failure(context, status_code, error.message, error.code)

    def _failure(
        self,
        context: RequestContext,
        status_code: int,
        raw_message: Optional[str],
        code: Optional[str],
    ) -> ApplicationFailure:
        classification = self.normalizer.classify(raw_message)
        failure = ApplicationFailure(
            classification.message,
            raw_message=raw_message,
            request_id=context.id,
            status_code=status_code,
            code=code,
        )
        failure.category = classification.category
        return failure
