"""
Error types raised by the drama client.

Every failure that reaches a caller is a ClientError whose message is the
normalized, user-presentable text. Raw diagnostic detail (response headers
and body) is only written to the diagnostics log, never attached here.
"""

from typing import Optional


class ClientError(Exception):
    """
    Base exception for all client failures.

    Attributes:
        message: Normalized, user-facing message (also ``str(error)``)
        raw_message: The message before normalization
        request_id: Correlation id of the failed call, if known
        status_code: HTTP status code if a response was received
        category: Normalization category (see ErrorCategory)
    """

    def __init__(
        self,
        message: str,
        raw_message: Optional[str] = None,
        request_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.raw_message = raw_message if raw_message is not None else message
        self.request_id = request_id
        self.status_code = status_code
        self.category = None  # Set by the normalizer when the error is finalized

    def with_message(self, message: str, category=None) -> "ClientError":
        """Replace the user-facing message, keeping raw_message for diagnostics."""
        self.message = message
        self.args = (message,)
        self.category = category
        return self


class ConfigError(ClientError):
    """Raised when the client configuration is invalid."""


class TransportFailure(ClientError):
    """No HTTP response was obtained (DNS failure, refused connection, timeout)."""

    def __init__(self, message: str, request_id: Optional[str] = None):
        super().__init__(message, request_id=request_id, status_code=None)


class HttpFailure(ClientError):
    """An HTTP response was obtained with a non-2xx status."""


class ApplicationFailure(HttpFailure):
    """The backend answered with a ``success=false`` envelope."""

    def __init__(
        self,
        message: str,
        raw_message: Optional[str] = None,
        request_id: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, raw_message, request_id, status_code)
        self.code = code


class RetryExhausted(ClientError):
    """A retry-eligible failure kept failing until its retry limit was reached."""

    def __init__(self, message: str, last_error: ClientError, attempts: int):
        super().__init__(
            message,
            raw_message=last_error.raw_message,
            request_id=last_error.request_id,
            status_code=last_error.status_code,
        )
        self.last_error = last_error
        self.attempts = attempts
