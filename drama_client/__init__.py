"""
Drama Client - resilient REST client for the drama/props production backend.

This package wraps every outgoing call with:
- Correlation ids shared by all retries of a call
- Redacted, structured request/response/error diagnostics
- Per-route retry with linear backoff
- Response-envelope unwrapping
- Normalized, actionable error messages
"""

__version__ = "0.1.0"

from .api.client import DramaAPIClient
from .api.resources import AIConfigAPI, PropAPI
from .config.settings import ClientConfig
from .errors import (
    ApplicationFailure,
    ClientError,
    ConfigError,
    HttpFailure,
    RetryExhausted,
    TransportFailure,
)
from .models.context import RequestContext
from .models.envelope import ResponseEnvelope
from .reliability.error_classifier import ErrorCategory, ErrorNormalizer, normalize_error_message
from .reliability.retry import RetryPolicy, RetryRoute

__all__ = [
    # Main client
    "DramaAPIClient",
    "AIConfigAPI",
    "PropAPI",
    "ClientConfig",

    # Errors
    "ClientError",
    "ConfigError",
    "TransportFailure",
    "HttpFailure",
    "ApplicationFailure",
    "RetryExhausted",

    # Models
    "RequestContext",
    "ResponseEnvelope",

    # Reliability
    "ErrorCategory",
    "ErrorNormalizer",
    "normalize_error_message",
    "RetryPolicy",
    "RetryRoute",
]
