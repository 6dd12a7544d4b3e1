"""Observability layer for outgoing calls.

This layer handles:
- Correlation ids shared by every attempt of a call
- Redaction of credentials before anything is logged
- Structured request/response/error records
"""

from .correlation import Correlator
from .logging import DiagnosticsLogger, configure_logging
from .redaction import Redactor, redact, redact_headers

__all__ = [
    "Correlator",
    "DiagnosticsLogger",
    "configure_logging",
    "Redactor",
    "redact",
    "redact_headers",
]
