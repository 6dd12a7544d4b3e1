"""Reliability layer for retries and error normalization.

This layer handles:
- Per-route retry eligibility and linear backoff
- Mapping raw error text onto actionable user messages
"""

from .error_classifier import (
    GENERIC_FAILURE_MESSAGE,
    NORMALIZATION_RULES,
    ErrorCategory,
    ErrorNormalizer,
    NormalizationRule,
    NormalizedError,
    normalize_error_message,
)
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, RetryRoute

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "NORMALIZATION_RULES",
    "ErrorCategory",
    "ErrorNormalizer",
    "NormalizationRule",
    "NormalizedError",
    "normalize_error_message",
    "DEFAULT_RETRY_POLICY",
    "RetryPolicy",
    "RetryRoute",
]
