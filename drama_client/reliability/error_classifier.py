"""
Error normalization for user-facing messages.

This module maps raw transport and backend error text onto a small set of
actionable messages. The rules are an ordered table evaluated top to bottom;
the first rule with a matching pattern wins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

GENERIC_FAILURE_MESSAGE = "Request failed"


class ErrorCategory(Enum):
    """Categories a raw error message can be normalized into."""
    DNS_RESOLUTION = "dns_resolution"
    AUTHENTICATION = "authentication"
    MISSING_CONFIG = "missing_config"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NormalizationRule:
    """Lowercase substrings that map a raw message onto one user message."""
    category: ErrorCategory
    patterns: Tuple[str, ...]
    message: str

    def matches(self, normalized: str) -> bool:
        return any(pattern in normalized for pattern in self.patterns)


@dataclass(frozen=True)
class NormalizedError:
    category: ErrorCategory
    message: str


# Order matters: a message such as "dial tcp: unauthorized" matches both of
# the first two rules and must resolve to the DNS guidance.
NORMALIZATION_RULES: Tuple[NormalizationRule, ...] = (
    NormalizationRule(
        category=ErrorCategory.DNS_RESOLUTION,
        patterns=("no such host", "dial tcp", "ark.cn-beijing.volces.com"),
        message=(
            "AI service address could not be resolved; switch providers or "
            "check network/DNS in AI service settings."
        ),
    ),
    NormalizationRule(
        category=ErrorCategory.AUTHENTICATION,
        patterns=("authenticationerror", "unauthorized", "api key", "ak/sk"),
        message="AI service authentication failed; check API Key/AK-SK in AI service settings.",
    ),
    NormalizationRule(
        category=ErrorCategory.MISSING_CONFIG,
        patterns=("no active config found", "no image ai config found"),
        message="No usable AI service configuration found; enable one in AI service settings.",
    ),
)


class ErrorNormalizer:
    """Turns raw error text into user-presentable messages."""

    def __init__(self, rules: Tuple[NormalizationRule, ...] = NORMALIZATION_RULES):
        self.rules = rules

    def classify(self, raw_message: Optional[str]) -> NormalizedError:
        """
        Classify a raw message.

        Args:
            raw_message: Transport error text or an envelope's error message

        Returns:
            NormalizedError with the matched category and its message; unmatched
            input keeps its own text, or the generic failure message when empty
        """
        text = str(raw_message) if raw_message else ""
        normalized = text.lower()

        for rule in self.rules:
            if rule.matches(normalized):
                return NormalizedError(category=rule.category, message=rule.message)

        return NormalizedError(
            category=ErrorCategory.UNKNOWN,
            message=text or GENERIC_FAILURE_MESSAGE,
        )

    def normalize(self, raw_message: Optional[str]) -> str:
        return self.classify(raw_message).message


_default_normalizer = ErrorNormalizer()


def normalize_error_message(raw_message: Optional[str]) -> str:
    """Normalize a raw message with the default rule table."""
    return _default_normalizer.normalize(raw_message)
