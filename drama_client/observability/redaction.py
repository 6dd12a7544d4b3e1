"""
Secret redaction for diagnostic output.

Values under denylisted keys are replaced by a mask before headers, query
parameters or bodies are written to any log record.
"""

from typing import Any, Iterable

from ..config.constants import BODY_REDACT_KEYS, HEADER_REDACT_KEYS, REDACTION_MASK


class Redactor:
    """Masks sensitive fields in headers and structured bodies."""

    def __init__(
        self,
        body_keys: Iterable[str] = BODY_REDACT_KEYS,
        header_keys: Iterable[str] = HEADER_REDACT_KEYS,
        mask: str = REDACTION_MASK,
    ):
        self.body_keys = frozenset(key.lower() for key in body_keys)
        self.header_keys = frozenset(key.lower() for key in header_keys)
        self.mask = mask

    def redact(self, value: Any) -> Any:
        """
        Return a redacted copy of a body or params value.

        Lists and dicts are walked recursively; anything else is returned as-is.
        The input is never mutated.
        """
        if isinstance(value, (list, tuple)):
            return [self.redact(item) for item in value]
        if not isinstance(value, dict):
            return value

        result = {}
        for key, item in value.items():
            if isinstance(key, str) and key.lower() in self.body_keys:
                result[key] = self.mask
            else:
                result[key] = self.redact(item)
        return result

    def redact_headers(self, headers: Any) -> Any:
        """Return a copy of a header mapping with credential headers masked."""
        if not isinstance(headers, dict):
            return headers

        return {
            key: self.mask if isinstance(key, str) and key.lower() in self.header_keys else value
            for key, value in headers.items()
        }


_default_redactor = Redactor()


def redact(value: Any) -> Any:
    """Redact a body or params value using the default denylist."""
    return _default_redactor.redact(value)


def redact_headers(headers: Any) -> Any:
    """Redact a header mapping using the default denylist."""
    return _default_redactor.redact_headers(headers)
