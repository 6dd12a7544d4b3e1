"""Per-call request context carried through the outgoing and incoming pipeline."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..config.constants import DEFAULT_TIMEOUT_MS


@dataclass(frozen=True)
class RequestContext:
    """
    One logical call, owned by a single attempt at a time.

    The context is immutable: each retry takes the current value and derives
    the next one with ``next_attempt()``, so the correlation id and the
    original start time travel with it while the attempt counter advances.

    ``retry_limit`` and ``retry_delay_base_ms`` are ``None`` until the retry
    policy has applied its route defaults.
    """
    method: str
    url: str
    base_url: str = ""
    id: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    body: Any = None
    retry_limit: Optional[int] = None
    retry_delay_base_ms: Optional[int] = None
    retry_count: int = 0
    started_at_ms: Optional[int] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        if self.retry_limit is not None and self.retry_limit < 0:
            raise ValueError(f"retry_limit must be >= 0, got {self.retry_limit}")
        if self.retry_delay_base_ms is not None and self.retry_delay_base_ms < 0:
            raise ValueError(f"retry_delay_base_ms must be >= 0, got {self.retry_delay_base_ms}")
        limit = self.retry_limit or 0
        if not 0 <= self.retry_count <= limit:
            raise ValueError(
                f"retry_count must be within [0, {limit}], got {self.retry_count}"
            )

    @property
    def full_url(self) -> str:
        if self.url.startswith(("http://", "https://")):
            return self.url
        return f"{self.base_url}{self.url}"

    def evolve(self, **changes) -> "RequestContext":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def next_attempt(self) -> "RequestContext":
        """Return the context for the following attempt."""
        return replace(self, retry_count=self.retry_count + 1)
