from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..config.constants import (
    AI_CONFIGS_PATH,
    DEFAULT_RETRY_DELAY_BASE_MS,
    DEFAULT_RETRY_LIMIT,
    IDEMPOTENT_METHODS,
    OPTIMIZE_PROMPT_PATH,
)
from ..models.context import RequestContext


@dataclass(frozen=True)
class RetryRoute:
    """A ``(method, path fragment)`` pair; the fragment matches as a substring of the url."""
    method: str
    path_fragment: str

    def matches(self, method: str, url: str) -> bool:
        return method.upper() == self.method.upper() and self.path_fragment in (url or "")


DEFAULT_RETRY_WHITELIST: Tuple[RetryRoute, ...] = (
    RetryRoute("POST", OPTIMIZE_PROMPT_PATH),
)

DEFAULT_RETRY_ROUTES: Tuple[RetryRoute, ...] = (
    RetryRoute("GET", AI_CONFIGS_PATH),
    RetryRoute("POST", OPTIMIZE_PROMPT_PATH),
)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Decides whether a failed attempt is retried and how long to wait.

    A failure is eligible when the method is idempotent or the route is
    whitelisted, and the failure is either transport-level (no status) or a
    5xx. Client errors are never retried.

    Backoff is linear, not exponential: the Nth retry waits
    ``retry_delay_base_ms * N``.
    """
    idempotent_methods: Tuple[str, ...] = IDEMPOTENT_METHODS
    retry_whitelist: Tuple[RetryRoute, ...] = DEFAULT_RETRY_WHITELIST
    default_routes: Tuple[RetryRoute, ...] = DEFAULT_RETRY_ROUTES
    default_retry_limit: int = DEFAULT_RETRY_LIMIT
    default_retry_delay_base_ms: int = DEFAULT_RETRY_DELAY_BASE_MS

    def apply_route_defaults(self, context: RequestContext) -> RequestContext:
        """
        Resolve the context's retry settings before its first attempt.

        Known-retryable routes are seeded with the default limit and delay,
        but only where the caller left them unset. Every other route falls
        back to no retries.
        """
        seeded = any(route.matches(context.method, context.url) for route in self.default_routes)
        limit = context.retry_limit
        delay = context.retry_delay_base_ms
        if limit is None:
            limit = self.default_retry_limit if seeded else 0
        if delay is None:
            delay = self.default_retry_delay_base_ms
        return context.evolve(retry_limit=limit, retry_delay_base_ms=delay)

    def is_whitelisted(self, method: str, url: str) -> bool:
        return any(route.matches(method, url) for route in self.retry_whitelist)

    def is_retry_eligible(self, method: str, url: str, status_code: Optional[int]) -> bool:
        method = method.upper()
        if method not in self.idempotent_methods and not self.is_whitelisted(method, url):
            return False
        return status_code is None or status_code >= 500

    def should_retry(self, context: RequestContext, status_code: Optional[int]) -> bool:
        """Whether another attempt of ``context`` should be made."""
        if not self.is_retry_eligible(context.method, context.url, status_code):
            return False
        return context.retry_count < (context.retry_limit or 0)

    def next_attempt(self, context: RequestContext) -> RequestContext:
        return context.next_attempt()

    def next_delay_ms(self, context: RequestContext) -> int:
        """Delay before the attempt ``context`` describes (1-indexed retry count)."""
        base = context.retry_delay_base_ms
        if base is None:
            base = self.default_retry_delay_base_ms
        return base * context.retry_count


DEFAULT_RETRY_POLICY = RetryPolicy()
