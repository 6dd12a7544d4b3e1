"""Correlation ids joining the request, response and error records of one call."""

import time
import uuid

from ..models.context import RequestContext


class Correlator:
    """Assigns a correlation id to each logical call."""

    def new_id(self) -> str:
        """Time-based prefix plus a random suffix, e.g. ``1718000000000-3f9a1c2e``."""
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"

    def assign(self, context: RequestContext) -> RequestContext:
        """
        Give the context an id unless it already has one.

        Retries pass their context back through here and keep the id they
        were first given.
        """
        if context.id:
            return context
        return context.evolve(id=self.new_id())
