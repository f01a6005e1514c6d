"""Request interceptor — glue between a host's request stream and the engine.

The host hands over a ``ModuleRequest``; the interceptor returns a new one
with the rewritten reference.  Requests without the virtual extension pass
through without touching the engine.

Error policy
------------
``on_error="raise"`` (default) propagates every engine error so the build
fails.  ``on_error="passthrough"`` logs the error and returns the request
unchanged, leaving the host to resolve the original reference.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Literal

from webpforge.core.engine import TransformationEngine
from webpforge.models.decisions import Decision, DecisionOutcome
from webpforge.models.requests import ModuleRequest

logger = logging.getLogger(__name__)

ErrorPolicy = Literal["raise", "passthrough"]


class RequestInterceptor:
    """Rewrites module requests that ask for the optimized variant.

    Parameters
    ----------
    engine:
        The decision engine requests are delegated to.
    on_error:
        ``"raise"`` or ``"passthrough"``.
    """

    def __init__(
        self, engine: TransformationEngine, *, on_error: ErrorPolicy = "raise"
    ) -> None:
        if on_error not in ("raise", "passthrough"):
            raise ValueError(f"Unknown error policy: {on_error!r}")
        self.engine = engine
        self.on_error = on_error

    def matches(self, request: ModuleRequest) -> bool:
        return self.engine.handles(request.request)

    def decide(self, request: ModuleRequest) -> Decision:
        """Return the engine's decision, or a passthrough for foreign requests."""
        if not self.matches(request):
            return Decision(
                request=request.request,
                reference=request.request,
                outcome=DecisionOutcome.PASSTHROUGH,
            )
        try:
            decision = self.engine.process(request.request, request.context)
        except Exception as exc:
            if self.on_error == "raise":
                raise
            logger.warning(
                "Passing %s through untouched after %s: %s",
                request.request, type(exc).__name__, exc,
            )
            return Decision(
                request=request.request,
                reference=request.request,
                outcome=DecisionOutcome.PASSTHROUGH,
            )
        return decision

    def intercept(self, request: ModuleRequest) -> ModuleRequest:
        """Return ``request`` with its reference rewritten by the engine."""
        decision = self.decide(request)
        if not decision.rewritten:
            return request
        return request.model_copy(update={"request": decision.reference})

    def decide_many(
        self, requests: Iterable[ModuleRequest], *, max_workers: int = 4
    ) -> list[Decision]:
        """Decide requests concurrently, preserving input order.

        Requests are independent; the only shared resource is the byte
        store, and racing writes of the same artifact are idempotent.
        """
        items = list(requests)
        if max_workers <= 1 or len(items) <= 1:
            return [self.decide(r) for r in items]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.decide, items))

    def intercept_many(
        self, requests: Iterable[ModuleRequest], *, max_workers: int = 4
    ) -> list[ModuleRequest]:
        """Intercept requests concurrently, preserving input order."""
        items = list(requests)
        decisions = self.decide_many(items, max_workers=max_workers)
        return [
            r.model_copy(update={"request": d.reference}) if d.rewritten else r
            for r, d in zip(items, decisions)
        ]
