"""Decision models — the engine's explicit return value."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DecisionOutcome(str, Enum):
    """Which terminal transition of the decision engine fired."""

    PASSTHROUGH = "passthrough"  # hand-authored variant exists or source missing
    INLINE_ORIGINAL = "inline_original"  # below the inline threshold
    CACHE_HIT = "cache_hit"  # tagged artifact already in the store
    SIZE_REGRESSION = "size_regression"  # codec output not smaller
    TRANSFORMED = "transformed"  # new artifact written


class Decision(BaseModel):
    """Immutable record of what the engine decided for one reference.

    ``reference`` is the value the caller should substitute for
    ``request``.  For ``PASSTHROUGH`` the two are identical.
    """

    model_config = ConfigDict(frozen=True)

    request: str
    reference: str
    outcome: DecisionOutcome
    source_path: str = ""
    artifact_path: str = ""
    fingerprint: str = ""
    source_size: int = 0
    output_size: int = 0
    reclaimed: list[str] = []

    @property
    def rewritten(self) -> bool:
        """Whether the reference differs from the original request."""
        return self.reference != self.request

    @property
    def points_at_artifact(self) -> bool:
        return self.outcome in (DecisionOutcome.CACHE_HIT, DecisionOutcome.TRANSFORMED)
