"""Pydantic data models for webpforge."""

from webpforge.models.config import TransformConfig
from webpforge.models.decisions import Decision, DecisionOutcome
from webpforge.models.requests import ModuleRequest, ResolutionContext

__all__ = [
    "Decision",
    "DecisionOutcome",
    "ModuleRequest",
    "ResolutionContext",
    "TransformConfig",
]
