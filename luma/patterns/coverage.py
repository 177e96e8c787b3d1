"""Pattern coverage -- how many known patterns a run actually validated."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from luma.patterns.registry import PatternRegistry, default_registry
from luma.patterns.suggestions import PatternSuggestion


class _Coverage(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CoverageGap(_Coverage):
    """A medium/high suggestion whose pattern was not validated."""

    pattern: str
    reason: str


class CoverageResult(_Coverage):
    activated: int
    total: int
    percent: float
    gaps: list[CoverageGap] = Field(default_factory=list)


def compute_coverage(
    suggestions: list[PatternSuggestion],
    activated: list[str],
    *,
    registry: PatternRegistry | None = None,
) -> CoverageResult:
    """Share of registered patterns that were activated, plus the gaps.

    *activated* holds canonical pattern names; duplicates count once.
    """
    active = set(activated)
    gaps = [
        CoverageGap(pattern=s.pattern, reason=s.reason)
        for s in suggestions
        if s.confidence in ("high", "medium") and s.pattern not in active
    ]
    total = len((registry or default_registry).all())
    percent = 0.0 if total == 0 else round(len(active) / total * 100, 2)
    return CoverageResult(activated=len(active), total=total, percent=percent, gaps=gaps)


__all__ = ["CoverageGap", "CoverageResult", "compute_coverage"]
