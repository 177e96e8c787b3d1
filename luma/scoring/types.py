"""Scoring records -- category scores, weights, pass criteria, output.

All four category scores live on a 0-100 scale.  Weights map the same
four categories to fractional contributions that must sum to 1.0; that
is checked when a score is computed (``ScoreWeights.validate_sum``), never
silently renormalised.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from luma.config import MIN_OVERALL_SCORE
from luma.errors import InvalidWeightsError

#: Accepted absolute deviation of the weight sum from 1.0.
WEIGHT_TOLERANCE = 1e-6

CATEGORIES = (
    "pattern_fidelity",
    "flow_reachability",
    "hierarchy_grouping",
    "responsive_behavior",
)


class _Score(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CategoryScores(_Score):
    pattern_fidelity: float = Field(ge=0, le=100)
    flow_reachability: float = Field(ge=0, le=100)
    hierarchy_grouping: float = Field(ge=0, le=100)
    responsive_behavior: float = Field(ge=0, le=100)


class ScoreWeights(_Score):
    pattern_fidelity: float = 0.45
    flow_reachability: float = 0.25
    hierarchy_grouping: float = 0.20
    responsive_behavior: float = 0.10

    def as_dict(self) -> dict[str, float]:
        return {c: getattr(self, c) for c in CATEGORIES}

    def validate_sum(self) -> None:
        """Raise ``InvalidWeightsError`` unless weights are non-negative and sum to 1.0."""
        weights = self.as_dict()
        total = math.fsum(weights.values())
        negative = sorted(c for c, w in weights.items() if w < 0)
        if negative:
            raise InvalidWeightsError(
                weights, total, reason=f"negative weight(s): {', '.join(negative)}",
            )
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise InvalidWeightsError(weights, total)


class PassCriteria(_Score):
    no_must_failures: bool = True
    no_critical_flow_errors: bool = True
    min_overall_score: float = MIN_OVERALL_SCORE


class ScoreOutput(_Score):
    """Category scores, the weighted overall score, and the verdict."""

    categories: CategoryScores
    weights: ScoreWeights
    overall: int
    criteria: PassCriteria
    passed: bool = Field(alias="pass")
    fail_reasons: list[str] = Field(default_factory=list)


DEFAULT_WEIGHTS = ScoreWeights()
DEFAULT_CRITERIA = PassCriteria()


__all__ = [
    "CATEGORIES",
    "CategoryScores",
    "DEFAULT_CRITERIA",
    "DEFAULT_WEIGHTS",
    "PassCriteria",
    "ScoreOutput",
    "ScoreWeights",
    "WEIGHT_TOLERANCE",
]
