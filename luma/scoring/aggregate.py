"""Scoring aggregator -- weighted overall score and the pass/fail gate.

Pure functions, no IO.  The overall score is rounded half-up (ties go
towards +infinity) so the gate is reproducible bit for bit.

Fail reasons accumulate in a fixed order, one per violated criterion:

1. MUST failures
2. unreachable (critical flow) findings
3. overall score below the minimum
"""

from __future__ import annotations

import logging
import math

from luma.scoring.categories import ScoringInputs, compute_categories
from luma.scoring.types import (
    CATEGORIES,
    DEFAULT_CRITERIA,
    DEFAULT_WEIGHTS,
    CategoryScores,
    PassCriteria,
    ScoreOutput,
    ScoreWeights,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_overall_score(
    categories: CategoryScores, weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Weighted sum of the category scores.

    Raises ``InvalidWeightsError`` if *weights* are invalid.
    """
    weights.validate_sum()
    weighted = sum(getattr(weights, c) * getattr(categories, c) for c in CATEGORIES)
    return round_half_up(weighted)


def evaluate_pass_fail(
    overall: float,
    must_failed: int,
    unreachable_count: int,
    criteria: PassCriteria = DEFAULT_CRITERIA,
) -> tuple[bool, list[str]]:
    """Return ``(passed, fail_reasons)``.

    SHOULD failures are not a criterion: they lower ``pattern_fidelity``
    and only reach the gate through the overall score.
    """
    reasons: list[str] = []
    if criteria.no_must_failures and must_failed > 0:
        reasons.append(f"{must_failed} MUST failure(s) in pattern validation")
    if criteria.no_critical_flow_errors and unreachable_count > 0:
        reasons.append(f"{unreachable_count} unreachable node(s)")
    if overall < criteria.min_overall_score:
        reasons.append(
            f"Overall score {overall} below minimum {_format_number(criteria.min_overall_score)}"
        )
    return not reasons, reasons


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def create_score_output(
    categories: CategoryScores,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    *,
    must_failed: int = 0,
    unreachable_count: int = 0,
    criteria: PassCriteria = DEFAULT_CRITERIA,
) -> ScoreOutput:
    overall = calculate_overall_score(categories, weights)
    passed, reasons = evaluate_pass_fail(overall, must_failed, unreachable_count, criteria)
    logger.debug("Score: overall=%d pass=%s reasons=%s", overall, passed, reasons)
    return ScoreOutput(
        categories=categories,
        weights=weights,
        overall=overall,
        criteria=criteria,
        passed=passed,
        fail_reasons=reasons,
    )


def score_inputs(
    inputs: ScoringInputs,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    criteria: PassCriteria = DEFAULT_CRITERIA,
) -> ScoreOutput:
    """Compute category scores from *inputs*, then the overall score and verdict."""
    return create_score_output(
        compute_categories(inputs),
        weights,
        must_failed=inputs.must_failed,
        unreachable_count=inputs.unreachable_count,
        criteria=criteria,
    )


__all__ = [
    "calculate_overall_score",
    "create_score_output",
    "evaluate_pass_fail",
    "round_half_up",
    "score_inputs",
]
