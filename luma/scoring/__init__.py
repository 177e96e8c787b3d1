"""Category-weighted scoring and the pass/fail gate."""

from luma.scoring.aggregate import (
    calculate_overall_score,
    create_score_output,
    evaluate_pass_fail,
    round_half_up,
    score_inputs,
)
from luma.scoring.categories import (
    ScoringInputs,
    compute_categories,
    count_spacing_clusters,
    count_structural_findings,
    score_flow_reachability,
    score_hierarchy_grouping,
    score_pattern_fidelity,
    score_responsive_behavior,
    viewport_penalties,
)
from luma.scoring.types import (
    DEFAULT_CRITERIA,
    DEFAULT_WEIGHTS,
    CategoryScores,
    PassCriteria,
    ScoreOutput,
    ScoreWeights,
)

__all__ = [
    "CategoryScores",
    "DEFAULT_CRITERIA",
    "DEFAULT_WEIGHTS",
    "PassCriteria",
    "ScoreOutput",
    "ScoreWeights",
    "ScoringInputs",
    "calculate_overall_score",
    "compute_categories",
    "count_spacing_clusters",
    "count_structural_findings",
    "create_score_output",
    "evaluate_pass_fail",
    "round_half_up",
    "score_flow_reachability",
    "score_hierarchy_grouping",
    "score_inputs",
    "score_pattern_fidelity",
    "score_responsive_behavior",
    "viewport_penalties",
]
