"""Category scoring -- count-based formulas, each clamped to 0-100.

    pattern_fidelity    = 100 - 30 * must_failed - 10 * should_failed
    flow_reachability   = 100 - 30 * unreachable - 10 * warnings
    hierarchy_grouping  = 100 - 10 * structural  - 5 * spacing_clusters
    responsive_behavior = mean over viewports of max(0, 100 - penalty)

``ScoringInputs.from_results`` derives the counts from pattern, keyboard
and layout results so callers rarely compute them by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from luma.contracts import Issue, KeyboardOutput
from luma.patterns.types import FlowOutput
from luma.scoring.types import CategoryScores

MUST_PENALTY = 30
SHOULD_PENALTY = 10
UNREACHABLE_PENALTY = 30
FLOW_WARN_PENALTY = 10
STRUCTURAL_PENALTY = 10
SPACING_CLUSTER_PENALTY = 5

# Layout issue id -> per-viewport penalty
VIEWPORT_PENALTIES = {
    "overflow-x": 30,
    "primary-below-fold": 20,
}

#: Spacing findings per cluster.
SPACING_CLUSTER_SIZE = 3

DEFAULT_VIEWPORT = "default"


def _clamp(score: float) -> float:
    return max(0, min(100, score))


def score_pattern_fidelity(must_failed: int, should_failed: int) -> float:
    return _clamp(100 - MUST_PENALTY * must_failed - SHOULD_PENALTY * should_failed)


def score_flow_reachability(unreachable_count: int, warn_count: int) -> float:
    return _clamp(100 - UNREACHABLE_PENALTY * unreachable_count - FLOW_WARN_PENALTY * warn_count)


def score_hierarchy_grouping(structural_findings: int, spacing_clusters: int) -> float:
    return _clamp(
        100 - STRUCTURAL_PENALTY * structural_findings - SPACING_CLUSTER_PENALTY * spacing_clusters
    )


def score_responsive_behavior(viewport_penalties: Iterable[float]) -> float:
    """Average the per-viewport scores; no viewports means a perfect score."""
    per_viewport = [_clamp(100 - p) for p in viewport_penalties]
    if not per_viewport:
        return 100
    return sum(per_viewport) / len(per_viewport)


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


def count_structural_findings(keyboard_issues: list[Issue]) -> int:
    return sum(1 for i in keyboard_issues if i.id == "field-after-actions")


def count_spacing_clusters(layout_issues: list[Issue]) -> int:
    spacing = sum(1 for i in layout_issues if i.id == "spacing-off-scale")
    return spacing // SPACING_CLUSTER_SIZE


def viewport_penalties(layout_issues: list[Issue]) -> dict[str, int]:
    """Sum penalties per viewport, in first-seen order.

    Every viewport with at least one layout issue is present, even at 0.
    """
    penalties: dict[str, int] = {}
    for issue in layout_issues:
        viewport = issue.viewport or DEFAULT_VIEWPORT
        penalties[viewport] = penalties.get(viewport, 0) + VIEWPORT_PENALTIES.get(issue.id, 0)
    return penalties


@dataclass(frozen=True)
class ScoringInputs:
    """The counts the category formulas consume."""

    must_failed: int = 0
    should_failed: int = 0
    unreachable_count: int = 0
    warn_count: int = 0
    structural_findings: int = 0
    spacing_clusters: int = 0
    viewport_penalties: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_results(
        cls,
        flow: FlowOutput | None = None,
        keyboard: KeyboardOutput | None = None,
        layout_issues: Iterable[Issue] = (),
    ) -> ScoringInputs:
        layout = list(layout_issues)
        keyboard_issues = keyboard.issues if keyboard is not None else []
        return cls(
            must_failed=flow.must_failed if flow is not None else 0,
            should_failed=flow.should_failed if flow is not None else 0,
            unreachable_count=len(keyboard.unreachable) if keyboard is not None else 0,
            warn_count=sum(1 for i in keyboard_issues if i.severity == "warn"),
            structural_findings=count_structural_findings(keyboard_issues),
            spacing_clusters=count_spacing_clusters(layout),
            viewport_penalties=viewport_penalties(layout),
        )


def compute_categories(inputs: ScoringInputs) -> CategoryScores:
    return CategoryScores(
        pattern_fidelity=score_pattern_fidelity(inputs.must_failed, inputs.should_failed),
        flow_reachability=score_flow_reachability(inputs.unreachable_count, inputs.warn_count),
        hierarchy_grouping=score_hierarchy_grouping(
            inputs.structural_findings, inputs.spacing_clusters,
        ),
        responsive_behavior=score_responsive_behavior(inputs.viewport_penalties.values()),
    )


__all__ = [
    "ScoringInputs",
    "compute_categories",
    "count_spacing_clusters",
    "count_structural_findings",
    "score_flow_reachability",
    "score_hierarchy_grouping",
    "score_pattern_fidelity",
    "score_responsive_behavior",
    "viewport_penalties",
]
