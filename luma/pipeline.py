"""End-to-end analysis run: keyboard -> suggestions -> patterns -> score.

``analyze`` is a pure function of its arguments.  It holds no state
between calls, so two runs over the same scaffold produce byte-identical
``AnalysisReport.to_json()`` output.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from luma import config
from luma.contracts import Issue, KeyboardOutput
from luma.keyboard import analyze_keyboard
from luma.nodes import BaseNode, Scaffold
from luma.patterns.coverage import CoverageResult, compute_coverage
from luma.patterns.engine import validate_patterns
from luma.patterns.registry import PatternRegistry, default_registry
from luma.patterns.suggestions import PatternSuggestion, select_patterns, suggest_patterns
from luma.patterns.types import FlowOutput, Pattern
from luma.responsive import apply_responsive_overrides
from luma.scoring.aggregate import score_inputs
from luma.scoring.categories import ScoringInputs
from luma.scoring.types import DEFAULT_WEIGHTS, PassCriteria, ScoreOutput, ScoreWeights

logger = logging.getLogger(__name__)


class AnalysisReport(BaseModel):
    """Everything one analysis run produced."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    screen_id: str | None = None
    viewport_width: int | None = None
    activated_patterns: list[str] = Field(default_factory=list)
    keyboard: KeyboardOutput
    suggestions: list[PatternSuggestion] = Field(default_factory=list)
    flow: FlowOutput
    coverage: CoverageResult
    score: ScoreOutput

    @property
    def passed(self) -> bool:
        return self.score.passed

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def resolve_patterns(
    names: Iterable[str], registry: PatternRegistry | None = None,
) -> list[Pattern]:
    """Look up *names* (canonical or alias), dropping repeats.

    Raises ``UnknownPatternError`` on the first unknown name.
    """
    registry = registry or default_registry
    resolved: list[Pattern] = []
    for name in names:
        pattern = registry.get(name)
        if all(p.name != pattern.name for p in resolved):
            resolved.append(pattern)
    return resolved


def analyze(
    scaffold: Scaffold | BaseNode,
    patterns: Iterable[str] | None = None,
    *,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    criteria: PassCriteria | None = None,
    layout_issues: Iterable[Issue] = (),
    viewport_width: int | None = None,
    settings: config.Settings | None = None,
    registry: PatternRegistry | None = None,
) -> AnalysisReport:
    """Analyse one scaffold (or a bare root node).

    * *patterns* -- names to validate; ``None`` auto-selects every pattern
      whose suggestion reaches the high confidence threshold
    * *layout_issues* -- findings from an external layout pass, used for
      the hierarchy and responsive categories
    * *viewport_width* -- resolve responsive overrides for this width first
    """
    cfg = settings or config.settings
    if isinstance(scaffold, Scaffold):
        screen_id: str | None = scaffold.screen.id
        root = scaffold.screen.root
    else:
        screen_id = None
        root = scaffold
    if viewport_width is not None:
        root = apply_responsive_overrides(root, viewport_width)

    keyboard = analyze_keyboard(root, base_pointer=cfg.POINTER_ROOT)
    suggestions = suggest_patterns(
        root,
        high_threshold=cfg.HIGH_CONFIDENCE_THRESHOLD,
        medium_threshold=cfg.MEDIUM_CONFIDENCE_THRESHOLD,
        registry=registry,
    )
    if patterns is None:
        patterns = select_patterns(suggestions, cfg.HIGH_CONFIDENCE_THRESHOLD)
    selected = resolve_patterns(patterns, registry)
    activated = [p.name for p in selected]

    flow = validate_patterns(selected, root, base_pointer=cfg.POINTER_ROOT)
    coverage = compute_coverage(suggestions, activated, registry=registry)
    inputs = ScoringInputs.from_results(flow, keyboard, layout_issues)
    score = score_inputs(
        inputs,
        weights,
        criteria or PassCriteria(min_overall_score=cfg.MIN_OVERALL_SCORE),
    )

    logger.debug(
        "Analysed %s: patterns=%s overall=%d pass=%s",
        screen_id or root.id, activated, score.overall, score.passed,
    )
    return AnalysisReport(
        screen_id=screen_id,
        viewport_width=viewport_width,
        activated_patterns=activated,
        keyboard=keyboard,
        suggestions=suggestions,
        flow=flow,
        coverage=coverage,
        score=score,
    )


__all__ = ["AnalysisReport", "analyze", "resolve_patterns"]
