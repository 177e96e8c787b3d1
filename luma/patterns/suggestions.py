"""Pattern suggestions -- structural resemblance scores per pattern.

Each pattern has a scorer that sums fixed weights for the independent
structural indicators it finds (capped at 100), so partial matches
score proportionally lower and adding an indicator never lowers a
score.  Scores map to a band:

* ``high``   score >= high threshold
* ``medium`` score >= medium threshold and more than one indicator
* ``low``    everything else, including a score of 0

Suggestions are advisory.  They never block; patterns whose score
reaches the high threshold are auto-selected for validation.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from luma.config import settings
from luma.errors import ConfigurationError
from luma.nodes import BaseNode, ButtonNode, FormNode, TableNode
from luma.patterns.disclosure import is_collapsible
from luma.patterns.guided_flow import has_guided_flow_hints
from luma.patterns.registry import PatternRegistry, default_registry
from luma.traversal import traverse

logger = logging.getLogger(__name__)

Confidence = Literal["high", "medium", "low"]

MAX_SCORE = 100

# Indicator weights
FORM_WEIGHTS = {"form": 50, "fields": 20, "actions": 15, "primary": 10}
TABLE_WEIGHTS = {"table": 50, "columns": 25, "strategy": 15}
DISCLOSURE_WEIGHTS = {"collapsible": 80, "controls": 6, "affordances": 6}
GUIDED_FLOW_FIRST = 40
GUIDED_FLOW_EACH = 15

_NAV_WORDS = ("next", "previous", "prev", "back")
_STEP_LABEL = re.compile(r"step\s*\d+", re.IGNORECASE)


class PatternSuggestion(BaseModel):
    """How strongly the tree resembles one pattern."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    pattern: str
    reason: str
    confidence: Confidence
    confidence_score: int = Field(ge=0, le=MAX_SCORE)
    indicators: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-pattern scorers
# ---------------------------------------------------------------------------
# Each takes the full node list (invisible nodes included) and returns
# (score, indicators, reason).

Scorer = Callable[[list[BaseNode]], tuple[int, list[str], str]]


def _score_form(nodes: list[BaseNode]) -> tuple[int, list[str], str]:
    forms = [n for n in nodes if isinstance(n, FormNode)]
    if not forms:
        return 0, [], "No Form node found"
    fields = sum(len(f.fields) for f in forms)
    actions = sum(len(f.actions) for f in forms)
    has_primary = any(a.role_hint == "primary" for f in forms for a in f.actions)

    indicators = ["form"]
    if fields:
        indicators.append("fields")
    if actions:
        indicators.append("actions")
    if has_primary:
        indicators.append("primary")
    score = sum(FORM_WEIGHTS[i] for i in indicators)
    reason = f"Detected Form node with {fields} field(s) and {actions} action(s)"
    return score, indicators, reason


def _score_table(nodes: list[BaseNode]) -> tuple[int, list[str], str]:
    tables = [n for n in nodes if isinstance(n, TableNode)]
    if not tables:
        return 0, [], "No Table node found"
    columns = sum(len(t.columns) for t in tables)
    strategy = next(
        (t.responsive.strategy for t in tables if t.responsive and t.responsive.strategy),
        None,
    )

    indicators = ["table"]
    if columns:
        indicators.append("columns")
    if strategy:
        indicators.append("strategy")
    score = sum(TABLE_WEIGHTS[i] for i in indicators)
    reason = f"Detected Table node ({columns} columns, responsive.strategy={strategy or 'none'})"
    return score, indicators, reason


def _score_disclosure(nodes: list[BaseNode]) -> tuple[int, list[str], str]:
    sections = [n for n in nodes if is_collapsible(n)]
    if not sections:
        return 0, [], "No collapsible disclosure behavior found"

    indicators = ["collapsible"]
    if any(s.behaviors.disclosure.controls_id for s in sections):
        indicators.append("controls")
    if any(s.affordances for s in sections):
        indicators.append("affordances")
    score = sum(DISCLOSURE_WEIGHTS[i] for i in indicators)
    reason = f"Found collapsible disclosure behavior on {len(sections)} node(s)"
    return score, indicators, reason


def _guided_flow_indicator(node: BaseNode) -> str | None:
    if isinstance(node, ButtonNode):
        text = (node.text or "").lower()
        if any(word in text for word in _NAV_WORDS) or _STEP_LABEL.search(text):
            return text
    if node.behaviors and node.behaviors.guided_flow:
        return node.id
    return None


def _score_guided_flow(nodes: list[BaseNode]) -> tuple[int, list[str], str]:
    indicators = [i for i in (_guided_flow_indicator(n) for n in nodes) if i is not None]
    if not indicators:
        return 0, [], "No multi-step indicators found"
    score = GUIDED_FLOW_FIRST + GUIDED_FLOW_EACH * (len(indicators) - 1)
    if len(indicators) == 1:
        reason = f"Single guided-flow hint ({indicators[0]}) detected"
    else:
        reason = (
            f"Found multi-step indicators ({', '.join(indicators[:5])}) "
            "suggesting a wizard flow"
        )
    return score, indicators, reason


SCORERS: dict[str, Scorer] = {
    "Form.Basic": _score_form,
    "Table.Simple": _score_table,
    "Progressive.Disclosure": _score_disclosure,
    "Guided.Flow": _score_guided_flow,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _resolve_thresholds(
    high_threshold: float | None, medium_threshold: float | None,
) -> tuple[float, float]:
    high = settings.HIGH_CONFIDENCE_THRESHOLD if high_threshold is None else high_threshold
    medium = settings.MEDIUM_CONFIDENCE_THRESHOLD if medium_threshold is None else medium_threshold
    if medium >= high:
        raise ConfigurationError(
            f"Medium confidence threshold ({medium}) must be lower than high ({high})",
            detail={"high_threshold": high, "medium_threshold": medium},
        )
    return high, medium


def confidence_band(
    score: float,
    indicator_count: int,
    *,
    high_threshold: float | None = None,
    medium_threshold: float | None = None,
) -> Confidence:
    high, medium = _resolve_thresholds(high_threshold, medium_threshold)
    if score >= high:
        return "high"
    if score >= medium and indicator_count > 1:
        return "medium"
    return "low"


def suggest_patterns(
    root: BaseNode,
    *,
    high_threshold: float | None = None,
    medium_threshold: float | None = None,
    registry: PatternRegistry | None = None,
) -> list[PatternSuggestion]:
    """Score every registered pattern against *root*, in registry order.

    Patterns without a scorer, or with no indicators in the tree, get a
    score of 0 and band ``low``.
    """
    high, medium = _resolve_thresholds(high_threshold, medium_threshold)
    nodes = traverse(root, visible_only=False)
    suggestions: list[PatternSuggestion] = []
    for pattern in (registry or default_registry).all():
        scorer = SCORERS.get(pattern.name)
        if scorer is None:
            score, indicators, reason = 0, [], "No structural scorer for this pattern"
        else:
            score, indicators, reason = scorer(nodes)
        score = min(score, MAX_SCORE)
        suggestions.append(PatternSuggestion(
            pattern=pattern.name,
            reason=reason,
            confidence=confidence_band(
                score, len(indicators), high_threshold=high, medium_threshold=medium,
            ),
            confidence_score=score,
            indicators=indicators,
        ))

    logger.debug(
        "Pattern suggestions: %s",
        ", ".join(f"{s.pattern}={s.confidence_score}" for s in suggestions),
    )
    return suggestions


def select_patterns(
    suggestions: list[PatternSuggestion], threshold: float | None = None,
) -> list[str]:
    """Names of the auto-selected patterns (score at or above *threshold*)."""
    if threshold is None:
        threshold = settings.HIGH_CONFIDENCE_THRESHOLD
    return [s.pattern for s in suggestions if s.confidence_score >= threshold]


def has_disclosure_hints(root: BaseNode) -> bool:
    return any(is_collapsible(n) for n in traverse(root, visible_only=False))


__all__ = [
    "Confidence",
    "PatternSuggestion",
    "SCORERS",
    "confidence_band",
    "has_disclosure_hints",
    "has_guided_flow_hints",
    "select_patterns",
    "suggest_patterns",
]
