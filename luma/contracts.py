"""Diagnostic contracts -- Pydantic models shared by every analysis stage.

Traversal, keyboard analysis, pattern rules and scoring all report
through the single ``Issue`` model.  All models are frozen (immutable
after creation): diagnostics are produced, never mutated.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Contract(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

Severity = Literal["info", "warn", "error", "critical"]

#: Ordinal rank for each severity (higher is worse).
SEVERITY_RANK: dict[str, int] = {
    "info": 0,
    "warn": 1,
    "error": 2,
    "critical": 3,
}


class IssueSource(_Contract):
    """Attribution of a pattern-based issue to its design-system source."""

    pattern: str
    name: str
    url: str


class Issue(_Contract):
    """A single diagnostic anchored to a location in the node tree."""

    id: str
    severity: Severity
    message: str
    node_id: str | None = None
    json_pointer: str | None = None
    viewport: str | None = None
    details: dict[str, Any] | None = None
    source: IssueSource | None = None
    suggestion: str | None = None
    expected: str | None = None
    found: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def count_by_severity(issues: list[Issue]) -> dict[str, int]:
    """Tally issues per severity; every severity key is always present."""
    counts = {severity: 0 for severity in SEVERITY_RANK}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


# ---------------------------------------------------------------------------
# Keyboard analysis output
# ---------------------------------------------------------------------------


class KeyboardOutput(_Contract):
    """Tab sequence, unreachable focusables, and keyboard flow issues."""

    sequence: list[str] = Field(default_factory=list)
    unreachable: list[str] = Field(default_factory=list)
    issues: list[Issue] = Field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == "critical")

    @property
    def warn_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == "warn")


__all__ = [
    "Issue",
    "IssueSource",
    "KeyboardOutput",
    "SEVERITY_RANK",
    "Severity",
    "count_by_severity",
]
