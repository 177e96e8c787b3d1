"""UX pattern library types.

A ``Pattern`` is a named bundle of MUST (blocking) and SHOULD (advisory)
rules attributed to a design-system source.  A ``PatternRule`` is a value
-- an id, a level, a description and a pure
``check(root, base_pointer) -> [Issue]`` function -- so rule sets can be
composed, filtered, and tested in isolation.  An empty result means the
rule passed.  ``base_pointer`` is the JSON pointer of *root* in the
surrounding document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from luma.contracts import Issue, IssueSource

RuleLevel = Literal["must", "should"]

# check(root, base_pointer=...) -> issues; base_pointer roots every JSON pointer.
RuleCheck = Callable[..., list[Issue]]


@dataclass(frozen=True)
class PatternRule:
    """A single MUST/SHOULD rule."""

    id: str
    level: RuleLevel
    description: str
    check: RuleCheck = field(compare=False)

    def describe(self) -> str:
        return f"[{self.level.upper()}] {self.id}: {self.description}"


@dataclass(frozen=True)
class Pattern:
    """A named rule bundle with source attribution."""

    name: str
    source: IssueSource
    must: tuple[PatternRule, ...] = ()
    should: tuple[PatternRule, ...] = ()
    aliases: tuple[str, ...] = ()

    @property
    def rules(self) -> tuple[PatternRule, ...]:
        """MUST rules followed by SHOULD rules, in declaration order."""
        return self.must + self.should

    def rule(self, rule_id: str) -> PatternRule:
        """Look up one rule by id (``KeyError`` if absent)."""
        for r in self.rules:
            if r.id == rule_id:
                return r
        raise KeyError(f"Rule {rule_id!r} not defined in pattern {self.name!r}")

    def filtered(self, predicate: Callable[[PatternRule], bool]) -> Pattern:
        """Return a copy keeping only the rules matching *predicate*."""
        return Pattern(
            name=self.name,
            source=self.source,
            must=tuple(r for r in self.must if predicate(r)),
            should=tuple(r for r in self.should if predicate(r)),
            aliases=self.aliases,
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class _Result(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PatternResult(_Result):
    """Per-pattern tally plus every issue its rules produced.

    Invariant: ``must_passed + must_failed == len(pattern.must)`` and
    likewise for SHOULD.
    """

    pattern: str
    source: IssueSource
    must_passed: int = 0
    must_failed: int = 0
    should_passed: int = 0
    should_failed: int = 0
    issues: list[Issue] = Field(default_factory=list)


class FlowOutput(_Result):
    """Results of validating a set of patterns against one tree."""

    patterns: list[PatternResult] = Field(default_factory=list)
    has_must_failures: bool = False
    total_issues: int = 0

    @property
    def must_failed(self) -> int:
        return sum(r.must_failed for r in self.patterns)

    @property
    def should_failed(self) -> int:
        return sum(r.should_failed for r in self.patterns)


__all__ = [
    "FlowOutput",
    "Pattern",
    "PatternResult",
    "PatternRule",
    "RuleCheck",
    "RuleLevel",
]
