"""Pattern validator -- executes pattern rules and tallies the results.

Every MUST rule runs against the full tree, then every SHOULD rule, and
issues accumulate in rule-declaration order.  A rule that returns any
issue counts as exactly one failure, however many issues it emitted.

Rules are isolated: a rule that raises is logged, counted as a failure
for its level, and reported as a ``rule-execution-error`` issue, so the
remaining rules still run and no earlier issue is lost.

Pointers in rule issues are rooted at ``base_pointer``, the document
location of *root* (``/screen/root`` unless the caller says otherwise).
"""

from __future__ import annotations

import logging

from luma.config import POINTER_ROOT
from luma.contracts import Issue
from luma.nodes import BaseNode
from luma.patterns.types import FlowOutput, Pattern, PatternResult, PatternRule

logger = logging.getLogger(__name__)


def run_rule(
    pattern: Pattern, rule: PatternRule, root: BaseNode, base_pointer: str = POINTER_ROOT,
) -> list[Issue]:
    """Call ``rule.check`` and convert an exception into a critical issue."""
    try:
        return list(rule.check(root, base_pointer=base_pointer))
    except Exception as exc:
        logger.warning(
            "Rule %s/%s raised %s: %s", pattern.name, rule.id, type(exc).__name__, exc,
        )
        return [
            Issue(
                id="rule-execution-error",
                severity="critical",
                message=f"Rule '{rule.id}' of pattern {pattern.name} failed to run: {exc}",
                node_id=root.id,
                json_pointer=base_pointer,
                source=pattern.source,
                details={
                    "rule": rule.id,
                    "level": rule.level,
                    "exception": type(exc).__name__,
                },
            )
        ]


def validate_pattern(
    pattern: Pattern, root: BaseNode, *, base_pointer: str = POINTER_ROOT,
) -> PatternResult:
    """Validate *root* against a single pattern."""
    issues: list[Issue] = []
    tally = {"must": [0, 0], "should": [0, 0]}  # level -> [passed, failed]

    for level, rules in (("must", pattern.must), ("should", pattern.should)):
        for rule in rules:
            rule_issues = run_rule(pattern, rule, root, base_pointer)
            if rule_issues:
                tally[level][1] += 1
                issues.extend(rule_issues)
            else:
                tally[level][0] += 1

    return PatternResult(
        pattern=pattern.name,
        source=pattern.source,
        must_passed=tally["must"][0],
        must_failed=tally["must"][1],
        should_passed=tally["should"][0],
        should_failed=tally["should"][1],
        issues=issues,
    )


def validate_patterns(
    patterns: list[Pattern], root: BaseNode, *, base_pointer: str = POINTER_ROOT,
) -> FlowOutput:
    """Validate *root* against each pattern independently."""
    results = [validate_pattern(p, root, base_pointer=base_pointer) for p in patterns]
    has_must_failures = any(r.must_failed > 0 for r in results)
    total_issues = sum(len(r.issues) for r in results)

    logger.debug(
        "Validated %d pattern(s): %d issue(s), MUST failures=%s",
        len(results), total_issues, has_must_failures,
    )
    return FlowOutput(
        patterns=results,
        has_must_failures=has_must_failures,
        total_issues=total_issues,
    )


__all__ = [
    "run_rule",
    "validate_pattern",
    "validate_patterns",
]
