"""Keyboard flow analysis -- tab sequence, reachability, and flow rules.

Tab ordering:

* positive ``tabIndex`` values come first, ascending
* ``tabIndex`` 0 (or unset) follows, in traversal order
* negative ``tabIndex`` is never tab-reachable

Python's sort is stable, so equal keys keep traversal order.

A focusable node that does not make it into the sequence is
*unreachable* and reported as a ``critical`` issue.
"""

from __future__ import annotations

import logging

from luma.config import POINTER_ROOT
from luma.contracts import Issue, KeyboardOutput
from luma.focusable import get_tab_index, is_focusable
from luma.nodes import BaseNode, ButtonNode, FieldNode, FormNode
from luma.responsive import apply_responsive_overrides
from luma.traversal import walk

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tab sequence
# ---------------------------------------------------------------------------


def _tab_key(tab_index: int) -> tuple[int, int]:
    if tab_index > 0:
        return (0, tab_index)
    return (1, 0)


def build_tab_sequence(root: BaseNode) -> list[str]:
    """Return focusable node ids in keyboard tab order."""
    entries = [
        (get_tab_index(node), node.id)
        for node in (v.node for v in walk(root))
        if is_focusable(node)
    ]
    reachable = [e for e in entries if e[0] >= 0]
    reachable.sort(key=lambda e: _tab_key(e[0]))
    return [node_id for _, node_id in reachable]


def get_all_focusable_ids(root: BaseNode) -> list[str]:
    """Every visible focusable id in traversal order (negative tab index included)."""
    return [v.node.id for v in walk(root) if is_focusable(v.node)]


# ---------------------------------------------------------------------------
# Flow rules
# ---------------------------------------------------------------------------


def _is_cancel_like(button: ButtonNode) -> bool:
    text = (button.text or "").lower()
    return button.role_hint == "secondary" or "cancel" in text or "back" in text


def check_cancel_before_primary(form: FormNode, pointer: str = POINTER_ROOT) -> Issue | None:
    """Warn when a cancel/back action precedes the primary action."""
    primary_index = -1
    cancel_index = -1
    for i, action in enumerate(form.actions):
        if action.role_hint == "primary":
            primary_index = i
        if _is_cancel_like(action):
            cancel_index = i

    if primary_index >= 0 and 0 <= cancel_index < primary_index:
        return Issue(
            id="cancel-before-primary",
            severity="warn",
            message=f"Cancel/back button appears before primary button in Form {form.id}",
            node_id=form.id,
            json_pointer=pointer,
            suggestion="Place primary action button before cancel/back button",
            details={
                "primaryIndex": primary_index,
                "cancelIndex": cancel_index,
            },
        )
    return None


def check_field_after_actions(form: FormNode, pointer: str = POINTER_ROOT) -> Issue | None:
    """Error when a Field is traversed after the form's first action."""
    action_ids = {a.id for a in form.actions}
    last_field: tuple[int, FieldNode, str] | None = None
    first_action = -1

    for i, visit in enumerate(walk(form, base_pointer=pointer)):
        if isinstance(visit.node, FieldNode):
            last_field = (i, visit.node, visit.pointer)
        if visit.node.id in action_ids and first_action == -1:
            first_action = i

    if last_field is not None and first_action >= 0 and last_field[0] > first_action:
        _, field, field_pointer = last_field
        return Issue(
            id="field-after-actions",
            severity="error",
            message=f'Field "{field.label}" appears after action buttons in Form {form.id}',
            node_id=field.id,
            json_pointer=field_pointer,
            suggestion="Move all fields before action buttons in Forms",
        )
    return None


def validate_flow_rules(root: BaseNode, *, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    """Run every keyboard flow rule against each visible Form."""
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        if not isinstance(visit.node, FormNode):
            continue
        for check in (check_cancel_before_primary, check_field_after_actions):
            issue = check(visit.node, visit.pointer)
            if issue is not None:
                issues.append(issue)
    return issues


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


def analyze_keyboard(
    root: BaseNode,
    viewport_width: int | None = None,
    *,
    base_pointer: str = POINTER_ROOT,
) -> KeyboardOutput:
    """Build the tab sequence, find unreachable focusables, run flow rules.

    When *viewport_width* is given, responsive overrides for that width
    are resolved first (on a copy -- *root* is untouched).
    """
    if viewport_width is not None:
        root = apply_responsive_overrides(root, viewport_width)

    sequence = build_tab_sequence(root)
    in_sequence = set(sequence)

    issues: list[Issue] = []
    unreachable: list[str] = []
    for visit in walk(root, base_pointer=base_pointer):
        node = visit.node
        if not is_focusable(node) or node.id in in_sequence:
            continue
        unreachable.append(node.id)
        issues.append(
            Issue(
                id=f"unreachable-{node.id}",
                severity="critical",
                message=f"Focusable node {node.id} is unreachable in tab sequence",
                node_id=node.id,
                json_pointer=visit.pointer,
                suggestion="Check tabIndex values and node visibility",
                found=get_tab_index(node),
                expected="tabIndex >= 0",
            )
        )

    issues.extend(validate_flow_rules(root, base_pointer=base_pointer))

    logger.debug(
        "Keyboard analysis: %d in sequence, %d unreachable, %d issue(s)",
        len(sequence), len(unreachable), len(issues),
    )
    return KeyboardOutput(sequence=sequence, unreachable=unreachable, issues=issues)


__all__ = [
    "analyze_keyboard",
    "build_tab_sequence",
    "check_cancel_before_primary",
    "check_field_after_actions",
    "get_all_focusable_ids",
    "validate_flow_rules",
]
