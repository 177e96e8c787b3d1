"""Guided.Flow -- NN/g wizard design.

Steps are nodes carrying ``behaviors.guidedFlow.role == "step"`` with a
1-based ``stepIndex``.  Steps group into scopes: each wizard container
(``role == "wizard"``) owns the steps in its subtree, and steps outside
every container form one global scope.

MUST:
  wizard-steps-missing        step indices are unique and contiguous 1..N
  wizard-next-missing         every non-final step has a Next action
  wizard-finish-missing       the final step has a Finish action
  wizard-back-illegal         the first step has no Back action
  wizard-back-missing         every intermediate step has a Back action
  wizard-field-after-actions  no Field follows the actions row of a step
  wizard-multiple-primary     at most one primary action per step

SHOULD:
  wizard-progress-missing     a wizard with hasProgress shows a progress indicator
  wizard-actions-order        Back precedes Next/Finish
  wizard-step-title-missing   each step opens with a title Text
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from luma.config import POINTER_ROOT
from luma.contracts import Issue, IssueSource
from luma.nodes import BaseNode, BoxNode, ButtonNode, FieldNode, FormNode, GridNode, StackNode, TextNode
from luma.patterns.types import Pattern, PatternRule
from luma.traversal import is_descendant, pointer_index, traverse

_NAME = "Guided.Flow"
_SOURCE = IssueSource(
    pattern=_NAME,
    name="Nielsen Norman Group -- Wizards",
    url="https://www.nngroup.com/articles/wizard-design/",
)

ButtonKind = Literal["back", "next", "finish", "other"]

_BACK = re.compile(r"^(back|previous)$")
_NEXT = re.compile(r"^(next|continue)$")
_FINISH = re.compile(r"^(finish|submit|done)$")
_PROGRESS_TEXT = re.compile(r"step\s+\d+\s+of\s+\d+", re.IGNORECASE)
_CONTAINER_KINDS = (StackNode, GridNode, BoxNode, FormNode)

# Number of nodes from the top of a wizard searched for a progress indicator
_PROGRESS_WINDOW = 6

SUGGESTIONS: dict[str, str] = {
    "wizard-steps-missing": (
        "Define contiguous stepIndex values 1..N. Example: "
        '{"behaviors":{"guidedFlow":{"role":"step","stepIndex":2,"totalSteps":4}}}'
    ),
    "wizard-next-missing": (
        'Add a Next button: {"id":"next-<i>","type":"Button","text":"Next","roleHint":"primary"}'
    ),
    "wizard-back-missing": 'Add a Back button before Next: {"id":"back-<i>","type":"Button","text":"Back"}',
    "wizard-back-illegal": "Remove Back from the first step or move it to step 2.",
    "wizard-finish-missing": (
        'Add a Finish action: {"id":"finish","type":"Button","text":"Finish","roleHint":"primary"}'
    ),
    "wizard-field-after-actions": (
        "Ensure fields appear before the actions row. Move the actions Stack below all Field nodes."
    ),
    "wizard-multiple-primary": "Keep only one primary action per step; remove roleHint or demote extras.",
    "wizard-progress-missing": (
        'Add a visible progress indicator: {"id":"progress-1","type":"Text","text":"Step 1 of 4"} '
        "and reference it via behaviors.guidedFlow.progressNodeId."
    ),
    "wizard-actions-order": "Order actions as Back then Next/Finish inside the actions row.",
    "wizard-step-title-missing": (
        'Add a heading Text near the top of each step: '
        '{"id":"step-<i>-title","type":"Text","text":"Step <i> Details"}'
    ),
}


# ---------------------------------------------------------------------------
# Scope resolution
# ---------------------------------------------------------------------------


@dataclass
class GuidedFlowStep:
    """One resolved wizard step and the action buttons found in it."""

    node: BaseNode
    index: int
    total: int
    actions_row: BaseNode | None = None
    buttons: list[ButtonNode] = field(default_factory=list)


@dataclass
class GuidedFlowScope:
    """A wizard container (or the global scope) and its ordered steps."""

    scope_node: BaseNode | None
    steps: list[GuidedFlowStep]
    total_steps: int

    @property
    def indices(self) -> list[int]:
        return [s.index for s in self.steps]


def _role(node: BaseNode) -> str | None:
    flow = node.behaviors.guided_flow if node.behaviors else None
    return flow.role if flow else None


def has_guided_flow_hints(root: BaseNode) -> bool:
    return any(_role(n) is not None for n in traverse(root, visible_only=False))


def classify_button(button: ButtonNode) -> ButtonKind:
    """Classify a wizard action by its exact (case-insensitive) label."""
    text = (button.text or "").strip().lower()
    if _BACK.match(text):
        return "back"
    if _NEXT.match(text):
        return "next"
    if _FINISH.match(text):
        return "finish"
    return "other"


def detect_actions(step: BaseNode) -> tuple[BaseNode | None, list[ButtonNode]]:
    """Locate the actions row of a step.

    In priority order: the step's own ``Form.actions``; the last horizontal
    Stack whose children are all Buttons; the last Stack with at least one
    Button and no container children.
    """
    if isinstance(step, FormNode):
        return step, list(step.actions)

    stacks = [n for n in traverse(step, visible_only=False) if isinstance(n, StackNode) and n.children]
    button_rows = [
        s for s in stacks
        if s.direction == "horizontal" and all(isinstance(c, ButtonNode) for c in s.children)
    ]
    if button_rows:
        chosen = button_rows[-1]
        return chosen, list(chosen.children)  # type: ignore[arg-type]

    leaf_rows = [
        s for s in stacks
        if any(isinstance(c, ButtonNode) for c in s.children)
        and not any(isinstance(c, _CONTAINER_KINDS) for c in s.children)
    ]
    if leaf_rows:
        chosen = leaf_rows[-1]
        return chosen, [c for c in chosen.children if isinstance(c, ButtonNode)]
    return None, []


def _resolve_scope(scope_node: BaseNode | None, step_nodes: list[BaseNode]) -> GuidedFlowScope:
    steps: list[GuidedFlowStep] = []
    for node in step_nodes:
        if node.visible is False:
            continue
        flow = node.behaviors.guided_flow
        if not flow.step_index or flow.step_index < 1:
            continue
        actions_row, buttons = detect_actions(node)
        steps.append(GuidedFlowStep(
            node=node,
            index=flow.step_index,
            total=flow.total_steps or 0,
            actions_row=actions_row,
            buttons=buttons,
        ))

    # Container total wins, then the first step declaring one, then the max index
    container_flow = scope_node.behaviors.guided_flow if scope_node is not None else None
    explicit = [container_flow.total_steps if container_flow else None]
    explicit.extend(s.total for s in steps)
    totals = [t for t in explicit if t and t > 0]
    total_steps = totals[0] if totals else max((s.index for s in steps), default=0)

    for step in steps:
        if step.total == 0:
            step.total = total_steps
    steps.sort(key=lambda s: s.index)
    return GuidedFlowScope(scope_node=scope_node, steps=steps, total_steps=total_steps)


def resolve_scopes(root: BaseNode) -> list[GuidedFlowScope]:
    """Resolve every wizard scope in *root*.

    A step belongs to the first wizard container (in traversal order)
    whose subtree contains it.  The global scope is returned last, and
    only when there is no container or some step sits outside them all.
    """
    nodes = traverse(root, visible_only=False)
    containers = [n for n in nodes if _role(n) == "wizard"]
    owned: dict[int, list[BaseNode]] = {id(c): [] for c in containers}
    global_steps: list[BaseNode] = []
    for node in nodes:
        if _role(node) != "step":
            continue
        owner = next((c for c in containers if is_descendant(c, node)), None)
        if owner is None:
            global_steps.append(node)
        else:
            owned[id(owner)].append(node)

    scopes = [_resolve_scope(c, owned[id(c)]) for c in containers]
    if not containers or global_steps:
        scopes.append(_resolve_scope(None, global_steps))
    return scopes


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _issue(
    rule_id: str,
    node: BaseNode | None,
    pointers: dict[str, str],
    message: str,
    details: dict[str, Any],
    severity: Literal["error", "warn"] = "error",
) -> Issue:
    return Issue(
        id=rule_id,
        severity=severity,
        message=message,
        node_id=node.id if node is not None else None,
        json_pointer=pointers.get(node.id) if node is not None else None,
        source=_SOURCE,
        details=details,
        suggestion=SUGGESTIONS[rule_id],
    )


def _per_step(
    check: Callable[[GuidedFlowScope, GuidedFlowStep, dict[str, str]], Issue | None],
) -> Callable[[BaseNode], list[Issue]]:
    """Lift a per-step check into a whole-tree rule."""

    def rule(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
        pointers = pointer_index(root, base_pointer=base_pointer)
        issues: list[Issue] = []
        for scope in resolve_scopes(root):
            for step in scope.steps:
                issue = check(scope, step, pointers)
                if issue is not None:
                    issues.append(issue)
        return issues

    return rule


def _check_steps_missing(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    pointers = pointer_index(root, base_pointer=base_pointer)
    issues: list[Issue] = []
    for scope in resolve_scopes(root):
        if not scope.steps:
            continue
        expected = list(range(1, scope.total_steps + 1))
        indices = scope.indices
        contiguous = len(indices) == len(expected) and all(v in indices for v in expected)
        unique = len(set(indices)) == len(indices)
        if contiguous and unique:
            continue
        anchor = scope.scope_node or scope.steps[0].node
        issues.append(_issue(
            "wizard-steps-missing", anchor, pointers,
            "Step indices must be unique & contiguous 1..N",
            {
                "expectedRange": expected,
                "foundIndices": indices,
                "totalSteps": scope.total_steps,
                "scopeNodeId": scope.scope_node.id if scope.scope_node else None,
            },
        ))
    return issues


def _kinds(step: GuidedFlowStep) -> list[ButtonKind]:
    return [classify_button(b) for b in step.buttons]


def _is_last(scope: GuidedFlowScope, step: GuidedFlowStep) -> bool:
    return scope.total_steps > 0 and step.index == scope.total_steps


def _step_details(scope: GuidedFlowScope, step: GuidedFlowStep) -> dict[str, Any]:
    return {
        "stepIndex": step.index,
        "totalSteps": scope.total_steps,
        "actionsRowNodeId": step.actions_row.id if step.actions_row else None,
    }


@_per_step
def _check_next_missing(scope, step, pointers):
    if _is_last(scope, step) or "next" in _kinds(step):
        return None
    return _issue(
        "wizard-next-missing", step.node, pointers,
        f"Step {step.index} missing Next action", _step_details(scope, step),
    )


@_per_step
def _check_finish_missing(scope, step, pointers):
    if not _is_last(scope, step) or "finish" in _kinds(step):
        return None
    return _issue(
        "wizard-finish-missing", step.node, pointers,
        f"Last step {step.index} missing Finish action", _step_details(scope, step),
    )


@_per_step
def _check_back_illegal(scope, step, pointers):
    if step.index != 1 or "back" not in _kinds(step):
        return None
    return _issue(
        "wizard-back-illegal", step.node, pointers,
        "Back button not allowed on first step",
        {
            "stepIndex": step.index,
            "actionsRowNodeId": step.actions_row.id if step.actions_row else None,
        },
    )


@_per_step
def _check_back_missing(scope, step, pointers):
    intermediate = 1 < step.index < scope.total_steps
    if not intermediate or "back" in _kinds(step):
        return None
    return _issue(
        "wizard-back-missing", step.node, pointers,
        f"Step {step.index} missing Back action", _step_details(scope, step),
    )


@_per_step
def _check_field_after_actions(scope, step, pointers):
    # A Form step is its own actions row: its fields always precede its actions
    if step.actions_row is None or step.actions_row is step.node:
        return None
    subtree = traverse(step.node, visible_only=False)
    row_position = next(i for i, n in enumerate(subtree) if n is step.actions_row)
    misplaced = [
        n.id for i, n in enumerate(subtree)
        if isinstance(n, FieldNode) and i > row_position
    ]
    if not misplaced:
        return None
    return _issue(
        "wizard-field-after-actions", step.node, pointers,
        f"Fields appear after actions row in step {step.index}",
        {
            "stepIndex": step.index,
            "actionsRowId": step.actions_row.id,
            "misplacedFieldIds": misplaced,
        },
    )


@_per_step
def _check_multiple_primary(scope, step, pointers):
    primary = [b.id for b in step.buttons if b.role_hint == "primary"]
    if len(primary) <= 1:
        return None
    return _issue(
        "wizard-multiple-primary", step.node, pointers,
        f"Multiple primary actions in step {step.index}",
        {"stepIndex": step.index, "primaryButtonIds": primary},
    )


def _find_progress(container: BaseNode, nodes: list[BaseNode]) -> BaseNode | None:
    flow = container.behaviors.guided_flow
    if flow.progress_node_id:
        return next(
            (n for n in nodes if n.id == flow.progress_node_id and n.visible is not False),
            None,
        )
    top = traverse(container, visible_only=False)[:_PROGRESS_WINDOW]
    for node in top:
        if isinstance(node, TextNode) and _PROGRESS_TEXT.search(node.text):
            return node
    return next((n for n in top if "progress-indicator" in n.affordances), None)


def _check_progress_missing(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    pointers = pointer_index(root, base_pointer=base_pointer)
    nodes = traverse(root, visible_only=False)
    issues: list[Issue] = []
    for scope in resolve_scopes(root):
        container = scope.scope_node
        if container is None or not container.behaviors.guided_flow.has_progress:
            continue
        if _find_progress(container, nodes) is not None:
            continue
        issues.append(_issue(
            "wizard-progress-missing", container, pointers,
            "Progress indicator missing for wizard",
            {"scopeNodeId": container.id, "hasProgress": True},
            severity="warn",
        ))
    return issues


@_per_step
def _check_actions_order(scope, step, pointers):
    order = _kinds(step)
    back = order.index("back") if "back" in order else -1
    forward = order.index("finish") if "finish" in order else (
        order.index("next") if "next" in order else -1
    )
    if back < 0 or forward < 0 or back < forward:
        return None
    return _issue(
        "wizard-actions-order", step.node, pointers,
        f"Back action appears after Next/Finish in step {step.index}",
        {"stepIndex": step.index, "order": order},
        severity="warn",
    )


@_per_step
def _check_step_title_missing(scope, step, pointers):
    if isinstance(step.node, FormNode) and step.node.title:
        return None
    for node in traverse(step.node, visible_only=False):
        if node is step.actions_row and node is not step.node:
            break
        if isinstance(node, TextNode):
            return None
    return _issue(
        "wizard-step-title-missing", step.node, pointers,
        f"Step {step.index} missing title/heading",
        {"stepIndex": step.index},
        severity="warn",
    )


GUIDED_FLOW = Pattern(
    name=_NAME,
    source=_SOURCE,
    must=(
        PatternRule("wizard-steps-missing", "must", "Steps must form contiguous 1..N sequence", _check_steps_missing),
        PatternRule("wizard-next-missing", "must", "Each non-final step must have a Next action", _check_next_missing),
        PatternRule(
            "wizard-finish-missing", "must",
            "Last step must provide a finish/submit action",
            _check_finish_missing,
        ),
        PatternRule("wizard-back-illegal", "must", "Back action must not appear on first step", _check_back_illegal),
        PatternRule("wizard-back-missing", "must", "Intermediate steps must include back action", _check_back_missing),
        PatternRule(
            "wizard-field-after-actions", "must",
            "Fields must appear before actions row in a step",
            _check_field_after_actions,
        ),
        PatternRule(
            "wizard-multiple-primary", "must",
            "Only one primary action per step",
            _check_multiple_primary,
        ),
    ),
    should=(
        PatternRule(
            "wizard-progress-missing", "should",
            "Progress indicator should exist when hasProgress=true",
            _check_progress_missing,
        ),
        PatternRule(
            "wizard-actions-order", "should",
            "Back should precede Next/Finish in action sequence",
            _check_actions_order,
        ),
        PatternRule(
            "wizard-step-title-missing", "should",
            "Each step should expose a visible title",
            _check_step_title_missing,
        ),
    ),
    aliases=("wizard", "guided-flow"),
)
