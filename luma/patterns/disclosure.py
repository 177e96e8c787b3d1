"""Progressive disclosure helpers -- control lookup, labels, affordances.

Control resolution for a collapsible section:

1. explicit ``controlsId`` -- a visible Button with that id inside the
   section, among its siblings, or inside a sibling's subtree
2. otherwise inference, nearest first: preceding siblings, following
   siblings, then the section's first child

An inferred control is a visible Button whose text matches
``show|hide|expand|collapse|advanced|details|more`` or whose
affordances include ``chevron`` / ``details``.
"""

from __future__ import annotations

import re

from luma.nodes import BaseNode, ButtonNode, FieldNode, TextNode
from luma.traversal import get_children, traverse

_CONTROL_KEYWORDS = re.compile(r"\b(show|hide|expand|collapse|advanced|details|more)\b", re.IGNORECASE)
_CONTROL_AFFORDANCES = ("chevron", "details")


def is_collapsible(node: BaseNode) -> bool:
    behaviors = node.behaviors
    return bool(behaviors and behaviors.disclosure and behaviors.disclosure.collapsible)


def default_state(node: BaseNode) -> str:
    """Declared default state; a collapsible without one starts collapsed."""
    disclosure = node.behaviors.disclosure if node.behaviors else None
    if disclosure is None or disclosure.default_state is None:
        return "collapsed"
    return disclosure.default_state


def _is_control_candidate(node: BaseNode) -> bool:
    if not isinstance(node, ButtonNode) or node.visible is False:
        return False
    if node.text and _CONTROL_KEYWORDS.search(node.text):
        return True
    return any(a in _CONTROL_AFFORDANCES for a in node.affordances)


def _visible_button(node: BaseNode, control_id: str) -> ButtonNode | None:
    if isinstance(node, ButtonNode) and node.id == control_id and node.visible is not False:
        return node
    return None


def infer_control(node: BaseNode, siblings: list[BaseNode] | None) -> ButtonNode | None:
    """Find a control by proximity when no ``controlsId`` is declared."""
    if not siblings:
        return None
    position = next((i for i, s in enumerate(siblings) if s.id == node.id), -1)
    if position == -1:
        return None

    for i in range(position - 1, -1, -1):
        if _is_control_candidate(siblings[i]):
            return siblings[i]  # type: ignore[return-value]
    for i in range(position + 1, len(siblings)):
        if _is_control_candidate(siblings[i]):
            return siblings[i]  # type: ignore[return-value]

    children = get_children(node)
    if children and _is_control_candidate(children[0]):
        return children[0]  # type: ignore[return-value]
    return None


def find_control(node: BaseNode, siblings: list[BaseNode] | None) -> ButtonNode | None:
    """Resolve the control Button associated with a collapsible section."""
    disclosure = node.behaviors.disclosure if node.behaviors else None
    controls_id = disclosure.controls_id if disclosure else None
    if not controls_id:
        return infer_control(node, siblings)

    for candidate in traverse(node):
        found = _visible_button(candidate, controls_id)
        if found is not None:
            return found
    for sibling in siblings or []:
        for candidate in traverse(sibling):
            found = _visible_button(candidate, controls_id)
            if found is not None:
                return found
    return None


def has_primary_hidden(node: BaseNode) -> bool:
    """True if a collapsed-by-default section contains a primary Button."""
    if not is_collapsible(node) or default_state(node) != "collapsed":
        return False
    return any(
        isinstance(d, ButtonNode) and d.role_hint == "primary" for d in traverse(node)
    )


def _has_text(node: BaseNode) -> bool:
    return isinstance(node, TextNode) and node.visible is not False and bool(node.text.strip())


def has_label(
    node: BaseNode,
    siblings: list[BaseNode] | None,
    control: ButtonNode | None,
) -> bool:
    """A section is labelled by its control's text, a preceding Text, or a child Text."""
    if control is not None and control.text and len(control.text.strip()) >= 2:
        return True
    if siblings:
        position = next((i for i, s in enumerate(siblings) if s.id == node.id), -1)
        if position > 0 and _has_text(siblings[position - 1]):
            return True
    return any(_has_text(child) for child in get_children(node))


def affordance_tokens(node: BaseNode) -> set[str]:
    """Normalised (lower-cased, stripped, non-empty) affordance tokens."""
    return {a.strip().lower() for a in node.affordances if a.strip()}


def sibling_distance(first_id: str, second_id: str, siblings: list[BaseNode] | None) -> int:
    """Index distance between two siblings, or -1 if either is absent."""
    if not siblings:
        return -1
    ids = [s.id for s in siblings]
    if first_id not in ids or second_id not in ids:
        return -1
    return abs(ids.index(first_id) - ids.index(second_id))


def first_required_field(root: BaseNode) -> FieldNode | None:
    for node in traverse(root):
        if isinstance(node, FieldNode) and node.required is True:
            return node
    return None


# Deterministic fix-it text per issue id
SUGGESTIONS: dict[str, str] = {
    "disclosure-no-control": (
        'Add a control Button near the section and reference it: '
        '"behaviors": { "disclosure": { "collapsible": true, '
        '"controlsId": "toggle-{id}", "defaultState": "collapsed" } } '
        '...and define the control: { "id": "toggle-{id}", "type": "Button", "text": "Show details" }'
    ),
    "disclosure-hides-primary": (
        "Move the primary action outside the collapsible section OR set: "
        '"behaviors": { "disclosure": { "defaultState": "expanded" } }'
    ),
    "disclosure-missing-label": (
        'Add a sibling Text label before the section: '
        '{ "type":"Text", "id":"{id}-label", "text":"Section title" }'
    ),
    "disclosure-control-far": (
        "Place the control as a preceding sibling or within a header row next to the section."
    ),
    "disclosure-inconsistent-affordance": (
        'Align affordances across collapsible sections, e.g. "affordances":["chevron"].'
    ),
    "disclosure-early-section": (
        "Move collapsible sections after required fields and before the action row."
    ),
}


def get_suggestion(issue_id: str, node_id: str | None = None) -> str | None:
    template = SUGGESTIONS.get(issue_id)
    if template is None:
        return None
    default = "section" if issue_id == "disclosure-missing-label" else "advanced"
    return template.replace("{id}", node_id or default)
