"""Progressive.Disclosure -- NN/g progressive disclosure.

MUST:
  disclosure-no-control               every collapsible has an associated control
  disclosure-hides-primary            no primary action hidden by a collapsed default
  disclosure-missing-label            every collapsible has a label or summary

SHOULD:
  disclosure-control-far              a sibling control sits next to its section
  disclosure-inconsistent-affordance  sibling collapsibles share an affordance token
  disclosure-early-section            collapsibles follow the first required field
"""

from __future__ import annotations

from luma.config import POINTER_ROOT
from luma.contracts import Issue, IssueSource
from luma.nodes import BaseNode
from luma.patterns.disclosure import (
    affordance_tokens,
    default_state,
    find_control,
    first_required_field,
    get_suggestion,
    has_label,
    has_primary_hidden,
    is_collapsible,
    sibling_distance,
)
from luma.patterns.types import Pattern, PatternRule
from luma.traversal import Visit, sibling_index, walk

_NAME = "Progressive.Disclosure"
_NNG = IssueSource(
    pattern=_NAME,
    name="Nielsen Norman Group -- Progressive Disclosure",
    url="https://www.nngroup.com/articles/progressive-disclosure/",
)
_GOVUK_DETAILS = IssueSource(
    pattern=_NAME,
    name="GOV.UK Design System -- Details",
    url="https://design-system.service.gov.uk/components/details/",
)
_USWDS_ACCORDION = IssueSource(
    pattern=_NAME,
    name="USWDS -- Accordion",
    url="https://designsystem.digital.gov/components/accordion/",
)


def _collapsibles(root: BaseNode, base_pointer: str) -> list[Visit]:
    return [v for v in walk(root, base_pointer=base_pointer) if is_collapsible(v.node)]


# ---------------------------------------------------------------------------
# MUST
# ---------------------------------------------------------------------------


def _check_no_control(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    siblings = sibling_index(root)
    issues: list[Issue] = []
    for visit in _collapsibles(root, base_pointer):
        node = visit.node
        if find_control(node, siblings.get(node.id)) is not None:
            continue
        issues.append(Issue(
            id="disclosure-no-control",
            severity="error",
            message=f'Collapsible section "{node.id}" has no associated control',
            node_id=node.id,
            json_pointer=visit.pointer,
            source=_NNG,
            suggestion=get_suggestion("disclosure-no-control", node.id),
            expected="controlsId referencing a Button or nearby Button with disclosure keywords",
            found=node.behaviors.disclosure.controls_id,
        ))
    return issues


def _check_hides_primary(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    return [
        Issue(
            id="disclosure-hides-primary",
            severity="error",
            message=f'Primary action is hidden by default within collapsed section "{v.node.id}"',
            node_id=v.node.id,
            json_pointer=v.pointer,
            source=_GOVUK_DETAILS,
            suggestion=get_suggestion("disclosure-hides-primary"),
            expected="Primary action outside collapsed section or defaultState expanded",
            found=f"defaultState: {default_state(v.node)}, primary inside section",
        )
        for v in _collapsibles(root, base_pointer)
        if has_primary_hidden(v.node)
    ]


def _check_missing_label(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    siblings = sibling_index(root)
    issues: list[Issue] = []
    for visit in _collapsibles(root, base_pointer):
        node = visit.node
        node_siblings = siblings.get(node.id)
        control = find_control(node, node_siblings)
        if has_label(node, node_siblings, control):
            continue
        issues.append(Issue(
            id="disclosure-missing-label",
            severity="error",
            message=f'Collapsible section "{node.id}" lacks a visible label or summary',
            node_id=node.id,
            json_pointer=visit.pointer,
            source=_USWDS_ACCORDION,
            suggestion=get_suggestion("disclosure-missing-label", node.id),
            expected="Sibling Text label, child Text summary, or control button with meaningful text",
        ))
    return issues


# ---------------------------------------------------------------------------
# SHOULD
# ---------------------------------------------------------------------------


def _check_control_far(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    siblings = sibling_index(root)
    issues: list[Issue] = []
    for visit in _collapsibles(root, base_pointer):
        node = visit.node
        node_siblings = siblings.get(node.id)
        control = find_control(node, node_siblings)
        if control is None:
            continue
        # Only a control that is itself a sibling has a measurable distance
        distance = sibling_distance(control.id, node.id, node_siblings)
        if distance <= 1:
            continue
        issues.append(Issue(
            id="disclosure-control-far",
            severity="warn",
            message=(
                f'Control "{control.id}" is not adjacent to collapsible section '
                f'"{node.id}" (distance: {distance} siblings)'
            ),
            node_id=node.id,
            json_pointer=visit.pointer,
            source=_NNG,
            suggestion=get_suggestion("disclosure-control-far"),
            details={"controlId": control.id},
            expected="Control adjacent to collapsible (distance <= 1)",
            found=distance,
        ))
    return issues


def _check_inconsistent_affordance(
    root: BaseNode, base_pointer: str = POINTER_ROOT,
) -> list[Issue]:
    siblings = sibling_index(root)
    # Group by the identity of the shared sibling list; the root is its own group
    groups: dict[int, list[Visit]] = {}
    for visit in _collapsibles(root, base_pointer):
        group = siblings.get(visit.node.id)
        groups.setdefault(id(group) if group is not None else 0, []).append(visit)

    issues: list[Issue] = []
    for visits in groups.values():
        if len(visits) < 2:
            continue
        token_sets = [affordance_tokens(v.node) for v in visits]
        non_empty = [s for s in token_sets if s]
        if len(non_empty) < 2:
            continue
        if set.intersection(*non_empty):
            continue
        described = "; ".join(
            f'"{v.node.id}": [{", ".join(sorted(tokens))}]'
            for v, tokens in zip(visits, token_sets)
        )
        first = visits[0]
        issues.append(Issue(
            id="disclosure-inconsistent-affordance",
            severity="warn",
            message=f"Multiple collapsibles use inconsistent affordances: {described}",
            node_id=first.node.id,
            json_pointer=first.pointer,
            source=_GOVUK_DETAILS,
            suggestion=get_suggestion("disclosure-inconsistent-affordance"),
            details={"collapsibleIds": [v.node.id for v in visits]},
            expected="Common affordance token across all collapsibles",
            found=described,
        ))
    return issues


def _check_early_section(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    required = first_required_field(root)
    if required is None:
        return []
    for visit in walk(root, base_pointer=base_pointer):
        if visit.node.id == required.id:
            return []
        if is_collapsible(visit.node):
            return [Issue(
                id="disclosure-early-section",
                severity="warn",
                message=(
                    f'Collapsible section "{visit.node.id}" appears before the first '
                    f'required field "{required.id}"'
                ),
                node_id=visit.node.id,
                json_pointer=visit.pointer,
                source=_USWDS_ACCORDION,
                suggestion=get_suggestion("disclosure-early-section"),
                details={"firstRequiredFieldId": required.id},
                expected="Collapsible after primary content (required fields)",
                found=visit.node.id,
            )]
    return []


PROGRESSIVE_DISCLOSURE = Pattern(
    name=_NAME,
    source=IssueSource(
        pattern=_NAME,
        name="Nielsen Norman Group",
        url="https://www.nngroup.com/articles/progressive-disclosure/",
    ),
    must=(
        PatternRule(
            "disclosure-no-control", "must",
            "Collapsible section must have an associated control",
            _check_no_control,
        ),
        PatternRule(
            "disclosure-hides-primary", "must",
            "Primary action must not be hidden by default in collapsed section",
            _check_hides_primary,
        ),
        PatternRule(
            "disclosure-missing-label", "must",
            "Collapsible section must have a visible label or summary",
            _check_missing_label,
        ),
    ),
    should=(
        PatternRule(
            "disclosure-control-far", "should",
            "Control should be adjacent to collapsible section",
            _check_control_far,
        ),
        PatternRule(
            "disclosure-inconsistent-affordance", "should",
            "Multiple collapsibles should use consistent affordances",
            _check_inconsistent_affordance,
        ),
        PatternRule(
            "disclosure-early-section", "should",
            "Collapsible content should follow primary content",
            _check_early_section,
        ),
    ),
    aliases=("disclosure", "progressive-disclosure"),
)
