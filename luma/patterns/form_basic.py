"""Form.Basic -- GOV.UK Design System question pages.

MUST:
  field-has-label       every Field.label is non-empty
  actions-exist         every Form has at least one action
  actions-after-fields  no Field is traversed after a Form's first action
  has-error-state       a Form with any Field.errorText lists the "error" state

SHOULD:
  help-text             short or technical labels carry helpText
"""

from __future__ import annotations

from luma.config import POINTER_ROOT
from luma.contracts import Issue, IssueSource
from luma.nodes import BaseNode, FieldNode, FormNode
from luma.patterns.types import Pattern, PatternRule
from luma.traversal import walk

_NAME = "Form.Basic"
_SOURCE_NAME = "GOV.UK Design System"
_TEXT_INPUT_URL = "https://design-system.service.gov.uk/components/text-input/"
_QUESTION_PAGES_URL = "https://design-system.service.gov.uk/patterns/question-pages/"
_ERROR_MESSAGE_URL = "https://design-system.service.gov.uk/components/error-message/"

_TECHNICAL_TERMS = ("id", "uuid", "api", "url", "uri", "ssn", "ein")


def _source(url: str) -> IssueSource:
    return IssueSource(pattern=_NAME, name=_SOURCE_NAME, url=url)


# ---------------------------------------------------------------------------
# MUST
# ---------------------------------------------------------------------------


def _check_field_has_label(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        node = visit.node
        if isinstance(node, FieldNode) and not node.label.strip():
            issues.append(Issue(
                id="field-has-label",
                severity="error",
                message=f'Field "{node.id}" has empty or missing label',
                node_id=node.id,
                json_pointer=visit.pointer,
                source=_source(_TEXT_INPUT_URL),
                expected="non-empty label",
                found=node.label,
            ))
    return issues


def _check_actions_exist(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        node = visit.node
        if isinstance(node, FormNode) and not node.actions:
            issues.append(Issue(
                id="actions-exist",
                severity="error",
                message=f'Form "{node.id}" has no action buttons',
                node_id=node.id,
                json_pointer=visit.pointer,
                source=_source(_QUESTION_PAGES_URL),
                expected="actions.length >= 1",
                found=0,
            ))
    return issues


def _check_actions_after_fields(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        form = visit.node
        if not isinstance(form, FormNode):
            continue
        action_ids = {a.id for a in form.actions}
        last_field = -1
        first_action = -1
        for i, inner in enumerate(walk(form)):
            if isinstance(inner.node, FieldNode):
                last_field = i
            if inner.node.id in action_ids and first_action == -1:
                first_action = i
        if first_action >= 0 and last_field > first_action:
            issues.append(Issue(
                id="actions-after-fields",
                severity="error",
                message=f'Form "{form.id}" has fields appearing after action buttons',
                node_id=form.id,
                json_pointer=visit.pointer,
                source=_source(_QUESTION_PAGES_URL),
            ))
    return issues


def _check_has_error_state(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        form = visit.node
        if not isinstance(form, FormNode):
            continue
        has_error = any(f.error_text and f.error_text.strip() for f in form.fields)
        if has_error and "error" not in form.states:
            issues.append(Issue(
                id="has-error-state",
                severity="error",
                message=(
                    f'Form "{form.id}" has fields with errorText but states '
                    'does not include "error"'
                ),
                node_id=form.id,
                json_pointer=visit.pointer,
                source=_source(_ERROR_MESSAGE_URL),
                expected='states includes "error"',
                found=list(form.states),
            ))
    return issues


# ---------------------------------------------------------------------------
# SHOULD
# ---------------------------------------------------------------------------


def _check_help_text(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        field = visit.node
        if not isinstance(field, FieldNode):
            continue
        label = field.label.lower()
        is_short = len(field.label) <= 5
        has_technical_term = any(term in label for term in _TECHNICAL_TERMS)
        if (is_short or has_technical_term) and not field.help_text:
            issues.append(Issue(
                id="help-text",
                severity="warn",
                message=(
                    f'Field "{field.id}" with label "{field.label}" should have '
                    "helpText for clarity"
                ),
                node_id=field.id,
                json_pointer=visit.pointer,
                source=_source(_TEXT_INPUT_URL),
                suggestion="Add helpText explaining what to enter",
            ))
    return issues


FORM_BASIC = Pattern(
    name=_NAME,
    source=_source(_QUESTION_PAGES_URL),
    must=(
        PatternRule("field-has-label", "must", "Every Field.label must be non-empty", _check_field_has_label),
        PatternRule("actions-exist", "must", "Form.actions.length must be >= 1", _check_actions_exist),
        PatternRule(
            "actions-after-fields", "must",
            "Actions must appear after all fields in the same Form",
            _check_actions_after_fields,
        ),
        PatternRule(
            "has-error-state", "must",
            'If any Field.errorText exists, Form.states must include "error"',
            _check_has_error_state,
        ),
    ),
    should=(
        PatternRule("help-text", "should", "Provide helpText for ambiguous labels", _check_help_text),
    ),
    aliases=("form",),
)
