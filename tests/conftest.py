"""Shared test fixtures -- reduces boilerplate across test modules.

Provides:
- ``set_test_config`` -- autouse fixture that pins analysis settings
- ``order_tree`` -- Stack{A, Box{B}, Form{fields:[C], actions:[D]}}
- ``login_form`` -- a Stack holding a conforming Form.Basic form
- ``scaffold`` -- a full ``Scaffold`` document wrapping ``login_form``
- ``wizard`` -- a conforming three-step Guided.Flow wizard
"""

import logging

import pytest

from luma.nodes import Scaffold, parse_node


# ---------------------------------------------------------------------------
# Environment patching
# ---------------------------------------------------------------------------

_SETTINGS_PATCHES: dict[str, object] = {
    "luma.config.settings.HIGH_CONFIDENCE_THRESHOLD": 80,
    "luma.config.settings.MEDIUM_CONFIDENCE_THRESHOLD": 50,
    "luma.config.settings.MIN_OVERALL_SCORE": 85,
    "luma.config.settings.POINTER_ROOT": "/screen/root",
    "luma.config.settings.LOG_LEVEL": "INFO",
}


@pytest.fixture(autouse=True)
def set_test_config(monkeypatch):
    """Pin every setting so ``LUMA_*`` variables in the shell cannot leak in."""
    for target, value in _SETTINGS_PATCHES.items():
        monkeypatch.setattr(target, value)
    yield
    logger = logging.getLogger("luma")
    for handler in list(logger.handlers):
        if getattr(handler, "_luma_handler", False):
            logger.removeHandler(handler)


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------


@pytest.fixture
def order_tree():
    return parse_node({
        "id": "stack",
        "type": "Stack",
        "children": [
            {"id": "A", "type": "Text", "text": "Intro"},
            {"id": "box", "type": "Box", "child": {"id": "B", "type": "Text", "text": "Boxed"}},
            {
                "id": "form",
                "type": "Form",
                "title": "Sign in",
                "fields": [{"id": "C", "type": "Field", "label": "Email address"}],
                "actions": [{"id": "D", "type": "Button", "text": "Submit", "roleHint": "primary"}],
            },
        ],
    })


def login_form_data() -> dict:
    return {
        "id": "root",
        "type": "Stack",
        "children": [
            {"id": "heading", "type": "Text", "text": "Sign in"},
            {
                "id": "login",
                "type": "Form",
                "title": "Sign in",
                "fields": [
                    {
                        "id": "email",
                        "type": "Field",
                        "label": "Email address",
                        "inputType": "email",
                        "required": True,
                    },
                    {
                        "id": "password",
                        "type": "Field",
                        "label": "Password",
                        "inputType": "password",
                        "required": True,
                    },
                ],
                "actions": [
                    {"id": "submit", "type": "Button", "text": "Sign in", "roleHint": "primary"},
                    {"id": "cancel", "type": "Button", "text": "Cancel", "roleHint": "secondary"},
                ],
                "states": ["default", "error"],
            },
        ],
    }


@pytest.fixture
def login_form():
    return parse_node(login_form_data())


@pytest.fixture
def scaffold():
    return Scaffold.model_validate({
        "schemaVersion": "1.0.0",
        "screen": {"id": "login-screen", "title": "Sign in", "root": login_form_data()},
    })


def _wizard_step(index: int, buttons: list[dict]) -> dict:
    return {
        "id": f"step-{index}",
        "type": "Stack",
        "behaviors": {"guidedFlow": {"role": "step", "stepIndex": index}},
        "children": [
            {"id": f"step-{index}-title", "type": "Text", "text": f"Step {index}"},
            {"id": f"step-{index}-field", "type": "Field", "label": f"Answer {index}"},
            {
                "id": f"step-{index}-actions",
                "type": "Stack",
                "direction": "horizontal",
                "children": buttons,
            },
        ],
    }


@pytest.fixture
def wizard():
    return parse_node({
        "id": "wizard",
        "type": "Stack",
        "behaviors": {"guidedFlow": {"role": "wizard", "totalSteps": 3}},
        "children": [
            _wizard_step(1, [
                {"id": "next-1", "type": "Button", "text": "Next", "roleHint": "primary"},
            ]),
            _wizard_step(2, [
                {"id": "back-2", "type": "Button", "text": "Back"},
                {"id": "next-2", "type": "Button", "text": "Next", "roleHint": "primary"},
            ]),
            _wizard_step(3, [
                {"id": "back-3", "type": "Button", "text": "Back"},
                {"id": "finish", "type": "Button", "text": "Finish", "roleHint": "primary"},
            ]),
        ],
    })
