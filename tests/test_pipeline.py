"""Tests for luma.pipeline -- the end-to-end analysis run."""

from __future__ import annotations

import json

import pytest

from luma.config import Settings
from luma.errors import InvalidWeightsError, UnknownPatternError
from luma.nodes import Scaffold, parse_node
from luma.pipeline import analyze, resolve_patterns
from luma.scoring import PassCriteria, ScoreWeights


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _login(**password) -> dict:
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
                    {"id": "email", "type": "Field", "label": "Email address", "required": True},
                    {"id": "password", "type": "Field", "label": "Password", "required": True, **password},
                ],
                "actions": [
                    {"id": "submit", "type": "Button", "text": "Sign in", "roleHint": "primary"},
                    {"id": "cancel", "type": "Button", "text": "Cancel", "roleHint": "secondary"},
                ],
                "states": ["default", "error"],
            },
        ],
    }


def _scaffold(root: dict, screen_id: str = "screen") -> Scaffold:
    return Scaffold.model_validate({"screen": {"id": screen_id, "root": root}})


def _zip_form() -> dict:
    return {
        "id": "checkout",
        "type": "Form",
        "title": "Billing",
        "fields": [{"id": "zip", "type": "Field", "label": "Zip"}],
        "actions": [{"id": "pay", "type": "Button", "text": "Pay", "roleHint": "primary"}],
        "states": ["default"],
    }


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestAnalyze:
    def test_conforming_login_passes(self, scaffold):
        report = analyze(scaffold)
        assert report.screen_id == "login-screen"
        assert report.activated_patterns == ["Form.Basic"]
        assert report.keyboard.sequence == ["email", "password", "submit", "cancel"]
        assert report.flow.total_issues == 0
        assert report.score.overall == 100
        assert report.passed
        assert report.coverage.percent == 25.0

    def test_bare_root(self, login_form):
        report = analyze(login_form)
        assert report.screen_id is None
        assert "screenId" not in report.to_dict()
        assert report.passed

    def test_wizard_auto_selects_guided_flow(self, wizard):
        report = analyze(wizard)
        assert report.activated_patterns == ["Guided.Flow"]
        assert report.passed

    def test_json_is_deterministic(self, scaffold):
        first = analyze(scaffold).to_json()
        assert analyze(scaffold).to_json() == first
        data = json.loads(first)
        assert data["score"]["pass"] is True
        assert data["activatedPatterns"] == ["Form.Basic"]
        assert data["suggestions"][0]["confidenceScore"] == 95


# ---------------------------------------------------------------------------
# Pattern selection
# ---------------------------------------------------------------------------


class TestPatternSelection:
    def test_explicit_pattern_leaves_coverage_gap(self, scaffold):
        report = analyze(scaffold, ["table"])
        assert report.activated_patterns == ["Table.Simple"]
        assert report.flow.must_failed == 0
        assert [g.pattern for g in report.coverage.gaps] == ["Form.Basic"]

    def test_empty_pattern_list_validates_nothing(self, scaffold):
        report = analyze(scaffold, [])
        assert report.flow.patterns == []
        assert report.passed

    def test_unknown_pattern(self, scaffold):
        with pytest.raises(UnknownPatternError):
            analyze(scaffold, ["form", "carousel"])

    def test_resolve_patterns_drops_repeats(self):
        names = [p.name for p in resolve_patterns(["form", "Form.Basic", "wizard"])]
        assert names == ["Form.Basic", "Guided.Flow"]


# ---------------------------------------------------------------------------
# Gate behaviour
# ---------------------------------------------------------------------------


class TestGate:
    def test_should_failure_is_score_only(self):
        # Assumption: SHOULD failures never gate by themselves. One help-text
        # failure costs 10 fidelity points (overall 96) and still passes.
        report = analyze(_scaffold(_zip_form()))
        assert report.flow.should_failed == 1
        assert report.flow.must_failed == 0
        assert report.score.categories.pattern_fidelity == 90
        assert report.score.overall == 96
        assert report.passed
        assert report.score.fail_reasons == []

    def test_unreachable_field_fails(self):
        report = analyze(_scaffold(_login(tabIndex=-1)))
        assert report.keyboard.unreachable == ["password"]
        assert report.score.categories.flow_reachability == 70
        assert report.score.overall == 93
        assert not report.passed
        assert report.score.fail_reasons == ["1 unreachable node(s)"]

    def test_must_failure_fails(self):
        form = _zip_form()
        form["fields"] = [{"id": "zip", "type": "Field", "label": "", "helpText": "5 digits"}]
        report = analyze(_scaffold(form))
        assert report.flow.must_failed == 1
        assert report.score.fail_reasons[0] == "1 MUST failure(s) in pattern validation"

    def test_settings_minimum_score(self, monkeypatch):
        monkeypatch.setattr("luma.config.settings.MIN_OVERALL_SCORE", 97)
        report = analyze(_scaffold(_zip_form()))
        assert report.score.fail_reasons == ["Overall score 96 below minimum 97"]

    def test_explicit_settings_object(self):
        report = analyze(_scaffold(_zip_form()), settings=Settings(MIN_OVERALL_SCORE=97))
        assert not report.passed

    def test_explicit_criteria_win(self):
        criteria = PassCriteria(no_critical_flow_errors=False, min_overall_score=90)
        report = analyze(_scaffold(_login(tabIndex=-1)), criteria=criteria)
        assert report.passed

    def test_invalid_weights(self, scaffold):
        with pytest.raises(InvalidWeightsError):
            analyze(scaffold, weights=ScoreWeights(responsive_behavior=0.5))


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class TestInputs:
    def test_viewport_width_resolves_overrides(self):
        root = _login(at={"<=320": {"visible": False}})
        report = analyze(_scaffold(root), viewport_width=320)
        assert report.viewport_width == 320
        assert report.keyboard.sequence == ["email", "submit", "cancel"]

        wide = analyze(_scaffold(root), viewport_width=1280)
        assert wide.keyboard.sequence == ["email", "password", "submit", "cancel"]

    def test_layout_issues_feed_responsive_score(self, scaffold):
        from luma.contracts import Issue

        layout = [Issue(id="overflow-x", severity="warn", message="overflow", viewport="320x640")]
        report = analyze(scaffold, layout_issues=layout)
        assert report.score.categories.responsive_behavior == 70
        assert report.score.overall == 97

    def test_pointer_root_from_settings(self):
        report = analyze(_scaffold(_login(tabIndex=-1)), settings=Settings(POINTER_ROOT="/doc"))
        assert report.keyboard.issues[0].json_pointer == "/doc/children/1/fields/1"

    def test_pattern_pointers_follow_pointer_root(self):
        form = {
            "id": "survey",
            "type": "Form",
            "fields": [{"id": "q", "type": "Field", "label": ""}],
        }
        root = {"id": "root", "type": "Stack", "children": [form]}
        report = analyze(_scaffold(root), ["form"], settings=Settings(POINTER_ROOT="/doc"))

        issues = report.keyboard.issues + [i for r in report.flow.patterns for i in r.issues]
        assert issues
        assert all(i.json_pointer.startswith("/doc/") for i in issues)
        pointers = {i.id: i.json_pointer for i in report.flow.patterns[0].issues}
        assert pointers["field-has-label"] == "/doc/children/0/fields/0"
        assert pointers["actions-exist"] == "/doc/children/0"

    def test_parse_node_root(self):
        report = analyze(parse_node(_zip_form()))
        assert report.activated_patterns == ["Form.Basic"]
