"""Tests for pattern suggestions, confidence bands and coverage."""

from __future__ import annotations

import pytest

from luma.errors import ConfigurationError
from luma.nodes import parse_node
from luma.patterns.coverage import compute_coverage
from luma.patterns.form_basic import FORM_BASIC
from luma.patterns.guided_flow import GUIDED_FLOW
from luma.patterns.registry import PatternRegistry
from luma.patterns.suggestions import (
    confidence_band,
    has_disclosure_hints,
    select_patterns,
    suggest_patterns,
)
from luma.patterns.table_simple import TABLE_SIMPLE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _by_pattern(root, **kwargs) -> dict:
    return {s.pattern: s for s in suggest_patterns(root, **kwargs)}


def _stack(*children: dict) -> dict:
    return {"id": "root", "type": "Stack", "children": list(children)}


def _button(node_id: str, text: str) -> dict:
    return {"id": node_id, "type": "Button", "text": text}


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------


class TestFormScore:
    def test_full_form(self, login_form):
        form = _by_pattern(login_form)["Form.Basic"]
        assert form.confidence_score == 95
        assert form.confidence == "high"
        assert form.indicators == ["form", "fields", "actions", "primary"]

    def test_form_without_actions_is_medium(self):
        root = parse_node({
            "id": "f",
            "type": "Form",
            "fields": [{"id": "q", "type": "Field", "label": "Question"}],
        })
        form = _by_pattern(root)["Form.Basic"]
        assert form.confidence_score == 70
        assert form.confidence == "medium"

    def test_single_indicator_stays_low(self):
        form = _by_pattern(parse_node({"id": "f", "type": "Form"}))["Form.Basic"]
        assert form.confidence_score == 50
        assert form.confidence == "low"

    def test_invisible_nodes_count(self):
        root = parse_node(_stack({
            "id": "f",
            "type": "Form",
            "visible": False,
            "fields": [{"id": "q", "type": "Field", "label": "Question"}],
            "actions": [{"id": "go", "type": "Button", "text": "Go", "roleHint": "primary"}],
        }))
        assert _by_pattern(root)["Form.Basic"].confidence_score == 95


def test_every_pattern_reported_even_when_absent():
    suggestions = suggest_patterns(parse_node({"id": "t", "type": "Text", "text": "Hello"}))
    assert [s.pattern for s in suggestions] == [
        "Form.Basic", "Table.Simple", "Progressive.Disclosure", "Guided.Flow",
    ]
    for s in suggestions:
        assert s.confidence_score == 0
        assert s.confidence == "low"
        assert s.indicators == []
    assert suggestions[0].reason == "No Form node found"


@pytest.mark.parametrize(
    "table, score, band",
    [
        ({"id": "t", "type": "Table", "title": "Orders"}, 50, "low"),
        ({"id": "t", "type": "Table", "title": "Orders", "columns": ["Id"]}, 75, "medium"),
        (
            {
                "id": "t",
                "type": "Table",
                "title": "Orders",
                "columns": ["Id"],
                "responsive": {"strategy": "scroll"},
            },
            90,
            "high",
        ),
    ],
)
def test_table_scores(table, score, band):
    suggestion = _by_pattern(parse_node(table))["Table.Simple"]
    assert suggestion.confidence_score == score
    assert suggestion.confidence == band


class TestDisclosureScore:
    def _section(self, **extra) -> dict:
        behavior = {"collapsible": True}
        behavior.update(extra.pop("behavior", {}))
        return {"id": "s", "type": "Box", "behaviors": {"disclosure": behavior}, **extra}

    def test_collapsible_alone_is_high(self):
        suggestion = _by_pattern(parse_node(self._section()))["Progressive.Disclosure"]
        assert suggestion.confidence_score == 80
        assert suggestion.confidence == "high"

    def test_all_indicators(self):
        section = self._section(behavior={"controlsId": "toggle"}, affordances=["chevron"])
        suggestion = _by_pattern(parse_node(section))["Progressive.Disclosure"]
        assert suggestion.confidence_score == 92
        assert suggestion.indicators == ["collapsible", "controls", "affordances"]

    def test_non_collapsible_behavior_ignored(self):
        section = {"id": "s", "type": "Box", "behaviors": {"disclosure": {"collapsible": False}}}
        root = parse_node(section)
        assert _by_pattern(root)["Progressive.Disclosure"].confidence_score == 0
        assert not has_disclosure_hints(root)


class TestGuidedFlowScore:
    def test_single_hint_is_low(self):
        suggestion = _by_pattern(parse_node(_stack(_button("n", "Next"))))["Guided.Flow"]
        assert suggestion.confidence_score == 40
        assert suggestion.confidence == "low"

    def test_two_hints_are_medium(self):
        root = parse_node(_stack(_button("b", "Back"), _button("n", "Next")))
        suggestion = _by_pattern(root)["Guided.Flow"]
        assert suggestion.confidence_score == 55
        assert suggestion.confidence == "medium"

    def test_step_label_button(self):
        root = parse_node(_stack(_button("s2", "Step 2"), _button("b", "Previous"), _button("n", "Next")))
        assert _by_pattern(root)["Guided.Flow"].confidence_score == 70

    def test_wizard_caps_at_100(self, wizard):
        suggestion = _by_pattern(wizard)["Guided.Flow"]
        assert suggestion.confidence_score == 100
        assert suggestion.confidence == "high"


# ---------------------------------------------------------------------------
# Monotonicity
# ---------------------------------------------------------------------------


def _scores_as_tree_grows(trees: list[dict]) -> dict[str, list[int]]:
    history: dict[str, list[int]] = {}
    for tree in trees:
        for name, suggestion in _by_pattern(parse_node(tree)).items():
            history.setdefault(name, []).append(suggestion.confidence_score)
    return history


def _assert_never_drops(history: dict[str, list[int]]):
    for name, scores in history.items():
        assert scores == sorted(scores), name


class TestMonotonicity:
    def test_form_indicators_only_add(self):
        form = {"id": "f", "type": "Form"}
        with_field = {**form, "fields": [{"id": "q", "type": "Field", "label": "Question"}]}
        with_action = {**with_field, "actions": [{"id": "later", "type": "Button", "text": "Later"}]}
        with_primary = {
            **with_action,
            "actions": with_action["actions"] + [
                {"id": "go", "type": "Button", "text": "Go", "roleHint": "primary"},
            ],
        }
        history = _scores_as_tree_grows([
            _stack(),
            _stack(form),
            _stack(with_field),
            _stack(with_action),
            _stack(with_primary),
        ])
        assert history["Form.Basic"] == [0, 50, 70, 85, 95]
        _assert_never_drops(history)

    def test_guided_flow_indicators_only_add(self):
        buttons = [
            _button("b", "Back"),
            _button("n", "Next"),
            _button("s2", "Step 2"),
            {"id": "step", "type": "Box", "behaviors": {"guidedFlow": {"role": "step", "stepIndex": 1}}},
        ]
        history = _scores_as_tree_grows([_stack(*buttons[:i]) for i in range(len(buttons) + 1)])
        assert history["Guided.Flow"] == [0, 40, 55, 70, 85]
        _assert_never_drops(history)


# ---------------------------------------------------------------------------
# Bands and thresholds
# ---------------------------------------------------------------------------


class TestConfidenceBand:
    def test_bands(self):
        assert confidence_band(80, 1) == "high"
        assert confidence_band(79, 2) == "medium"
        assert confidence_band(79, 1) == "low"
        assert confidence_band(49, 3) == "low"
        assert confidence_band(0, 0) == "low"

    def test_explicit_thresholds(self, login_form):
        form = _by_pattern(login_form, high_threshold=96, medium_threshold=60)["Form.Basic"]
        assert form.confidence == "medium"

    def test_settings_supply_defaults(self, login_form, monkeypatch):
        monkeypatch.setattr("luma.config.settings.HIGH_CONFIDENCE_THRESHOLD", 99)
        assert _by_pattern(login_form)["Form.Basic"].confidence == "medium"

    @pytest.mark.parametrize("high, medium", [(50, 50), (40, 60)])
    def test_inverted_thresholds_rejected(self, login_form, high, medium):
        with pytest.raises(ConfigurationError):
            suggest_patterns(login_form, high_threshold=high, medium_threshold=medium)


def test_select_patterns(login_form, wizard):
    assert select_patterns(suggest_patterns(login_form)) == ["Form.Basic"]
    assert select_patterns(suggest_patterns(wizard)) == ["Guided.Flow"]
    assert select_patterns(suggest_patterns(login_form), threshold=96) == []


def test_custom_registry_limits_suggestions(login_form):
    reg = PatternRegistry()
    reg.register(TABLE_SIMPLE)
    suggestions = suggest_patterns(login_form, registry=reg)
    assert [s.pattern for s in suggestions] == ["Table.Simple"]


# ---------------------------------------------------------------------------
# Coverage
# ---------------------------------------------------------------------------


class TestCoverage:
    def test_activated_share(self, login_form):
        coverage = compute_coverage(suggest_patterns(login_form), ["Form.Basic"])
        assert (coverage.activated, coverage.total) == (1, 4)
        assert coverage.percent == 25.0
        assert coverage.gaps == []

    def test_unvalidated_suggestion_is_a_gap(self, login_form):
        coverage = compute_coverage(suggest_patterns(login_form), ["Table.Simple"])
        assert [g.pattern for g in coverage.gaps] == ["Form.Basic"]
        assert coverage.gaps[0].reason.startswith("Detected Form node")

    def test_low_suggestions_are_not_gaps(self):
        root = parse_node(_stack(_button("n", "Next")))
        assert compute_coverage(suggest_patterns(root), []).gaps == []

    def test_duplicates_count_once(self, login_form):
        coverage = compute_coverage(suggest_patterns(login_form), ["Form.Basic", "Form.Basic"])
        assert coverage.activated == 1

    def test_percent_rounded(self, login_form):
        reg = PatternRegistry()
        for pattern in (FORM_BASIC, TABLE_SIMPLE, GUIDED_FLOW):
            reg.register(pattern)
        coverage = compute_coverage(suggest_patterns(login_form, registry=reg), ["Form.Basic"], registry=reg)
        assert coverage.percent == 33.33

    def test_empty_registry(self):
        coverage = compute_coverage([], [], registry=PatternRegistry())
        assert (coverage.total, coverage.percent) == (0, 0.0)
