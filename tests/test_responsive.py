"""Tests for luma.responsive -- ``at`` overlays resolved per viewport width."""

from __future__ import annotations

import pytest

from luma.nodes import parse_node
from luma.responsive import apply_responsive_overrides, parse_at_key, shallow_merge
from luma.traversal import find_node


@pytest.mark.parametrize(
    "key, expected",
    [
        (">=768", (">=", 768)),
        ("<=320", ("<=", 320)),
        ("=768", None),
        (">= 768", None),
        ("<=abc", None),
        ("", None),
    ],
)
def test_parse_at_key(key, expected):
    assert parse_at_key(key) == expected


class TestShallowMerge:
    def test_scalars_replace(self):
        assert shallow_merge({"gap": 8, "padding": 4}, {"gap": 16}) == {"gap": 16, "padding": 4}

    def test_nested_mappings_merge_one_level(self):
        base = {"minSize": {"w": 10, "h": 20}}
        assert shallow_merge(base, {"minSize": {"w": 30}}) == {"minSize": {"w": 30, "h": 20}}

    def test_lists_replace(self):
        assert shallow_merge({"columns": ["a", "b"]}, {"columns": ["c"]}) == {"columns": ["c"]}

    def test_none_override_keeps_base(self):
        assert shallow_merge({"gap": 8}, None) == {"gap": 8}


class TestApplyOverrides:
    def _stack(self, at: dict):
        return parse_node({"id": "s", "type": "Stack", "direction": "horizontal", "gap": 8, "at": at})

    def test_max_width_applies_at_or_below(self):
        root = self._stack({"<=600": {"direction": "vertical"}})
        assert apply_responsive_overrides(root, 600).direction == "vertical"
        assert apply_responsive_overrides(root, 601).direction == "horizontal"

    def test_min_width_applies_at_or_above(self):
        root = self._stack({">=1024": {"gap": 24}})
        assert apply_responsive_overrides(root, 1024).gap == 24
        assert apply_responsive_overrides(root, 800).gap == 8

    def test_min_width_overlays_apply_ascending(self):
        root = self._stack({">=1024": {"gap": 32}, ">=768": {"gap": 16}})
        assert apply_responsive_overrides(root, 1280).gap == 32

    def test_max_width_overlays_apply_descending(self):
        root = self._stack({"<=320": {"gap": 4}, "<=768": {"gap": 12}})
        assert apply_responsive_overrides(root, 300).gap == 4

    def test_max_width_applied_after_min_width(self):
        root = self._stack({">=300": {"gap": 16}, "<=400": {"gap": 4}})
        assert apply_responsive_overrides(root, 320).gap == 4

    def test_malformed_keys_ignored(self):
        root = self._stack({"mobile": {"gap": 99}})
        assert apply_responsive_overrides(root, 320).gap == 8

    def test_overrides_reach_nested_slots(self):
        root = parse_node({
            "id": "root",
            "type": "Stack",
            "children": [{
                "id": "box",
                "type": "Box",
                "child": {
                    "id": "form",
                    "type": "Form",
                    "actions": [{
                        "id": "go",
                        "type": "Button",
                        "text": "Go",
                        "at": {"<=320": {"text": "Go!"}},
                    }],
                },
            }],
        })
        resolved = apply_responsive_overrides(root, 320)
        assert find_node(resolved, "go").text == "Go!"

    def test_input_not_mutated(self):
        root = self._stack({"<=600": {"direction": "vertical"}})
        resolved = apply_responsive_overrides(root, 320)
        assert resolved is not root
        assert root.direction == "horizontal"
        assert root.at == {"<=600": {"direction": "vertical"}}
        assert resolved.at is None
