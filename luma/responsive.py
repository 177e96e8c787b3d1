"""Responsive overrides -- resolve a node tree for one viewport width.

Nodes may carry ``at`` overlays keyed ``">=X"`` or ``"<=Y"``.  For a
viewport of width ``W``:

1. every ``>=X`` with ``X <= W`` applies, ascending X (largest last)
2. every ``<=Y`` with ``Y >= W`` applies, descending Y (smallest last)

Overlays replace scalar fields, merge nested mappings one level deep,
and replace lists outright.  Keys that do not parse are ignored.

The input tree is never mutated; a new, re-validated tree is returned.
"""

from __future__ import annotations

import re
from typing import Any

from luma.nodes import BaseNode, dump_node, parse_node

_AT_KEY = re.compile(r"^(>=|<=)(\d+)$")

# Slots holding child nodes in the camelCase mapping form
_LIST_SLOTS = ("children", "fields", "actions")


def parse_at_key(key: str) -> tuple[str, int] | None:
    """Parse ``">=768"`` into ``(">=", 768)``; ``None`` if malformed."""
    match = _AT_KEY.match(key)
    if not match:
        return None
    return match.group(1), int(match.group(2))


def shallow_merge(base: Any, override: Any) -> Any:
    """Overlay *override* on *base*: nested dicts merge one level, lists replace."""
    if override is None:
        return base
    if base is None or not isinstance(override, dict) or not isinstance(base, dict):
        return override

    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            result[key] = {**current, **value}
        else:
            result[key] = value
    return result


def _apply_to_mapping(node: dict[str, Any], width: int) -> dict[str, Any]:
    overlays = node.get("at")
    result = {k: v for k, v in node.items() if k != "at"}

    if isinstance(overlays, dict):
        at_least: list[tuple[int, dict]] = []
        at_most: list[tuple[int, dict]] = []
        for key, overlay in overlays.items():
            parsed = parse_at_key(key)
            if parsed is None:
                continue
            operator, value = parsed
            if operator == ">=" and value <= width:
                at_least.append((value, overlay))
            elif operator == "<=" and value >= width:
                at_most.append((value, overlay))

        at_least.sort(key=lambda item: item[0])
        at_most.sort(key=lambda item: item[0], reverse=True)
        for _, overlay in at_least + at_most:
            result = shallow_merge(result, overlay)

    for slot in _LIST_SLOTS:
        if isinstance(result.get(slot), list):
            result[slot] = [_apply_to_mapping(c, width) for c in result[slot]]
    if isinstance(result.get("child"), dict):
        result["child"] = _apply_to_mapping(result["child"], width)
    return result


def apply_responsive_overrides(root: BaseNode, viewport_width: int) -> BaseNode:
    """Return a copy of *root* with every ``at`` overlay for the width applied."""
    resolved = _apply_to_mapping(dump_node(root), viewport_width)
    return parse_node(resolved)


__all__ = [
    "apply_responsive_overrides",
    "parse_at_key",
    "shallow_merge",
]
