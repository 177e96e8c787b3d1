"""Focusability classifier -- keyboard reachability of a single node.

Precedence (first match wins):

1. ``visible=False``      -> not focusable, whatever the kind
2. Button                 -> focusable unless ``focusable=False``
3. Field                  -> always focusable
4. anything else          -> focusable only with explicit ``focusable=True``

Pure predicates: no sibling or ancestor context is needed.
"""

from __future__ import annotations

from luma.nodes import BaseNode, ButtonNode, FieldNode


def is_focusable(node: BaseNode) -> bool:
    """Return True if *node* can receive keyboard focus."""
    if node.visible is False:
        return False
    if isinstance(node, ButtonNode):
        return node.focusable is not False
    if isinstance(node, FieldNode):
        return True
    return node.focusable is True


def filter_focusable(nodes: list[BaseNode]) -> list[BaseNode]:
    """Keep only focusable nodes, preserving order."""
    return [n for n in nodes if is_focusable(n)]


def get_tab_index(node: BaseNode) -> int:
    """Declared tab index, defaulting to 0.

    No uniqueness or ordering validation happens here -- consumers sort
    by this value with a stable tie-break on traversal order.
    """
    return node.tab_index if node.tab_index is not None else 0


__all__ = [
    "filter_focusable",
    "get_tab_index",
    "is_focusable",
]
