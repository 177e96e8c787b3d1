"""Pre-order tree traversal -- the one tree-walking contract of the core.

Pre-order means a parent is emitted before any of its descendants and
children are visited left-to-right.  Slots are visited in a fixed
declared order:

* Stack / Grid -- ``children``
* Box          -- its single ``child``
* Form         -- ``fields`` then ``actions``
* Text / Button / Field / Table -- leaves

With ``visible_only`` (the default) a node with ``visible=False`` is not
emitted and its whole subtree is not visited.

The walk uses an explicit work stack over owned-child edges only, so it
is bounded by tree size and never recurses into Python's call stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from luma.config import POINTER_ROOT
from luma.errors import UnknownNodeKindError
from luma.nodes import (
    BaseNode,
    BoxNode,
    ButtonNode,
    FieldNode,
    FormNode,
    GridNode,
    StackNode,
    TableNode,
    TextNode,
)
from luma.pointer import join_pointer

_LEAF_KINDS = (TextNode, ButtonNode, FieldNode, TableNode)


@dataclass(frozen=True)
class Visit:
    """A node reached by the walk, with its structural location."""

    node: BaseNode
    pointer: str
    depth: int


# ---------------------------------------------------------------------------
# Slots
# ---------------------------------------------------------------------------


def child_slots(node: BaseNode, pointer: str = "") -> list[tuple[str, BaseNode]]:
    """Return ``(pointer, child)`` pairs for *node* in declared slot order.

    Raises ``UnknownNodeKindError`` for a node outside the variant set --
    silently skipping it would corrupt reachability counts.
    """
    if isinstance(node, (StackNode, GridNode)):
        return [
            (join_pointer(pointer, "children", i), child)
            for i, child in enumerate(node.children)
        ]
    if isinstance(node, BoxNode):
        if node.child is None:
            return []
        return [(join_pointer(pointer, "child"), node.child)]
    if isinstance(node, FormNode):
        slots = [
            (join_pointer(pointer, "fields", i), f) for i, f in enumerate(node.fields)
        ]
        slots.extend(
            (join_pointer(pointer, "actions", i), a) for i, a in enumerate(node.actions)
        )
        return slots
    if isinstance(node, _LEAF_KINDS):
        return []
    kind = getattr(node, "type", type(node).__name__)
    raise UnknownNodeKindError(getattr(node, "id", "?"), str(kind), pointer)


def get_children(node: BaseNode) -> list[BaseNode]:
    """Direct children of *node* across all slots, in slot order."""
    return [child for _, child in child_slots(node)]


# ---------------------------------------------------------------------------
# Walk
# ---------------------------------------------------------------------------


def walk(
    root: BaseNode,
    visible_only: bool = True,
    *,
    base_pointer: str = POINTER_ROOT,
) -> Iterator[Visit]:
    """Yield every reachable node in pre-order with its pointer and depth.

    Each call returns a fresh generator, so the walk can be restarted.
    """
    stack: list[tuple[BaseNode, str, int]] = [(root, base_pointer, 0)]
    while stack:
        node, pointer, depth = stack.pop()
        if visible_only and node.visible is False:
            continue
        yield Visit(node=node, pointer=pointer, depth=depth)
        # Push in reverse so the leftmost child is popped first
        for child_pointer, child in reversed(child_slots(node, pointer)):
            stack.append((child, child_pointer, depth + 1))


def traverse(root: BaseNode, visible_only: bool = True) -> list[BaseNode]:
    """Collect nodes in pre-order (see module docstring for slot order)."""
    return [visit.node for visit in walk(root, visible_only)]


def collect_node_ids(root: BaseNode, visible_only: bool = True) -> list[str]:
    """Node ids in pre-order, preserving traversal order."""
    return [visit.node.id for visit in walk(root, visible_only)]


# ---------------------------------------------------------------------------
# Derived lookups
# ---------------------------------------------------------------------------


def pointer_index(root: BaseNode, *, base_pointer: str = POINTER_ROOT) -> dict[str, str]:
    """Map every node id (visible or not) to its pointer."""
    return {
        visit.node.id: visit.pointer
        for visit in walk(root, visible_only=False, base_pointer=base_pointer)
    }


def sibling_index(root: BaseNode) -> dict[str, list[BaseNode]]:
    """Map each non-root node id to the sibling list it belongs to.

    A Form's fields and actions count as one sibling list; a Box child
    is its own single-element list.  The root has no entry.
    """
    index: dict[str, list[BaseNode]] = {}
    for visit in walk(root, visible_only=False):
        children = get_children(visit.node)
        for child in children:
            index[child.id] = children
    return index


def find_node(root: BaseNode, node_id: str, visible_only: bool = False) -> BaseNode | None:
    """Return the first node with *node_id*, or ``None``."""
    for visit in walk(root, visible_only):
        if visit.node.id == node_id:
            return visit.node
    return None


def is_descendant(ancestor: BaseNode, candidate: BaseNode) -> bool:
    """True if *candidate* is *ancestor* itself or lies in its subtree."""
    return any(visit.node is candidate for visit in walk(ancestor, visible_only=False))


__all__ = [
    "Visit",
    "child_slots",
    "collect_node_ids",
    "find_node",
    "get_children",
    "is_descendant",
    "pointer_index",
    "sibling_index",
    "traverse",
    "walk",
]
