"""Table.Simple -- IBM Carbon data table.

MUST:
  title-exists             Table.title is non-empty
  responsive-strategy      responsive.strategy is one of wrap / scroll / cards
  min-width-fit-or-scroll  a table without a strategy may overflow small viewports

SHOULD:
  controls-adjacent        filters/controls sit next to the table
"""

from __future__ import annotations

from luma.config import POINTER_ROOT
from luma.contracts import Issue, IssueSource
from luma.nodes import BaseNode, ButtonNode, FieldNode, TableNode
from luma.patterns.types import Pattern, PatternRule
from luma.traversal import sibling_index, walk

_NAME = "Table.Simple"
_SOURCE = IssueSource(
    pattern=_NAME,
    name="IBM Carbon Design System",
    url="https://carbondesignsystem.com/components/data-table/usage/",
)

VALID_STRATEGIES = ("wrap", "scroll", "cards")


def _strategy(table: TableNode) -> str | None:
    return table.responsive.strategy if table.responsive is not None else None


def _check_title_exists(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    return [
        Issue(
            id="title-exists",
            severity="error",
            message=f'Table "{v.node.id}" has empty or missing title',
            node_id=v.node.id,
            json_pointer=v.pointer,
            source=_SOURCE,
            expected="non-empty title",
            found=v.node.title,
        )
        for v in walk(root, base_pointer=base_pointer)
        if isinstance(v.node, TableNode) and not v.node.title.strip()
    ]


def _check_responsive_strategy(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        table = visit.node
        if not isinstance(table, TableNode):
            continue
        strategy = _strategy(table)
        if not strategy:
            message = f'Table "{table.id}" is missing responsive.strategy'
        elif strategy not in VALID_STRATEGIES:
            message = (
                f'Table "{table.id}" has invalid responsive.strategy "{strategy}" '
                "(must be: wrap, scroll, or cards)"
            )
        else:
            continue
        issues.append(Issue(
            id="responsive-strategy",
            severity="error",
            message=message,
            node_id=table.id,
            json_pointer=visit.pointer,
            source=_SOURCE,
            expected="strategy in {wrap, scroll, cards}",
            found=strategy,
        ))
    return issues


def _check_min_width_fit_or_scroll(
    root: BaseNode, base_pointer: str = POINTER_ROOT,
) -> list[Issue]:
    # scroll and cards handle overflow by construction; wrap needs a layout
    # pass to judge, which is outside this core.
    return [
        Issue(
            id="min-width-fit-or-scroll",
            severity="error",
            message=f'Table "{v.node.id}" has no responsive strategy; may overflow on small viewports',
            node_id=v.node.id,
            json_pointer=v.pointer,
            source=_SOURCE,
        )
        for v in walk(root, base_pointer=base_pointer)
        if isinstance(v.node, TableNode) and not _strategy(v.node)
    ]


def _check_controls_adjacent(root: BaseNode, base_pointer: str = POINTER_ROOT) -> list[Issue]:
    siblings = sibling_index(root)
    issues: list[Issue] = []
    for visit in walk(root, base_pointer=base_pointer):
        table = visit.node
        if not isinstance(table, TableNode):
            continue
        neighbours = [n for n in siblings.get(table.id, []) if n is not table]
        has_controls = any(
            isinstance(n, (ButtonNode, FieldNode)) and n.visible for n in neighbours
        )
        if not has_controls:
            issues.append(Issue(
                id="controls-adjacent",
                severity="warn",
                message=f'Table "{table.id}" has no filter or action controls beside it',
                node_id=table.id,
                json_pointer=visit.pointer,
                source=_SOURCE,
                suggestion="Place filters or table actions as siblings of the Table",
            ))
    return issues


TABLE_SIMPLE = Pattern(
    name=_NAME,
    source=_SOURCE,
    must=(
        PatternRule("title-exists", "must", "Table.title must be non-empty", _check_title_exists),
        PatternRule(
            "responsive-strategy", "must",
            "Table.responsive.strategy must be one of: wrap, scroll, cards",
            _check_responsive_strategy,
        ),
        PatternRule(
            "min-width-fit-or-scroll", "must",
            "At smallest viewport, table must not overflow horizontally; "
            "either columns fit or strategy is scroll/cards",
            _check_min_width_fit_or_scroll,
        ),
    ),
    should=(
        PatternRule(
            "controls-adjacent", "should",
            "Filters/controls should be adjacent to the table container",
            _check_controls_adjacent,
        ),
    ),
    aliases=("table",),
)
