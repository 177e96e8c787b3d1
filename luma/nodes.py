"""Scaffold node models -- the closed variant set of UI tree nodes.

Every node kind is a frozen Pydantic model tagged by its ``type`` field;
``Node`` is the discriminated union over all of them.  Input JSON is
camelCase (``tabIndex``, ``roleHint``); Python attributes are snake_case.

The tree is built once by the upstream ingest step and is read-only
for the analysis core.  Child slots are tuples so nothing downstream
can append to them by accident.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    """Shared config: immutable, camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------

WidthPolicy = Literal["hug", "fill", "fixed"]
HeightPolicy = Literal["hug", "fill", "fixed"]
ButtonRoleHint = Literal["primary", "secondary", "danger", "link"]
FieldInputType = Literal["text", "email", "password", "number", "date"]


class SizeConstraint(_Model):
    w: float | None = None
    h: float | None = None


class DisclosureBehavior(_Model):
    """Hint marking a node as a collapsible section."""

    collapsible: bool
    default_state: Literal["collapsed", "expanded"] | None = None
    controls_id: str | None = None
    aria_summary_text: str | None = None


class GuidedFlowBehavior(_Model):
    """Hint marking a wizard container or one of its steps."""

    role: Literal["wizard", "step"]
    step_index: int | None = None
    total_steps: int | None = None
    next_id: str | None = None
    prev_id: str | None = None
    has_progress: bool | None = None
    progress_node_id: str | None = None


class Behaviors(_Model):
    disclosure: DisclosureBehavior | None = None
    guided_flow: GuidedFlowBehavior | None = None


class TableResponsive(_Model):
    # Kept as a plain string so an invalid strategy reaches the pattern
    # rules instead of failing model validation.
    strategy: str | None = None
    min_column_width: float | None = None


# ---------------------------------------------------------------------------
# Node variants
# ---------------------------------------------------------------------------


class BaseNode(_Model):
    """Fields common to every node kind."""

    id: str
    visible: bool = True
    width_policy: WidthPolicy = "hug"
    height_policy: HeightPolicy = "hug"
    min_size: SizeConstraint | None = None
    max_size: SizeConstraint | None = None
    at: dict[str, dict[str, Any]] | None = None
    pattern: str | None = None
    behaviors: Behaviors | None = None
    affordances: tuple[str, ...] = ()
    focusable: bool | None = None
    tab_index: int | None = None


class StackNode(BaseNode):
    type: Literal["Stack"] = "Stack"
    direction: Literal["vertical", "horizontal"] = "vertical"
    gap: float = 0
    padding: float = 0
    align: Literal["start", "center", "end", "stretch"] = "start"
    wrap: bool = False
    children: tuple[Node, ...] = ()


class GridNode(BaseNode):
    type: Literal["Grid"] = "Grid"
    columns: int = Field(default=1, ge=1)
    gap: float = 0
    min_col_width: float | None = None
    children: tuple[Node, ...] = ()


class BoxNode(BaseNode):
    type: Literal["Box"] = "Box"
    padding: float = 0
    child: Node | None = None


class TextNode(BaseNode):
    type: Literal["Text"] = "Text"
    text: str = ""
    font_size: float = 16
    max_lines: int | None = None
    intrinsic_text_width: float | None = None


class ButtonNode(BaseNode):
    type: Literal["Button"] = "Button"
    text: str | None = None
    role_hint: ButtonRoleHint | None = None


class FieldNode(BaseNode):
    type: Literal["Field"] = "Field"
    label: str = ""
    input_type: FieldInputType | None = None
    required: bool | None = None
    help_text: str | None = None
    error_text: str | None = None


class FormNode(BaseNode):
    type: Literal["Form"] = "Form"
    title: str | None = None
    fields: tuple[FieldNode, ...] = ()
    actions: tuple[ButtonNode, ...] = ()
    states: tuple[str, ...] = ()


class TableNode(BaseNode):
    type: Literal["Table"] = "Table"
    title: str = ""
    columns: tuple[str, ...] = ()
    rows: int | None = None
    responsive: TableResponsive | None = None
    states: tuple[str, ...] | None = None


Node = Annotated[
    Union[
        StackNode,
        GridNode,
        BoxNode,
        TextNode,
        ButtonNode,
        FieldNode,
        FormNode,
        TableNode,
    ],
    Field(discriminator="type"),
]

#: Every node kind the analysis core recognises.
NODE_KINDS: tuple[str, ...] = (
    "Stack", "Grid", "Box", "Text", "Button", "Field", "Form", "Table",
)

for _model in (StackNode, GridNode, BoxNode):
    _model.model_rebuild()


# ---------------------------------------------------------------------------
# Scaffold document
# ---------------------------------------------------------------------------


class MinTouchTarget(_Model):
    w: float = 44
    h: float = 44


class ScaffoldSettings(_Model):
    spacing_scale: tuple[float, ...] = (4, 8, 12, 16, 24, 32)
    min_touch_target: MinTouchTarget = MinTouchTarget()
    breakpoints: tuple[str, ...] = ("320x640", "768x1024", "1280x800")


class Screen(_Model):
    id: str
    title: str | None = None
    root: Node


class Scaffold(_Model):
    """Top-level document: one screen's node tree plus its settings."""

    schema_version: str = "1.0.0"
    screen: Screen
    settings: ScaffoldSettings = ScaffoldSettings()


_NODE_ADAPTER: TypeAdapter = TypeAdapter(Node)


def parse_node(data: Any) -> BaseNode:
    """Validate a raw mapping (camelCase keys) into a typed node tree."""
    return _NODE_ADAPTER.validate_python(data)


def dump_node(node: BaseNode) -> dict[str, Any]:
    """Serialise a node tree back to its camelCase mapping form."""
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "BaseNode",
    "Behaviors",
    "BoxNode",
    "ButtonNode",
    "DisclosureBehavior",
    "FieldNode",
    "FormNode",
    "GridNode",
    "GuidedFlowBehavior",
    "MinTouchTarget",
    "NODE_KINDS",
    "Node",
    "Scaffold",
    "ScaffoldSettings",
    "Screen",
    "SizeConstraint",
    "StackNode",
    "TableNode",
    "TableResponsive",
    "TextNode",
    "dump_node",
    "parse_node",
]
