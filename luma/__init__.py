"""Scaffold analysis core -- traversal, focus, pattern rules, and scoring.

Public API
----------
Pipeline::

    analyze, AnalysisReport, resolve_patterns

Nodes (Pydantic models)::

    Scaffold, Screen, ScaffoldSettings, Node, BaseNode,
    StackNode, GridNode, BoxNode, TextNode, ButtonNode,
    FieldNode, FormNode, TableNode,
    parse_node, dump_node, NODE_KINDS,

Contracts::

    Issue, IssueSource, Severity, KeyboardOutput, count_by_severity

Traversal & focus::

    traverse, walk, collect_node_ids, is_focusable, get_tab_index,

Keyboard::

    analyze_keyboard, build_tab_sequence, apply_responsive_overrides

Patterns::

    Pattern, PatternRule, PatternResult, FlowOutput,
    validate_pattern, validate_patterns,
    get_pattern, find_pattern, get_all_patterns, list_pattern_names,
    suggest_patterns, select_patterns, PatternSuggestion,
    compute_coverage,

Scoring::

    CategoryScores, ScoreWeights, PassCriteria, ScoreOutput,
    DEFAULT_WEIGHTS, DEFAULT_CRITERIA, ScoringInputs,
    calculate_overall_score, evaluate_pass_fail, create_score_output,

Errors::

    LumaError, ConfigurationError, InvalidWeightsError,
    UnknownPatternError, TraversalError, UnknownNodeKindError,

Configuration::

    Settings, settings, configure_logging, VERSION
"""

from luma.config import VERSION, Settings, configure_logging, settings
from luma.contracts import Issue, IssueSource, KeyboardOutput, Severity, count_by_severity
from luma.errors import (
    ConfigurationError,
    InvalidWeightsError,
    LumaError,
    TraversalError,
    UnknownNodeKindError,
    UnknownPatternError,
)
from luma.focusable import get_tab_index, is_focusable
from luma.keyboard import analyze_keyboard, build_tab_sequence
from luma.nodes import (
    NODE_KINDS,
    BaseNode,
    BoxNode,
    ButtonNode,
    FieldNode,
    FormNode,
    GridNode,
    Node,
    Scaffold,
    ScaffoldSettings,
    Screen,
    StackNode,
    TableNode,
    TextNode,
    dump_node,
    parse_node,
)
from luma.patterns import (
    FlowOutput,
    Pattern,
    PatternResult,
    PatternRule,
    PatternSuggestion,
    compute_coverage,
    find_pattern,
    get_all_patterns,
    get_pattern,
    list_pattern_names,
    select_patterns,
    suggest_patterns,
    validate_pattern,
    validate_patterns,
)
from luma.pipeline import AnalysisReport, analyze, resolve_patterns
from luma.responsive import apply_responsive_overrides
from luma.scoring import (
    DEFAULT_CRITERIA,
    DEFAULT_WEIGHTS,
    CategoryScores,
    PassCriteria,
    ScoreOutput,
    ScoreWeights,
    ScoringInputs,
    calculate_overall_score,
    create_score_output,
    evaluate_pass_fail,
)
from luma.traversal import collect_node_ids, traverse, walk

__version__ = VERSION

__all__ = [
    # Pipeline
    "AnalysisReport",
    "analyze",
    "resolve_patterns",
    # Nodes
    "BaseNode",
    "BoxNode",
    "ButtonNode",
    "FieldNode",
    "FormNode",
    "GridNode",
    "NODE_KINDS",
    "Node",
    "Scaffold",
    "ScaffoldSettings",
    "Screen",
    "StackNode",
    "TableNode",
    "TextNode",
    "dump_node",
    "parse_node",
    # Contracts
    "Issue",
    "IssueSource",
    "KeyboardOutput",
    "Severity",
    "count_by_severity",
    # Traversal & focus
    "collect_node_ids",
    "get_tab_index",
    "is_focusable",
    "traverse",
    "walk",
    # Keyboard
    "analyze_keyboard",
    "apply_responsive_overrides",
    "build_tab_sequence",
    # Patterns
    "FlowOutput",
    "Pattern",
    "PatternResult",
    "PatternRule",
    "PatternSuggestion",
    "compute_coverage",
    "find_pattern",
    "get_all_patterns",
    "get_pattern",
    "list_pattern_names",
    "select_patterns",
    "suggest_patterns",
    "validate_pattern",
    "validate_patterns",
    # Scoring
    "CategoryScores",
    "DEFAULT_CRITERIA",
    "DEFAULT_WEIGHTS",
    "PassCriteria",
    "ScoreOutput",
    "ScoreWeights",
    "ScoringInputs",
    "calculate_overall_score",
    "create_score_output",
    "evaluate_pass_fail",
    # Errors
    "ConfigurationError",
    "InvalidWeightsError",
    "LumaError",
    "TraversalError",
    "UnknownNodeKindError",
    "UnknownPatternError",
    # Configuration
    "Settings",
    "VERSION",
    "configure_logging",
    "settings",
]
