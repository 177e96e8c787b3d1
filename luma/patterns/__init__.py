"""UX pattern library: rule model, validator, registry, suggestions, coverage."""

from luma.patterns.coverage import CoverageGap, CoverageResult, compute_coverage
from luma.patterns.engine import run_rule, validate_pattern, validate_patterns
from luma.patterns.form_basic import FORM_BASIC
from luma.patterns.guided_flow import GUIDED_FLOW, has_guided_flow_hints, resolve_scopes
from luma.patterns.progressive_disclosure import PROGRESSIVE_DISCLOSURE
from luma.patterns.registry import (
    PatternRegistry,
    default_registry,
    find_pattern,
    get_all_patterns,
    get_pattern,
    has_pattern,
    list_pattern_names,
)
from luma.patterns.suggestions import (
    PatternSuggestion,
    confidence_band,
    has_disclosure_hints,
    select_patterns,
    suggest_patterns,
)
from luma.patterns.table_simple import TABLE_SIMPLE
from luma.patterns.types import FlowOutput, Pattern, PatternResult, PatternRule

__all__ = [
    "CoverageGap",
    "CoverageResult",
    "FORM_BASIC",
    "FlowOutput",
    "GUIDED_FLOW",
    "PROGRESSIVE_DISCLOSURE",
    "Pattern",
    "PatternRegistry",
    "PatternResult",
    "PatternRule",
    "PatternSuggestion",
    "TABLE_SIMPLE",
    "compute_coverage",
    "confidence_band",
    "default_registry",
    "find_pattern",
    "get_all_patterns",
    "get_pattern",
    "has_disclosure_hints",
    "has_guided_flow_hints",
    "has_pattern",
    "list_pattern_names",
    "resolve_scopes",
    "run_rule",
    "select_patterns",
    "suggest_patterns",
    "validate_pattern",
    "validate_patterns",
]
