"""Pattern registry -- maps canonical names and aliases to patterns.

The ``PatternRegistry`` is a plain class (not a singleton) so tests can
create fresh instances.  ``default_registry`` holds the four built-in
patterns and backs the module-level lookup helpers.
"""

from __future__ import annotations

from luma.errors import UnknownPatternError
from luma.patterns.form_basic import FORM_BASIC
from luma.patterns.guided_flow import GUIDED_FLOW
from luma.patterns.progressive_disclosure import PROGRESSIVE_DISCLOSURE
from luma.patterns.table_simple import TABLE_SIMPLE
from luma.patterns.types import Pattern


class PatternRegistry:
    """Name/alias lookup over registered patterns.

    Usage::

        reg = PatternRegistry()
        reg.register(FORM_BASIC)
        reg.get("form")       # -> FORM_BASIC
        reg.get("FORM.BASIC") # -> FORM_BASIC
    """

    def __init__(self) -> None:
        self._patterns: list[Pattern] = []
        self._keys: dict[str, Pattern] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, pattern: Pattern) -> None:
        """Register *pattern* under its name and every alias.

        Raises ``ValueError`` if any of those keys is already taken.
        """
        keys = (pattern.name, *pattern.aliases)
        for key in keys:
            if key.lower() in self._keys:
                raise ValueError(f"Pattern key '{key}' is already registered")
        self._patterns.append(pattern)
        for key in keys:
            self._keys[key.lower()] = pattern

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, name: str) -> Pattern | None:
        """Case-insensitive lookup; ``None`` when nothing matches."""
        return self._keys.get(name.strip().lower())

    def get(self, name: str) -> Pattern:
        """Like ``find`` but raises ``UnknownPatternError``."""
        pattern = self.find(name)
        if pattern is None:
            raise UnknownPatternError(name, self.names())
        return pattern

    def has(self, name: str) -> bool:
        return self.find(name) is not None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def all(self) -> list[Pattern]:
        """Each pattern once, in registration order."""
        return list(self._patterns)

    def names(self) -> list[str]:
        """Every registered key (canonical names and aliases)."""
        return [key for p in self._patterns for key in (p.name, *p.aliases)]


def _build_default_registry() -> PatternRegistry:
    registry = PatternRegistry()
    for pattern in (FORM_BASIC, TABLE_SIMPLE, PROGRESSIVE_DISCLOSURE, GUIDED_FLOW):
        registry.register(pattern)
    return registry


default_registry = _build_default_registry()


def get_pattern(name: str) -> Pattern:
    return default_registry.get(name)


def find_pattern(name: str) -> Pattern | None:
    return default_registry.find(name)


def get_all_patterns() -> list[Pattern]:
    return default_registry.all()


def list_pattern_names() -> list[str]:
    return default_registry.names()


def has_pattern(name: str) -> bool:
    return default_registry.has(name)


__all__ = [
    "PatternRegistry",
    "default_registry",
    "find_pattern",
    "get_all_patterns",
    "get_pattern",
    "has_pattern",
    "list_pattern_names",
]
