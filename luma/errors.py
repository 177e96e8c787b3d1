"""Analysis core error hierarchy.

Every error carries typed fields (not just a message string),
supports ``to_dict()`` for serialisation into a diagnostics payload,
and has a readable ``__str__`` for logging.

Rule-check failures are never raised -- they are ``Issue`` records.
Only configuration mistakes and upstream contract violations surface
as exceptions.
"""

from __future__ import annotations


class LumaError(Exception):
    """Base error for all analysis core failures."""

    def __init__(self, message: str, *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "message": self.message, **self.detail}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigurationError(LumaError):
    """Caller-supplied configuration is invalid (fatal, never corrected)."""


class InvalidWeightsError(ConfigurationError):
    """Category weights are negative or do not sum to 1.0."""

    def __init__(self, weights: dict[str, float], total: float, *, reason: str | None = None) -> None:
        self.weights = weights
        self.total = total
        self.reason = reason or ""

        if reason:
            msg = f"Invalid score weights: {reason}"
        else:
            msg = f"Score weights must sum to 1.0 (got {total})"

        detail: dict = {"weights": weights, "total": total}
        if reason:
            detail["reason"] = reason

        super().__init__(msg, detail=detail)


class UnknownPatternError(ConfigurationError):
    """Requested pattern name is not registered."""

    def __init__(self, pattern_name: str, available_patterns: list[str]) -> None:
        self.pattern_name = pattern_name
        self.available_patterns = available_patterns
        super().__init__(
            f"Pattern '{pattern_name}' not found. Available: {', '.join(available_patterns)}",
            detail={"pattern_name": pattern_name, "available_patterns": available_patterns},
        )


# ---------------------------------------------------------------------------
# Traversal errors
# ---------------------------------------------------------------------------


class TraversalError(LumaError):
    """The node tree violates the upstream ingest contract."""


class UnknownNodeKindError(TraversalError):
    """A node outside the recognised variant set was reached during traversal."""

    def __init__(self, node_id: str, kind: str, pointer: str = "") -> None:
        self.node_id = node_id
        self.kind = kind
        self.pointer = pointer
        msg = f"Unrecognised node kind '{kind}' for node '{node_id}'"
        if pointer:
            msg += f" at {pointer}"
        super().__init__(
            msg,
            detail={"node_id": node_id, "kind": kind, "pointer": pointer},
        )
