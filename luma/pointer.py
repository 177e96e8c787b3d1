"""RFC 6901 JSON Pointer helpers used to locate issues in a scaffold.

A pointer is the ordered path of slot names and child indices from the
screen root, e.g. ``/screen/root/children/1/actions/0``.
"""

from __future__ import annotations

from typing import Any, Sequence


def _encode_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _decode_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def build_pointer(segments: Sequence[str | int]) -> str:
    """Build a pointer from path segments (``[]`` -> ``""``)."""
    if not segments:
        return ""
    return "/" + "/".join(_encode_token(str(s)) for s in segments)


def join_pointer(base: str, *segments: str | int) -> str:
    """Append *segments* to an existing pointer."""
    return base + build_pointer(segments)


def parse_pointer(pointer: str) -> list[str]:
    """Split a pointer into decoded segments.

    Raises ``ValueError`` for a non-empty pointer not starting with ``/``.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer {pointer!r}: must start with '/'")
    return [_decode_token(t) for t in pointer[1:].split("/")]


def resolve_pointer(obj: Any, pointer: str) -> Any:
    """Resolve *pointer* against nested dicts/lists; ``None`` if absent."""
    current = obj
    for segment in parse_pointer(pointer):
        if isinstance(current, dict):
            current = current.get(segment)
        elif isinstance(current, (list, tuple)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
        if current is None:
            return None
    return current


__all__ = [
    "build_pointer",
    "join_pointer",
    "parse_pointer",
    "resolve_pointer",
]
