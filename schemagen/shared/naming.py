"""Naming utilities for code generation.

Catalog identifiers are snake_case; generated Go identifiers are PascalCase.
The two conversions are near-inverses only: ``to_snake_case`` collapses a run
of capitals into a single word, so ``to_snake_case("HTTPServer")`` gives
``"httpserver"`` and converting back yields ``"Httpserver"``.
"""

from __future__ import annotations

from functools import lru_cache

ACCESSOR_PREFIX = "Tab"


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a snake_case identifier to PascalCase.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("user_name")
        'UserName'
        >>> to_pascal_case("user_ID")
        'UserID'
        >>> to_pascal_case("__x1_y")
        'X1Y'
    """
    out: list[str] = []
    upper_next = True
    for ch in value:
        if ch == "_":
            upper_next = True
            continue
        if upper_next and _is_lower(ch):
            out.append(ch.upper())
        else:
            out.append(ch)
        upper_next = False
    return "".join(out)


@lru_cache(maxsize=1024)
def to_snake_case(value: str) -> str:
    """Convert a PascalCase identifier to snake_case.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_snake_case("UserName")
        'user_name'
        >>> to_snake_case("userID")
        'user_id'
        >>> to_snake_case("_Private")
        '_private'
    """
    out: list[str] = []
    started = False
    prev = ""
    for i, ch in enumerate(value):
        if i > 0 and started and _is_upper(ch) and not _is_upper(prev):
            out.append("_")
        if ch != "_":
            started = True
        out.append(ch)
        prev = ch
    return "".join(out).lower()


@lru_cache(maxsize=1024)
def tab_name(name: str) -> str:
    """Name of the generated accessor type for a PascalCase record name."""
    return f"{ACCESSOR_PREFIX}{name}"
