"""Type Mapper - PostgreSQL type names to Go types and default literals.

Default literals come from a best-effort heuristic over the raw
``column_default`` text; it is not a SQL expression evaluator and it never
raises.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Final

GO_NIL: Final[str] = "nil"
GO_EMPTY_STRING: Final[str] = '""'
FALLBACK_GO_TYPE: Final[str] = "string"

# Keys are lower-cased information_schema data_type values
DEFAULT_GO_TYPES: Final[dict[str, str]] = {
    "smallint": "int16",
    "smallserial": "int16",
    "integer": "int",
    "serial": "int",
    "bigint": "int64",
    "bigserial": "int64",
    "decimal": "float64",
    "numeric": "float64",
    "real": "float64",
    "double precision": "float64",
    "double": "float64",
    "char": "string",
    "character": "string",
    "character varying": "string",
    "text": "string",
    "varchar": "string",
    "enum": "string",
    "bool": "bool",
    "boolean": "bool",
}

_DIGIT = re.compile(r"\d")
_SEQUENCE_MARKER = "nextval("
_STRING_MARKERS: Final[tuple[str, ...]] = ("char", "text")


@lru_cache(maxsize=256)
def map_type(native_type: str | None, nullable: bool) -> str:
    """Resolve the Go type for a column.

    Nullable columns always get the pointer form.

    Examples:
        >>> map_type("INTEGER", False)
        'int'
        >>> map_type("character varying", True)
        '*string'
        >>> map_type("tsvector", False)
        'string'
    """
    key = str(native_type or "").strip().lower()
    go_type = DEFAULT_GO_TYPES.get(key, FALLBACK_GO_TYPE)
    return f"*{go_type}" if nullable else go_type


def is_numeric(go_type: str) -> bool:
    return "int" in go_type or "float" in go_type


def map_default(
    native_type: str | None,
    nullable: bool,
    default_expression: str | None,
) -> str:
    """Derive a Go literal from a column's SQL default expression.

    Rules, first match wins:

    - no default: ``nil``
    - numeric type with a digit in the default: ``0`` for a ``nextval(``
      sequence, otherwise the expression verbatim
    - any other ``nextval(`` default: ``0``
    - defaults mentioning ``char`` or ``text`` (quoted, cast string
      literals): ``""``
    - otherwise the lower-cased expression, with ``null`` becoming ``nil``
    """
    if default_expression is None:
        return GO_NIL

    expression = str(default_expression)
    if is_numeric(map_type(native_type, nullable)) and _DIGIT.search(expression):
        if _SEQUENCE_MARKER in expression:
            return "0"
        return expression

    if _SEQUENCE_MARKER in expression:
        return "0"

    if any(marker in expression for marker in _STRING_MARKERS):
        return GO_EMPTY_STRING

    literal = expression.lower()
    if literal == "null":
        return GO_NIL
    return literal
