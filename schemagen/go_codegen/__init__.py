"""Go Code Generator - Generates Go table records and accessors from a PostgreSQL catalog."""

from .main import (
    GoField,
    GoTable,
    GeneratorContext,
    build_table,
    render_source,
    write_source,
    generate,
)
from .type_mapping import (
    DEFAULT_GO_TYPES,
    map_default,
    map_type,
)

__all__ = [
    "GoField",
    "GoTable",
    "GeneratorContext",
    "build_table",
    "render_source",
    "write_source",
    "generate",
    "DEFAULT_GO_TYPES",
    "map_default",
    "map_type",
]
