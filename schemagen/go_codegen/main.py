"""
Go Code Generator - Generates Go table records and accessors from a PostgreSQL catalog.

This module provides deterministic code generation with:
- A structured intermediate representation per table
- Template pre-compilation
- Atomic writes of the generated file
- Formatting through the external Go formatter
"""

from __future__ import annotations

import argparse
import json
import os
import tempfile
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..catalog import Table, open_pool, read_tables, redact_dsn
from ..formatter import format_go
from ..shared import (
    GeneratorError,
    OutputError,
    add_connection_arguments,
    resolve_config,
    tab_name,
    to_pascal_case,
    to_snake_case,
)
from ..shared.config import DEFAULT_FORMATTER, DEFAULT_OUTPUT, DEFAULT_PACKAGE
from .type_mapping import map_type

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class GoField:
    """One struct field, derived from a catalog column."""

    name: str
    column_name: str
    json_name: str
    go_type: str
    comment: str | None

    @property
    def column_literal(self) -> str:
        return _quote(self.column_name)

    @property
    def json_literal(self) -> str:
        return _quote(self.json_name)

    @property
    def trailing_comment(self) -> str:
        return f" // {self.comment}" if self.comment else ""


@dataclass(frozen=True, slots=True)
class GoTable:
    """Everything the templates need to render one table."""

    struct_name: str
    tab_name: str
    table_name: str
    qualified_name: str
    comment: str | None
    fields: tuple[GoField, ...]

    @property
    def doc(self) -> str:
        doc = f"{self.struct_name} {self.table_name}"
        return f"{doc} {self.comment}" if self.comment else doc

    @property
    def qualified_literal(self) -> str:
        return _quote(self.qualified_name)

    @property
    def trailing_comment(self) -> str:
        return f" // {self.comment}" if self.comment else ""

    @property
    def column_list_literal(self) -> str:
        names = ", ".join(f.column_literal for f in self.fields)
        return f"[]string{{{names}}}"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        # Pre-compile templates
        self._source_template = self.template_env.get_template("tables.go.j2")

    @property
    def source_template(self):
        return self._source_template


@lru_cache(maxsize=1024)
def _quote(value: str) -> str:
    """Quote a string as a Go literal. Cached for performance."""
    return json.dumps(value, ensure_ascii=False)


def build_table(table: Table) -> GoTable:
    """Build the template IR for a table, keeping column order."""
    struct_name = to_pascal_case(table.name)
    fields = tuple(
        GoField(
            name=to_pascal_case(column.name),
            column_name=column.name,
            json_name=to_snake_case(column.name),
            go_type=map_type(column.native_type, column.nullable),
            comment=column.comment or None,
        )
        for column in table.columns
    )
    return GoTable(
        struct_name=struct_name,
        tab_name=tab_name(struct_name),
        table_name=table.name,
        qualified_name=table.qualified_name,
        comment=table.comment or None,
        fields=fields,
    )


def render_source(
    tables: Sequence[Table],
    package: str,
    ctx: GeneratorContext | None = None,
) -> str:
    """Render the Go source for ``tables`` in the given order.

    Raises:
        OutputError: If two tables map to the same Go type name.
    """
    ctx = ctx or GeneratorContext()
    go_tables = [build_table(table) for table in tables]
    _check_unique_types(go_tables)
    return ctx.source_template.render(package=package, tables=go_tables)


def _check_unique_types(tables: Sequence[GoTable]) -> None:
    seen: dict[str, str] = {}
    for table in tables:
        first = seen.setdefault(table.struct_name, table.qualified_name)
        if first != table.qualified_name:
            raise OutputError(
                f"Tables {first} and {table.qualified_name} both map to "
                f"Go type '{table.struct_name}'"
            )


def write_source(path: Path, content: str) -> Path:
    """Atomically write ``content`` to ``path``, creating parent directories.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    path = Path(path)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"Failed to write generated source: {e}", str(path)) from e
    return path


def generate(
    tables: Sequence[Table],
    package: str,
    output: Path,
    *,
    formatter: Sequence[str] = DEFAULT_FORMATTER,
    format_output: bool = True,
) -> Path:
    """Render, write and format the Go source for ``tables``.

    Args:
        tables: Introspected tables, already in catalog order.
        package: Go package name for the generated file.
        output: Destination file path.
        formatter: Formatter command; the file path is appended.
        format_output: Whether to run the formatter after writing.

    Returns:
        The path written.

    Raises:
        OutputError: If the file cannot be written.
        FormatError: If the formatter fails.
    """
    content = render_source(tables, package)
    path = write_source(output, content)
    if format_output:
        format_go(path, command=formatter)
    return path


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Go table records and accessors from a PostgreSQL catalog",
    )
    add_connection_arguments(parser)
    parser.add_argument(
        "-p",
        "--package",
        default=None,
        help=f"Go package name of the generated file (default: {DEFAULT_PACKAGE})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"Output .go file path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--formatter",
        default=None,
        help="Formatter command run on the output file (default: 'gofmt -w')",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Write the generated file without running the formatter",
    )

    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)

        print(f"Connecting to {redact_dsn(config.dsn)}")
        with open_pool(config.dsn, config.pool) as engine:
            tables = read_tables(engine, config.schemas, verbose=args.verbose)

        path = generate(
            tables,
            config.package,
            config.output,
            formatter=config.formatter,
            format_output=not args.no_format,
        )

        print(
            f"Generated {len(tables)} table type(s) from "
            f"schema(s) {', '.join(config.schemas)} into {path}"
        )
    except (GeneratorError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
