"""Dump the introspected catalog as YAML, with the Go types each column maps to."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence, TextIO

import yaml

from .catalog import Table, open_pool, read_tables, redact_dsn
from .go_codegen.type_mapping import map_default, map_type
from .shared import GeneratorError, add_connection_arguments, resolve_config


def table_to_dict(table: Table) -> dict[str, Any]:
    return {
        "schema": table.schema,
        "name": table.name,
        "comment": table.comment,
        "columns": [
            {
                "name": column.name,
                "position": column.position,
                "native_type": column.native_type,
                "nullable": column.nullable,
                "default": column.default_expression,
                "character_max_length": column.character_max_length,
                "character_octet_length": column.character_octet_length,
                "numeric_precision": column.numeric_precision,
                "numeric_scale": column.numeric_scale,
                "charset_name": column.charset_name,
                "collation_name": column.collation_name,
                "comment": column.comment,
                "go_type": map_type(column.native_type, column.nullable),
                "go_default": map_default(
                    column.native_type, column.nullable, column.default_expression
                ),
            }
            for column in table.columns
        ],
    }


def dump_tables(tables: Sequence[Table], stream: TextIO | None = None) -> str:
    """Serialise ``tables`` as YAML, keeping catalog order.

    Writes to ``stream`` when given and always returns the text.
    """
    text = yaml.safe_dump(
        {"tables": [table_to_dict(table) for table in tables]},
        sort_keys=False,
        allow_unicode=True,
    )
    if stream is not None:
        stream.write(text)
    return text


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Print the tables and columns read from a PostgreSQL catalog as YAML",
    )
    add_connection_arguments(parser)
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
        print(f"Connecting to {redact_dsn(config.dsn)}", file=sys.stderr)
        with open_pool(config.dsn, config.pool) as engine:
            tables = read_tables(engine, config.schemas, verbose=args.verbose)
        dump_tables(tables, sys.stdout)
    except (GeneratorError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
