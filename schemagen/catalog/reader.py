"""Catalog Reader - Reads base tables, columns and comments from PostgreSQL.

All queries for one run share a single pooled connection and execute
sequentially: the table list first, then per table its comment, its columns
and each column's comment. Any query failure aborts the whole read.
"""

from __future__ import annotations

import sys
from typing import Any, Final, Iterable, Mapping

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..shared.errors import CatalogError
from .models import Column, Table

TABLES_SQL: Final = text(
    "SELECT table_schema, table_name"
    " FROM information_schema.tables"
    " WHERE table_schema IN :schemas AND table_type = 'BASE TABLE'"
    " ORDER BY table_name ASC, table_schema ASC"
).bindparams(bindparam("schemas", expanding=True))

TABLE_COMMENT_SQL: Final = text(
    "SELECT CAST(obj_description(c.oid, 'pg_class') AS VARCHAR) AS table_comment"
    " FROM pg_class c"
    " JOIN pg_namespace n ON n.oid = c.relnamespace"
    " WHERE n.nspname = :schema AND c.relname = :table"
    " LIMIT 1"
)

COLUMNS_SQL: Final = text(
    "SELECT table_schema, table_name, column_name, ordinal_position,"
    " column_default, is_nullable, data_type, character_maximum_length,"
    " character_octet_length, numeric_precision, numeric_scale,"
    " character_set_name, collation_name"
    " FROM information_schema.columns"
    " WHERE table_schema = :schema AND table_name = :table"
    " ORDER BY ordinal_position ASC"
)

COLUMN_COMMENT_SQL: Final = text(
    "SELECT d.description AS column_comment"
    " FROM pg_class c"
    " JOIN pg_namespace n ON n.oid = c.relnamespace"
    " JOIN pg_attribute a ON a.attrelid = c.oid"
    " JOIN pg_description d ON d.objoid = c.oid AND d.objsubid = a.attnum"
    " WHERE n.nspname = :schema AND c.relname = :table"
    " AND a.attname = :column AND a.attnum > 0"
    " ORDER BY a.attnum ASC"
    " LIMIT 1"
)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _is_nullable(value: Any) -> bool:
    if value is None:
        return True
    return str(value).strip().lower() != "no"


def _describe(error: SQLAlchemyError) -> str:
    # DBAPIError.__str__ repeats the statement; the driver message is enough.
    orig = getattr(error, "orig", None)
    return str(orig).strip() if orig is not None else str(error)


def read_table_comment(conn: Connection, schema: str, table: str) -> str | None:
    """Return the comment on ``schema.table``, or None if it has none."""
    value = conn.execute(TABLE_COMMENT_SQL, {"schema": schema, "table": table}).scalar()
    return _optional_str(value)


def read_column_comment(
    conn: Connection, schema: str, table: str, column: str
) -> str | None:
    """Return the comment on one column, or None if it has none."""
    value = conn.execute(
        COLUMN_COMMENT_SQL,
        {"schema": schema, "table": table, "column": column},
    ).scalar()
    return _optional_str(value)


def _build_column(row: Mapping[str, Any], comment: str | None) -> Column:
    return Column(
        schema=str(row["table_schema"] or ""),
        table_name=str(row["table_name"] or ""),
        name=str(row["column_name"]),
        position=int(row["ordinal_position"]),
        default_expression=_optional_str(row["column_default"]),
        nullable=_is_nullable(row["is_nullable"]),
        native_type=str(row["data_type"] or ""),
        character_max_length=_optional_int(row["character_maximum_length"]),
        character_octet_length=_optional_int(row["character_octet_length"]),
        numeric_precision=_optional_int(row["numeric_precision"]),
        numeric_scale=_optional_int(row["numeric_scale"]),
        charset_name=_optional_str(row["character_set_name"]),
        collation_name=_optional_str(row["collation_name"]),
        comment=comment,
    )


def read_columns(
    conn: Connection,
    schema: str,
    table: str,
    *,
    verbose: bool = False,
) -> list[Column]:
    """Read the columns of ``schema.table`` in ordinal order.

    Rows with an unreadable column name are skipped.
    """
    rows = conn.execute(COLUMNS_SQL, {"schema": schema, "table": table}).mappings().all()

    columns: list[Column] = []
    for row in rows:
        name = row["column_name"]
        if not name:
            if verbose:
                print(f"  Skipping column with unreadable name in {schema}.{table}", file=sys.stderr)
            continue
        comment = read_column_comment(conn, schema, table, str(name))
        columns.append(_build_column(row, comment))

    return columns


def _read_tables(conn: Connection, schemas: list[str], verbose: bool) -> list[Table]:
    rows = conn.execute(TABLES_SQL, {"schemas": schemas}).mappings().all()

    tables: list[Table] = []
    for row in rows:
        schema = str(row["table_schema"] or "")
        name = row["table_name"]
        if not name:
            if verbose:
                print(f"  Skipping table with unreadable name in schema '{schema}'", file=sys.stderr)
            continue
        name = str(name)

        comment = read_table_comment(conn, schema, name)
        columns = read_columns(conn, schema, name, verbose=verbose)
        if not columns:
            if verbose:
                print(f"  Skipping {schema}.{name}: no readable columns", file=sys.stderr)
            continue

        if verbose:
            print(f"  Read {schema}.{name} ({len(columns)} column(s))", file=sys.stderr)
        tables.append(
            Table(schema=schema, name=name, comment=comment, columns=tuple(columns))
        )

    return tables


def read_tables(
    engine: Engine,
    schemas: Iterable[str],
    *,
    verbose: bool = False,
) -> list[Table]:
    """Read every base table in ``schemas``, ordered by table name.

    Args:
        engine: Connection pool to borrow a connection from.
        schemas: Schema names to read. An empty list reads nothing.
        verbose: Print one line per table read and per skipped row.

    Returns:
        Tables in table-name order, each with its columns in ordinal order.

    Raises:
        CatalogError: If connecting or any catalog query fails.
    """
    schema_list = list(schemas)
    if not schema_list:
        return []

    source = engine.url.render_as_string(hide_password=True)
    try:
        with engine.connect() as conn:
            return _read_tables(conn, schema_list, verbose)
    except SQLAlchemyError as e:
        raise CatalogError(f"Catalog query failed: {_describe(e)}", source) from e
