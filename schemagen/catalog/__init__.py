"""Catalog introspection - tables, columns and comments from PostgreSQL."""

from .models import Column, Table
from .pool import create_pool, normalize_dsn, open_pool, redact_dsn
from .reader import (
    read_column_comment,
    read_columns,
    read_table_comment,
    read_tables,
)

__all__ = [
    "Column",
    "Table",
    "create_pool",
    "normalize_dsn",
    "open_pool",
    "redact_dsn",
    "read_column_comment",
    "read_columns",
    "read_table_comment",
    "read_tables",
]
