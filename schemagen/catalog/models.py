"""Immutable snapshots of catalog tables and columns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Column:
    """One row of ``information_schema.columns`` plus its comment."""

    schema: str
    table_name: str
    name: str
    position: int
    default_expression: str | None
    nullable: bool
    native_type: str
    character_max_length: int | None = None
    character_octet_length: int | None = None
    numeric_precision: int | None = None
    numeric_scale: int | None = None
    charset_name: str | None = None
    collation_name: str | None = None
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class Table:
    """A base table and its columns in ordinal order."""

    schema: str
    name: str
    comment: str | None = None
    columns: tuple[Column, ...] = ()

    @property
    def qualified_name(self) -> str:
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]
