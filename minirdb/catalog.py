"""Table definitions known to the database."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from minirdb.tuple import Column, DataType, Schema


@dataclass(frozen=True)
class CatalogColumn:
    """A column definition with its nullability."""

    name: str
    data_type: DataType
    nullable: bool


@dataclass
class TableDef:
    """The definition of a table: its name and ordered columns."""

    name: str
    columns: list[CatalogColumn] = field(default_factory=list)

    def get_column(self, name: str) -> Optional[CatalogColumn]:
        """Return the column with this name, or None."""
        return next((column for column in self.columns if column.name == name), None)

    def get_column_id(self, name: str) -> Optional[int]:
        """Return the position of the column with this name, or None."""
        return next(
            (index for index, column in enumerate(self.columns) if column.name == name),
            None,
        )

    def to_schema(self) -> Schema:
        """Return the storage schema for rows of this table."""
        return Schema([Column(column.name, column.data_type) for column in self.columns])


def _default_tables() -> list[TableDef]:
    return [
        TableDef(
            "users",
            [
                CatalogColumn("id", DataType.INT, nullable=False),
                CatalogColumn("name", DataType.VARCHAR, nullable=True),
            ],
        )
    ]


class Catalog:
    """Holds table definitions; by default the fixed users(id INT, name VARCHAR)."""

    def __init__(self, tables: Optional[Iterable[TableDef]] = None) -> None:
        self._tables = list(tables) if tables is not None else _default_tables()

    def get_table(self, name: str) -> Optional[TableDef]:
        """Return the table with this name, or None."""
        return next((table for table in self._tables if table.name == name), None)

    def get_table_id(self, name: str) -> Optional[int]:
        """Return the id of the table with this name, or None."""
        return next(
            (index for index, table in enumerate(self._tables) if table.name == name),
            None,
        )

    def get_table_by_id(self, table_id: int) -> Optional[TableDef]:
        """Return the table with this id, or None."""
        if 0 <= table_id < len(self._tables):
            return self._tables[table_id]
        return None