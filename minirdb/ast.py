"""Syntax tree for the supported SQL statements."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

LiteralValue = Union[None, bool, int, str]


class DataType(enum.Enum):
    """Column type as written in a CREATE TABLE statement."""

    INT = "INT"
    VARCHAR = "VARCHAR"


class BinaryOperator(enum.Enum):
    EQ = "="
    NE = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    AND = "AND"
    OR = "OR"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class UnaryOperator(enum.Enum):
    NOT = "NOT"
    NEG = "-"


@dataclass(eq=False)
class Literal:
    """A constant: an integer, a string, a boolean, or None for NULL."""

    value: LiteralValue = None

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, (bool, int, str)):
            raise TypeError(f"unsupported literal type: {type(self.value).__name__}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        # TRUE and 1 are different literals even though Python equates them.
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


@dataclass
class ColumnExpr:
    """A reference to a column by name."""

    name: str


@dataclass
class BinaryOp:
    left: Expr
    op: BinaryOperator
    right: Expr


@dataclass
class UnaryOp:
    op: UnaryOperator
    expr: Expr


Expr = Union[Literal, ColumnExpr, BinaryOp, UnaryOp]


@dataclass
class Asterisk:
    """The '*' select item."""


SelectColumn = Union[Asterisk, Expr]


@dataclass
class TableRef:
    name: str
    alias: Optional[str] = None


@dataclass
class SelectStatement:
    columns: list[SelectColumn]
    from_table: TableRef
    where_clause: Optional[Expr] = None


@dataclass
class InsertStatement:
    table: str
    values: list[Expr] = field(default_factory=list)


@dataclass
class ColumnDef:
    name: str
    data_type: DataType


@dataclass
class CreateTableStatement:
    table: str
    columns: list[ColumnDef] = field(default_factory=list)


Statement = Union[SelectStatement, InsertStatement, CreateTableStatement]