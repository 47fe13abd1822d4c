"""Name resolution and type checking of parsed statements."""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union

from minirdb import ast
from minirdb.ast import BinaryOperator, UnaryOperator
from minirdb.catalog import Catalog
from minirdb.tuple import DataType

LiteralValue = Union[None, bool, int, str]

_BOOL_OPERATORS = frozenset(
    {
        BinaryOperator.EQ,
        BinaryOperator.NE,
        BinaryOperator.LT,
        BinaryOperator.LE,
        BinaryOperator.GT,
        BinaryOperator.GE,
        BinaryOperator.AND,
        BinaryOperator.OR,
    }
)

_AST_DATA_TYPES = {
    ast.DataType.INT: DataType.INT,
    ast.DataType.VARCHAR: DataType.VARCHAR,
}


class AnalysisError(Exception):
    """Raised when a statement refers to unknown names or has type errors."""


@dataclass(frozen=True)
class BaseTable:
    """A range table source that is a stored table."""

    table_id: int
    table_name: str


@dataclass(frozen=True)
class OutputColumn:
    name: str
    data_type: DataType
    nullable: bool


@dataclass
class RangeTableEntry:
    """A table-like object a query reads from."""

    rte_index: int
    source: BaseTable
    output_columns: list[OutputColumn] = field(default_factory=list)

    def get_column_index(self, name: str) -> Optional[int]:
        """Return the position of the named output column, or None."""
        return next(
            (i for i, column in enumerate(self.output_columns) if column.name == name),
            None,
        )


@dataclass
class AnalyzedLiteral:
    value: LiteralValue
    data_type: DataType


@dataclass
class AnalyzedColumnRef:
    rte_index: int
    column_index: int
    column_name: str
    data_type: DataType


@dataclass
class AnalyzedBinaryOp:
    left: AnalyzedExpr
    op: BinaryOperator
    right: AnalyzedExpr
    result_type: DataType

    @property
    def data_type(self) -> DataType:
        return self.result_type


@dataclass
class AnalyzedUnaryOp:
    op: UnaryOperator
    expr: AnalyzedExpr
    result_type: DataType

    @property
    def data_type(self) -> DataType:
        return self.result_type


AnalyzedExpr = Union[AnalyzedLiteral, AnalyzedColumnRef, AnalyzedBinaryOp, AnalyzedUnaryOp]


@dataclass
class AnalyzedSelectItem:
    expr: AnalyzedExpr
    alias: Optional[str] = None


@dataclass
class AnalyzedSelectStatement:
    range_table: list[RangeTableEntry]
    select_items: list[AnalyzedSelectItem]
    from_rte_index: int
    where_clause: Optional[AnalyzedExpr] = None


@dataclass
class AnalyzedInsertStatement:
    table_id: int
    table_name: str
    values: list[AnalyzedExpr]


@dataclass
class AnalyzedColumnDef:
    name: str
    data_type: DataType


@dataclass
class AnalyzedCreateTableStatement:
    table_name: str
    columns: list[AnalyzedColumnDef]


AnalyzedStatement = Union[
    AnalyzedSelectStatement, AnalyzedInsertStatement, AnalyzedCreateTableStatement
]


class Analyzer:
    """Resolves names against a catalog and infers expression types."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._range_table: list[RangeTableEntry] = []
        self._scopes: list[list[tuple[str, int]]] = []

    def analyze(self, stmt: ast.Statement) -> AnalyzedStatement:
        """Analyze one parsed statement."""
        if isinstance(stmt, ast.SelectStatement):
            return self._analyze_select(stmt)
        if isinstance(stmt, ast.InsertStatement):
            return self._analyze_insert(stmt)
        if isinstance(stmt, ast.CreateTableStatement):
            return self._analyze_create_table(stmt)
        raise TypeError(f"unsupported statement: {type(stmt).__name__}")

    def _add_rte(self, source: BaseTable, output_columns: list[OutputColumn]) -> int:
        rte_index = len(self._range_table)
        self._range_table.append(RangeTableEntry(rte_index, source, output_columns))
        return rte_index

    @contextlib.contextmanager
    def _scope(self) -> Iterator[list[tuple[str, int]]]:
        scope: list[tuple[str, int]] = []
        self._scopes.append(scope)
        try:
            yield scope
        finally:
            self._scopes.pop()

    def _analyze_select(self, stmt: ast.SelectStatement) -> AnalyzedSelectStatement:
        self._range_table.clear()

        table_ref = stmt.from_table
        table = self._catalog.get_table(table_ref.name)
        table_id = self._catalog.get_table_id(table_ref.name)
        if table is None or table_id is None:
            raise AnalysisError(f"table '{table_ref.name}' not found")

        output_columns = [
            OutputColumn(c.name, c.data_type, c.nullable) for c in table.columns
        ]
        rte_index = self._add_rte(BaseTable(table_id, table_ref.name), output_columns)

        with self._scope() as scope:
            scope.append((table_ref.alias or table_ref.name, rte_index))

            select_items: list[AnalyzedSelectItem] = []
            for column in stmt.columns:
                if isinstance(column, ast.Asterisk):
                    rte = self._range_table[rte_index]
                    select_items.extend(
                        AnalyzedSelectItem(
                            AnalyzedColumnRef(rte_index, index, out.name, out.data_type)
                        )
                        for index, out in enumerate(rte.output_columns)
                    )
                else:
                    select_items.append(AnalyzedSelectItem(self._analyze_expr(column)))

            where_clause = (
                self._analyze_expr(stmt.where_clause)
                if stmt.where_clause is not None
                else None
            )

        return AnalyzedSelectStatement(
            list(self._range_table), select_items, rte_index, where_clause
        )

    def _analyze_insert(self, stmt: ast.InsertStatement) -> AnalyzedInsertStatement:
        table = self._catalog.get_table(stmt.table)
        table_id = self._catalog.get_table_id(stmt.table)
        if table is None or table_id is None:
            raise AnalysisError(f"table '{stmt.table}' not found")

        if len(stmt.values) != len(table.columns):
            raise AnalysisError(
                f"INSERT has {len(stmt.values)} values but table has "
                f"{len(table.columns)} columns"
            )

        values: list[AnalyzedExpr] = []
        for column, value in zip(table.columns, stmt.values):
            analyzed = self._analyze_expr(value)
            if isinstance(analyzed, AnalyzedLiteral) and analyzed.value is None:
                if not column.nullable:
                    raise AnalysisError(f"column '{column.name}' is not nullable")
            elif analyzed.data_type is not column.data_type:
                raise AnalysisError(
                    f"type mismatch for column '{column.name}': expected "
                    f"{column.data_type.name}, got {analyzed.data_type.name}"
                )
            values.append(analyzed)

        return AnalyzedInsertStatement(table_id, stmt.table, values)

    def _analyze_create_table(
        self, stmt: ast.CreateTableStatement
    ) -> AnalyzedCreateTableStatement:
        if self._catalog.get_table(stmt.table) is not None:
            raise AnalysisError(f"table '{stmt.table}' already exists")
        columns = [
            AnalyzedColumnDef(c.name, _AST_DATA_TYPES[c.data_type]) for c in stmt.columns
        ]
        return AnalyzedCreateTableStatement(stmt.table, columns)

    def _analyze_expr(self, expr: ast.Expr) -> AnalyzedExpr:
        if isinstance(expr, ast.Literal):
            return self._analyze_literal(expr)
        if isinstance(expr, ast.ColumnExpr):
            return self._analyze_column(expr.name)
        if isinstance(expr, ast.BinaryOp):
            left = self._analyze_expr(expr.left)
            right = self._analyze_expr(expr.right)
            result = DataType.BOOL if expr.op in _BOOL_OPERATORS else DataType.INT
            return AnalyzedBinaryOp(left, expr.op, right, result)
        if isinstance(expr, ast.UnaryOp):
            operand = self._analyze_expr(expr.expr)
            result = DataType.BOOL if expr.op is UnaryOperator.NOT else DataType.INT
            return AnalyzedUnaryOp(expr.op, operand, result)
        raise TypeError(f"unsupported expression: {type(expr).__name__}")

    @staticmethod
    def _analyze_literal(literal: ast.Literal) -> AnalyzedLiteral:
        value = literal.value
        if isinstance(value, bool):
            return AnalyzedLiteral(value, DataType.BOOL)
        if isinstance(value, str):
            return AnalyzedLiteral(value, DataType.VARCHAR)
        # Integers, and NULL, whose type depends on context.
        return AnalyzedLiteral(value, DataType.INT)

    def _analyze_column(self, name: str) -> AnalyzedColumnRef:
        for scope in reversed(self._scopes):
            for _, rte_index in scope:
                rte = self._range_table[rte_index]
                index = rte.get_column_index(name)
                if index is not None:
                    column = rte.output_columns[index]
                    return AnalyzedColumnRef(rte_index, index, name, column.data_type)
        raise AnalysisError(f"column '{name}' not found")


def analyze(catalog: Catalog, stmt: ast.Statement) -> AnalyzedStatement:
    """Analyze a statement against a catalog."""
    return Analyzer(catalog).analyze(stmt)