"""Recursive-descent parser producing syntax trees."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from minirdb.ast import (
    Asterisk,
    BinaryOp,
    BinaryOperator,
    ColumnDef,
    ColumnExpr,
    CreateTableStatement,
    DataType,
    Expr,
    InsertStatement,
    Literal,
    SelectColumn,
    SelectStatement,
    Statement,
    TableRef,
    UnaryOp,
    UnaryOperator,
)
from minirdb.lexer import Token, TokenKind, tokenize

T = TypeVar("T")

_EOF = Token(TokenKind.EOF)

_COMPARISON = {
    TokenKind.EQ: BinaryOperator.EQ,
    TokenKind.NE: BinaryOperator.NE,
    TokenKind.LT: BinaryOperator.LT,
    TokenKind.LE: BinaryOperator.LE,
    TokenKind.GT: BinaryOperator.GT,
    TokenKind.GE: BinaryOperator.GE,
}
_ADDITIVE = {TokenKind.PLUS: BinaryOperator.ADD, TokenKind.MINUS: BinaryOperator.SUB}
_MULTIPLICATIVE = {
    TokenKind.ASTERISK: BinaryOperator.MUL,
    TokenKind.SLASH: BinaryOperator.DIV,
}
_UNARY = {TokenKind.NOT: UnaryOperator.NOT, TokenKind.MINUS: UnaryOperator.NEG}
_DATA_TYPES = {TokenKind.INT: DataType.INT, TokenKind.VARCHAR: DataType.VARCHAR}
_CONSTANTS = {TokenKind.NULL: None, TokenKind.TRUE: True, TokenKind.FALSE: False}


class ParseError(Exception):
    """Raised when the tokens do not form a valid statement."""


class Parser:
    """Parses one statement from a token list."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else _EOF

    def _advance(self) -> Token:
        token = self._peek()
        self._pos += 1
        return token

    def _accept(self, kind: TokenKind) -> bool:
        if self._peek().kind is kind:
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind) -> Token:
        token = self._peek()
        if token.kind is not kind:
            raise ParseError(f"expected {kind.name}, got {token}")
        return self._advance()

    def _comma_list(self, parse_item: Callable[[], T]) -> list[T]:
        items = [parse_item()]
        while self._accept(TokenKind.COMMA):
            items.append(parse_item())
        return items

    def parse(self) -> Statement:
        """Parse a statement, consuming an optional trailing semicolon."""
        kind = self._peek().kind
        if kind is TokenKind.SELECT:
            stmt: Statement = self._parse_select()
        elif kind is TokenKind.INSERT:
            stmt = self._parse_insert()
        elif kind is TokenKind.CREATE:
            stmt = self._parse_create()
        else:
            raise ParseError(f"unexpected token: {self._peek()}")
        self._accept(TokenKind.SEMICOLON)
        return stmt

    def _parse_select(self) -> SelectStatement:
        self._expect(TokenKind.SELECT)
        columns = self._comma_list(self._parse_select_column)
        self._expect(TokenKind.FROM)
        table_ref = self._parse_table_ref()
        where_clause = self._parse_expr() if self._accept(TokenKind.WHERE) else None
        return SelectStatement(columns, table_ref, where_clause)

    def _parse_select_column(self) -> SelectColumn:
        if self._accept(TokenKind.ASTERISK):
            return Asterisk()
        return self._parse_expr()

    def _parse_insert(self) -> InsertStatement:
        self._expect(TokenKind.INSERT)
        self._expect(TokenKind.INTO)
        table = self._parse_ident()
        self._expect(TokenKind.VALUES)
        self._expect(TokenKind.LPAREN)
        values = self._comma_list(self._parse_expr)
        self._expect(TokenKind.RPAREN)
        return InsertStatement(table, values)

    def _parse_create(self) -> CreateTableStatement:
        self._expect(TokenKind.CREATE)
        self._expect(TokenKind.TABLE)
        table = self._parse_ident()
        self._expect(TokenKind.LPAREN)
        columns = self._comma_list(self._parse_column_def)
        self._expect(TokenKind.RPAREN)
        return CreateTableStatement(table, columns)

    def _parse_column_def(self) -> ColumnDef:
        name = self._parse_ident()
        return ColumnDef(name, self._parse_data_type())

    def _parse_data_type(self) -> DataType:
        data_type = _DATA_TYPES.get(self._peek().kind)
        if data_type is None:
            raise ParseError(f"expected data type, got {self._peek()}")
        self._advance()
        return data_type

    def _parse_ident(self) -> str:
        token = self._peek()
        if token.kind is not TokenKind.IDENT:
            raise ParseError(f"expected identifier, got {token}")
        self._advance()
        return str(token.value)

    def _parse_table_ref(self) -> TableRef:
        return TableRef(self._parse_ident())

    def _parse_expr(self) -> Expr:
        return self._parse_or()

    def _parse_or(self) -> Expr:
        left = self._parse_and()
        while self._accept(TokenKind.OR):
            left = BinaryOp(left, BinaryOperator.OR, self._parse_and())
        return left

    def _parse_and(self) -> Expr:
        left = self._parse_comparison()
        while self._accept(TokenKind.AND):
            left = BinaryOp(left, BinaryOperator.AND, self._parse_comparison())
        return left

    def _parse_comparison(self) -> Expr:
        left = self._parse_additive()
        op = _COMPARISON.get(self._peek().kind)
        if op is None:
            return left
        self._advance()
        return BinaryOp(left, op, self._parse_additive())

    def _parse_additive(self) -> Expr:
        left = self._parse_multiplicative()
        while (op := _ADDITIVE.get(self._peek().kind)) is not None:
            self._advance()
            left = BinaryOp(left, op, self._parse_multiplicative())
        return left

    def _parse_multiplicative(self) -> Expr:
        left = self._parse_unary()
        while (op := _MULTIPLICATIVE.get(self._peek().kind)) is not None:
            self._advance()
            left = BinaryOp(left, op, self._parse_unary())
        return left

    def _parse_unary(self) -> Expr:
        op = _UNARY.get(self._peek().kind)
        if op is None:
            return self._parse_primary()
        self._advance()
        return UnaryOp(op, self._parse_unary())

    def _parse_primary(self) -> Expr:
        token = self._peek()
        kind = token.kind
        if kind in (TokenKind.INTEGER, TokenKind.STRING):
            self._advance()
            return Literal(token.value)
        if kind in _CONSTANTS:
            self._advance()
            return Literal(_CONSTANTS[kind])
        if kind is TokenKind.IDENT:
            self._advance()
            return ColumnExpr(str(token.value))
        if kind is TokenKind.LPAREN:
            self._advance()
            expr = self._parse_expr()
            self._expect(TokenKind.RPAREN)
            return expr
        raise ParseError(f"unexpected token in expression: {token}")


def parse(sql: str) -> Statement:
    """Tokenize and parse one SQL statement."""
    return Parser(tokenize(sql)).parse()