"""Tokenizer for the SQL dialect."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

_I64_MAX = 2**63 - 1
_DIGITS = "0123456789"


class LexError(Exception):
    """Raised when the input cannot be split into tokens."""


class TokenKind(enum.Enum):
    SELECT = "SELECT"
    FROM = "FROM"
    WHERE = "WHERE"
    INSERT = "INSERT"
    INTO = "INTO"
    VALUES = "VALUES"
    CREATE = "CREATE"
    TABLE = "TABLE"
    INT = "INT"
    VARCHAR = "VARCHAR"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    NULL = "NULL"
    TRUE = "TRUE"
    FALSE = "FALSE"

    IDENT = "identifier"
    INTEGER = "integer"
    STRING = "string"

    ASTERISK = "*"
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    EQ = "="
    NE = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    PLUS = "+"
    MINUS = "-"
    SLASH = "/"

    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """A token; identifiers, integers and strings carry a value."""

    kind: TokenKind
    value: Union[None, int, str] = None

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.name
        return f"{self.kind.name}({self.value!r})"


_KEYWORDS = {
    "SELECT": TokenKind.SELECT,
    "FROM": TokenKind.FROM,
    "WHERE": TokenKind.WHERE,
    "INSERT": TokenKind.INSERT,
    "INTO": TokenKind.INTO,
    "VALUES": TokenKind.VALUES,
    "CREATE": TokenKind.CREATE,
    "TABLE": TokenKind.TABLE,
    "INT": TokenKind.INT,
    "INTEGER": TokenKind.INT,
    "VARCHAR": TokenKind.VARCHAR,
    "AND": TokenKind.AND,
    "OR": TokenKind.OR,
    "NOT": TokenKind.NOT,
    "NULL": TokenKind.NULL,
    "TRUE": TokenKind.TRUE,
    "FALSE": TokenKind.FALSE,
}

_SINGLE = {
    "*": TokenKind.ASTERISK,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "/": TokenKind.SLASH,
    "=": TokenKind.EQ,
}


def _is_ident_start(ch: str) -> bool:
    return (ch.isascii() and ch.isalpha()) or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return (ch.isascii() and ch.isalnum()) or ch == "_"


class Lexer:
    """Splits SQL text into tokens."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _take_while(self, predicate) -> str:
        start = self._pos
        while self._pos < len(self._text) and predicate(self._text[self._pos]):
            self._pos += 1
        return self._text[start : self._pos]

    def tokenize(self) -> list[Token]:
        """Return all tokens, ending with an EOF token."""
        tokens: list[Token] = []
        while True:
            token = self._next_token()
            tokens.append(token)
            if token.kind is TokenKind.EOF:
                return tokens

    def _next_token(self) -> Token:
        self._take_while(str.isspace)
        ch = self._peek()
        if not ch:
            return Token(TokenKind.EOF)

        if ch in _SINGLE:
            self._pos += 1
            return Token(_SINGLE[ch])
        if ch == "<":
            self._pos += 1
            if self._peek() == "=":
                self._pos += 1
                return Token(TokenKind.LE)
            if self._peek() == ">":
                self._pos += 1
                return Token(TokenKind.NE)
            return Token(TokenKind.LT)
        if ch == ">":
            self._pos += 1
            if self._peek() == "=":
                self._pos += 1
                return Token(TokenKind.GE)
            return Token(TokenKind.GT)
        if ch == "'":
            return self._read_string()
        if ch in _DIGITS:
            return self._read_number()
        if _is_ident_start(ch):
            return self._read_ident_or_keyword()
        raise LexError(f"unexpected character: {ch}")

    def _read_string(self) -> Token:
        end = self._text.find("'", self._pos + 1)
        if end < 0:
            raise LexError("unterminated string literal")
        value = self._text[self._pos + 1 : end]
        self._pos = end + 1
        return Token(TokenKind.STRING, value)

    def _read_number(self) -> Token:
        digits = self._take_while(lambda c: c in _DIGITS)
        number = int(digits)
        if number > _I64_MAX:
            raise LexError(f"number too large: {digits}")
        return Token(TokenKind.INTEGER, number)

    def _read_ident_or_keyword(self) -> Token:
        word = self._take_while(_is_ident_char)
        kind = _KEYWORDS.get(word.upper())
        if kind is not None:
            return Token(kind)
        return Token(TokenKind.IDENT, word)


def tokenize(text: str) -> list[Token]:
    """Tokenize SQL text."""
    return Lexer(text).tokenize()