import pytest

from minirdb.lexer import LexError, Lexer, Token, TokenKind, tokenize


def kinds(text):
    return [token.kind for token in tokenize(text)]


def test_simple_select():
    assert tokenize("SELECT * FROM users") == [
        Token(TokenKind.SELECT),
        Token(TokenKind.ASTERISK),
        Token(TokenKind.FROM),
        Token(TokenKind.IDENT, "users"),
        Token(TokenKind.EOF),
    ]


def test_empty_input_gives_only_eof():
    assert tokenize("   \n\t ") == [Token(TokenKind.EOF)]


def test_keywords_are_case_insensitive():
    assert kinds("select From wHeRe") == [
        TokenKind.SELECT,
        TokenKind.FROM,
        TokenKind.WHERE,
        TokenKind.EOF,
    ]


def test_integer_is_alias_for_int():
    assert kinds("INT integer") == [TokenKind.INT, TokenKind.INT, TokenKind.EOF]


def test_identifier_keeps_original_case():
    assert tokenize("UserName_1")[0] == Token(TokenKind.IDENT, "UserName_1")


def test_comparison_operators():
    assert kinds("= <> < <= > >=") == [
        TokenKind.EQ,
        TokenKind.NE,
        TokenKind.LT,
        TokenKind.LE,
        TokenKind.GT,
        TokenKind.GE,
        TokenKind.EOF,
    ]


def test_symbols():
    assert kinds("*,;()+-/") == [
        TokenKind.ASTERISK,
        TokenKind.COMMA,
        TokenKind.SEMICOLON,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.SLASH,
        TokenKind.EOF,
    ]


def test_string_and_number_literals():
    tokens = Lexer("INSERT INTO users VALUES (1, 'Alice')").tokenize()
    assert Token(TokenKind.INTEGER, 1) in tokens
    assert Token(TokenKind.STRING, "Alice") in tokens


def test_string_keeps_spaces_and_keywords():
    assert tokenize("'select from'")[0] == Token(TokenKind.STRING, "select from")


def test_boolean_and_null_keywords():
    assert kinds("TRUE FALSE NULL NOT AND OR") == [
        TokenKind.TRUE,
        TokenKind.FALSE,
        TokenKind.NULL,
        TokenKind.NOT,
        TokenKind.AND,
        TokenKind.OR,
        TokenKind.EOF,
    ]


def test_unterminated_string():
    with pytest.raises(LexError, match="unterminated"):
        tokenize("SELECT 'abc")


def test_unexpected_character():
    with pytest.raises(LexError, match="unexpected character"):
        tokenize("SELECT !")


def test_integer_overflow():
    with pytest.raises(LexError):
        tokenize("99999999999999999999")


def test_largest_integer_accepted():
    assert tokenize(str(2**63 - 1))[0] == Token(TokenKind.INTEGER, 2**63 - 1)


def test_token_str_shows_value():
    assert "users" in str(Token(TokenKind.IDENT, "users"))
    assert str(Token(TokenKind.FROM)) == "FROM"