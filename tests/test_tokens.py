"""Test the operator table and the Token value type."""

from picocalc.tokens import OPERATORS, Associativity, Token, TokenType, is_digit, is_operator


class TestOperatorTable:
    def test_additive_operators(self):
        for tt in (TokenType.ADD, TokenType.SUBTRACT):
            assert OPERATORS[tt].precedence == 1
            assert OPERATORS[tt].associativity == Associativity.LEFT

    def test_multiplicative_operators(self):
        for tt in (TokenType.MULTIPLY, TokenType.DIVIDE):
            assert OPERATORS[tt].precedence == 2
            assert OPERATORS[tt].associativity == Associativity.LEFT

    def test_power_binds_tightest_and_right(self):
        info = OPERATORS[TokenType.POWER]
        assert info.precedence == 3
        assert info.associativity == Associativity.RIGHT

    def test_table_is_read_only(self):
        try:
            OPERATORS[TokenType.NUMBER] = OPERATORS[TokenType.ADD]  # type: ignore[index]
        except TypeError:
            pass
        else:
            raise AssertionError("operator table accepted an assignment")


class TestIsOperator:
    def test_operators(self):
        for tt in (
            TokenType.ADD,
            TokenType.SUBTRACT,
            TokenType.MULTIPLY,
            TokenType.DIVIDE,
            TokenType.POWER,
        ):
            assert is_operator(tt)

    def test_non_operators(self):
        for tt in (
            TokenType.NUMBER,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.ILLEGAL,
            TokenType.EOF,
        ):
            assert not is_operator(tt)


class TestToken:
    def test_lexeme_is_view_of_source(self):
        tok = Token(TokenType.NUMBER, 4, 3, "1 + 234")
        assert tok.lexeme == "234"
        assert tok.end == 7

    def test_eof_lexeme_is_empty(self):
        tok = Token(TokenType.EOF, 5, 0, "1 + 2")
        assert tok.lexeme == ""

    def test_source_excluded_from_repr(self):
        tok = Token(TokenType.ADD, 0, 1, "+ secret")
        assert "secret" not in repr(tok)


class TestIsDigit:
    def test_ascii_digits(self):
        assert all(is_digit(ch) for ch in "0123456789")

    def test_rejects_other_characters(self):
        assert not is_digit("")
        assert not is_digit("a")
        assert not is_digit(".")
        assert not is_digit("٣")  # ARABIC-INDIC DIGIT THREE
