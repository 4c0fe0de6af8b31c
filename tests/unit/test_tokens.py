"""Tests for keypad token classification."""

import pytest

from pocket_calculator.core.tokens import Operator, Token, TokenKind, classify_token


class TestClassifyToken:
    """Tests for classify_token."""

    @pytest.mark.parametrize("key", list("0123456789"))
    def test_digits(self, key: str) -> None:
        """Test every digit is a DIGIT."""
        token = classify_token(key)

        assert token.kind == TokenKind.DIGIT
        assert token.text == key
        assert token.operator is None

    def test_double_zero(self) -> None:
        """Test 00 is its own kind."""
        assert classify_token("00").kind == TokenKind.DOUBLE_ZERO

    @pytest.mark.parametrize(
        "key,operator",
        [
            ("+", Operator.PLUS),
            ("-", Operator.MINUS),
            ("*", Operator.TIMES),
            ("/", Operator.DIVIDE),
            ("=", Operator.EQUALS),
        ],
    )
    def test_operators(self, key: str, operator: Operator) -> None:
        """Test operator keys carry their Operator."""
        token = classify_token(key)

        assert token.kind == TokenKind.OPERATOR
        assert token.operator == operator

    def test_point(self) -> None:
        """Test the decimal point."""
        assert classify_token(".").kind == TokenKind.POINT

    def test_clear(self) -> None:
        """Test the clear key is case sensitive."""
        assert classify_token("C").kind == TokenKind.CLEAR
        assert classify_token("c").kind == TokenKind.UNKNOWN

    @pytest.mark.parametrize("key", ["", "x", "000", "12", "++", "%", "0.", "=="])
    def test_unknown(self, key: str) -> None:
        """Test anything else is UNKNOWN."""
        assert classify_token(key).kind == TokenKind.UNKNOWN

    def test_str(self) -> None:
        """Test token string form."""
        assert str(Token(TokenKind.DIGIT, "7")) == "digit:'7'"
