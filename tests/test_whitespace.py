"""Test that whitespace separates tokens but never appears in the stream."""

import pytest

from monkeylex.lexer import tokenize
from monkeylex.tokens import TokenType

from .conftest import assert_types


class TestTransparency:
    def test_operator_spacing(self):
        assert tokenize("x+y") == tokenize("x + y")

    @pytest.mark.parametrize("ws", [" ", "   ", "\t", "\n", "\r\n", " \t\r\n "])
    def test_kind_of_whitespace(self, ws):
        spaced = ws.join(["let", "x", "=", "5", ";"])
        assert tokenize(spaced) == tokenize("let x = 5;")

    def test_leading_and_trailing(self):
        assert tokenize("\n\n  x  \t\n") == tokenize("x")


class TestSeparation:
    def test_space_splits_identifiers(self, lex):
        assert_types(lex("a b"), [TokenType.IDENT, TokenType.IDENT])

    def test_space_splits_two_char_operator(self, lex):
        assert_types(lex("! ="), [TokenType.BANG, TokenType.ASSIGN])

    def test_carriage_return_alone(self, lex):
        assert_types(lex("a\rb"), [TokenType.IDENT, TokenType.IDENT])

    def test_newline_advances_line(self, lex):
        tokens = lex("a\n\nb")
        assert tokens[1].span.start.line == 3
