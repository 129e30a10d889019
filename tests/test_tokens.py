"""Test token types, the keyword table, and character classification helpers."""

import dataclasses

import pytest

from monkeylex.tokens import (
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_TOKENS,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_letter,
    is_whitespace,
    lookup_ident,
)


class TestTokenType:
    def test_display_values_follow_lexemes(self):
        assert TokenType.ASSIGN.value == "="
        assert TokenType.EQ.value == "=="
        assert TokenType.NOT_EQ.value == "!="
        assert TokenType.LBRACE.value == "{"

    def test_keyword_display_values(self):
        assert TokenType.FUNCTION.value == "FUNCTION"
        assert TokenType.LET.value == "LET"

    def test_values_are_unique(self):
        values = [tt.value for tt in TokenType]
        assert len(values) == len(set(values))

    def test_every_single_char_is_its_own_lexeme(self):
        for ch, tt in SINGLE_CHAR_TOKENS.items():
            assert tt.value == ch

    def test_two_char_forms(self):
        assert TWO_CHAR_TOKENS["="] == (TokenType.ASSIGN, TokenType.EQ)
        assert TWO_CHAR_TOKENS["!"] == (TokenType.BANG, TokenType.NOT_EQ)


class TestToken:
    def test_frozen(self):
        tok = Token(TokenType.INT, "5")
        with pytest.raises(dataclasses.FrozenInstanceError):
            tok.literal = "6"  # type: ignore[misc]

    def test_equality_by_type_and_literal(self):
        assert Token(TokenType.IDENT, "x") == Token(TokenType.IDENT, "x")
        assert Token(TokenType.IDENT, "x") != Token(TokenType.IDENT, "y")
        assert Token(TokenType.IDENT, "if") != Token(TokenType.IF, "if")


class TestKeywords:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("fn", TokenType.FUNCTION),
            ("let", TokenType.LET),
            ("true", TokenType.TRUE),
            ("false", TokenType.FALSE),
            ("if", TokenType.IF),
            ("else", TokenType.ELSE),
            ("return", TokenType.RETURN),
        ],
    )
    def test_lookup_keyword(self, text, expected):
        assert lookup_ident(text) == expected

    def test_lookup_identifier(self):
        assert lookup_ident("foobar") == TokenType.IDENT

    def test_lookup_is_case_sensitive(self):
        assert lookup_ident("Let") == TokenType.IDENT
        assert lookup_ident("TRUE") == TokenType.IDENT

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            KEYWORDS["var"] = TokenType.LET  # type: ignore[index]

    def test_table_size(self):
        assert len(KEYWORDS) == 7


class TestCharClasses:
    def test_letters(self):
        for ch in "azAZ_":
            assert is_letter(ch), ch

    def test_non_letters(self):
        for ch in "09@-é ":
            assert not is_letter(ch), ch

    def test_digits(self):
        for ch in "0123456789":
            assert is_digit(ch)
        assert not is_digit("a")
        assert not is_digit("٣")  # non-ASCII digit

    def test_ident_char(self):
        for ch in "aZ_09":
            assert is_ident_char(ch)
        assert not is_ident_char("-")

    def test_whitespace(self):
        for ch in " \t\n\r":
            assert is_whitespace(ch)
        assert not is_whitespace("\f")

    def test_sentinel_matches_nothing(self):
        assert not is_letter("")
        assert not is_digit("")
        assert not is_ident_char("")
        assert not is_whitespace("")
