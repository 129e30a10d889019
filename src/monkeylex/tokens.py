"""Token types, data structures, keyword table, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class TokenType(Enum):
    """Closed set of token kinds; the value is the display form printed by the REPL."""

    # Structural
    ILLEGAL = "ILLEGAL"  # any character no other rule matches
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"  # [A-Za-z_][A-Za-z0-9_]*
    INT = "INT"  # [0-9]+, kept as text

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its type and the exact source text it was scanned from.

    The span is informational and does not take part in equality, so a token
    scanned from ``"x+y"`` compares equal to the same token scanned from ``"x + y"``.
    """

    type: TokenType
    literal: str
    span: Span | None = field(default=None, compare=False)


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "return": TokenType.RETURN,
    }
)

# Characters that always form a token on their own.
SINGLE_CHAR_TOKENS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }
)

# First character -> (single form, two-character form when followed by "=").
TWO_CHAR_TOKENS: MappingProxyType[str, tuple[TokenType, TokenType]] = MappingProxyType(
    {
        "=": (TokenType.ASSIGN, TokenType.EQ),
        "!": (TokenType.BANG, TokenType.NOT_EQ),
    }
)

_WHITESPACE = frozenset(" \t\n\r")


def lookup_ident(text: str) -> TokenType:
    """Return the keyword type for text, or IDENT if it is not a keyword."""
    return KEYWORDS.get(text, TokenType.IDENT)


def is_letter(ch: str) -> bool:
    """Return True if ch can start an identifier (ASCII letter or underscore)."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return "0" <= ch <= "9"


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return is_letter(ch) or is_digit(ch)


def is_whitespace(ch: str) -> bool:
    return ch in _WHITESPACE
