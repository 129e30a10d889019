"""Monkey lexer: converts source text into a stream of typed tokens."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum, auto

from monkeylex.errors import LexError
from monkeylex.tokens import (
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_TOKENS,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_ident_char,
    is_letter,
    is_whitespace,
    lookup_ident,
)

Source = str | bytes | bytearray


class _State(Enum):
    SCANNING = auto()
    END = auto()


def as_text(source: Source) -> str:
    """Return source as text; bytes map one-to-one onto characters so lengths agree."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode("latin-1")
    return source


class Lexer:
    """Scan Monkey source text one token at a time.

    The lexer never raises on input: characters no rule matches become
    ILLEGAL tokens, and once the input is exhausted every further call
    returns the same EOF token.
    """

    def __init__(self, source: Source) -> None:
        self._source = as_text(source)
        self._pos = 0
        self._line = 1
        self._col = 1
        self._state = _State.SCANNING
        self._eof: Token | None = None

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return

    def tokenize(self) -> list[Token]:
        """Scan the remaining source and return the token list, ending with EOF."""
        return list(self)

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def peek(self) -> str:
        """Return the current character without consuming it, or "" past the end."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def advance(self) -> str:
        """Consume and return the current character; returns "" and stays put at the end."""
        if self._pos >= len(self._source):
            return ""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, start: Position) -> Token:
        end = self._current_pos()
        return Token(tt, self._source[start.offset : end.offset], Span(start, end))

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token; EOF is sticky once reached."""
        if self._state == _State.END:
            assert self._eof is not None
            return self._eof

        self._skip_whitespace()

        start = self._current_pos()
        ch = self.peek()

        if ch == "":
            self._state = _State.END
            self._eof = Token(TokenType.EOF, "", Span(start, start))
            return self._eof

        if ch in TWO_CHAR_TOKENS:
            single, double = TWO_CHAR_TOKENS[ch]
            self.advance()
            if self.peek() == "=":
                self.advance()
                return self._make(double, start)
            return self._make(single, start)

        if ch in SINGLE_CHAR_TOKENS:
            self.advance()
            return self._make(SINGLE_CHAR_TOKENS[ch], start)

        if is_letter(ch):
            return self._lex_identifier(start)

        if is_digit(ch):
            return self._lex_number(start)

        # Anything else is a single illegal character
        self.advance()
        return self._make(TokenType.ILLEGAL, start)

    def _skip_whitespace(self) -> None:
        while is_whitespace(self.peek()):
            self.advance()

    def _lex_identifier(self, start: Position) -> Token:
        while is_ident_char(self.peek()):
            self.advance()
        tok = self._make(TokenType.IDENT, start)
        return Token(lookup_ident(tok.literal), tok.literal, tok.span)

    def _lex_number(self, start: Position) -> Token:
        while is_digit(self.peek()):
            self.advance()
        return self._make(TokenType.INT, start)


def tokenize(source: Source) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()


def check_tokens(tokens: Iterable[Token], source: Source) -> None:
    """Raise LexError for the first ILLEGAL token in tokens."""
    for tok in tokens:
        if tok.type is not TokenType.ILLEGAL:
            continue
        pos = tok.span.start if tok.span is not None else Position(1, 1, 0)
        raise LexError(f"illegal character {tok.literal!r}", pos, as_text(source))
