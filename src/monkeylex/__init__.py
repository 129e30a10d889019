"""Lexical analyzer for the Monkey programming language."""

from __future__ import annotations

from monkeylex.lexer import Lexer, tokenize
from monkeylex.tokens import KEYWORDS, Token, TokenType, lookup_ident

__version__ = "0.1.0"

__all__ = ["KEYWORDS", "Lexer", "Token", "TokenType", "lookup_ident", "tokenize"]
