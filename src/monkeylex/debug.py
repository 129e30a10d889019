"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from monkeylex.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token (index, position, type name, literal) to *file* or stderr."""
    if file is None:
        file = sys.stderr
    for i, tok in enumerate(tokens):
        file.write(f"{i:>4} {_where(tok):<8} {tok.type.name:<10} {tok.literal!r}\n")


def _where(tok: Token) -> str:
    if tok.span is None:
        return "?"
    return f"{tok.span.start.line}:{tok.span.start.column}"
