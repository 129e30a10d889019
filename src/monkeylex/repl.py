"""Interactive read-tokenize-print loop."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import IO, Any, TextIO

from monkeylex.errors import LexError
from monkeylex.lexer import check_tokens, tokenize
from monkeylex.tokens import Token, TokenType

PROMPT = ">>> "
QUIT_MARKER = "\\q"
BANNER = "Welcome to the Monkey programming language"


def format_token(tok: Token) -> str:
    return f"{{ Type: {tok.type.value}    Literal: {tok.literal} }}"


def _byte_lines(stdin: IO[Any]) -> Iterator[bytes]:
    """Yield input lines as raw bytes, the same bytes a source file would hold."""
    buffer = getattr(stdin, "buffer", None)
    for raw in buffer if buffer is not None else stdin:
        yield raw if isinstance(raw, bytes) else raw.encode("utf-8")


def start(
    stdin: IO[Any] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    *,
    prompt: str = PROMPT,
    quit_marker: str = QUIT_MARKER,
    banner: str = BANNER,
    strict: bool = False,
) -> None:
    """Tokenize each input line and print its tokens until EOF or the quit marker.

    Lines are tokenized as bytes, so a non-ASCII character yields the same
    ILLEGAL tokens here as it does when the line is read from a file.

    With strict=True a line containing an illegal character is reported on
    stderr instead of printed, and the loop carries on with the next line.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    if banner:
        stdout.write(banner + "\n")
    stdout.write(prompt)
    stdout.flush()

    for raw in _byte_lines(stdin):
        line = raw.rstrip(b"\n").rstrip(b"\r")
        if line == quit_marker.encode("utf-8"):
            break

        tokens = tokenize(line)
        try:
            if strict:
                check_tokens(tokens, line)
        except LexError as exc:
            print(exc.format("<stdin>"), file=stderr)
        else:
            for tok in tokens:
                if tok.type is not TokenType.EOF:
                    stdout.write(format_token(tok) + "\n")

        stdout.write("\n")
        stdout.write(prompt)
        stdout.flush()
