"""Length-prefixed binary encoding of token streams for crossing a process boundary.

Layout (integers are unsigned 32-bit little-endian)::

    b"MLX1"  count
    repeated count times:
        type_len  type   (ASCII TokenType name)
        lit_len   literal (source bytes, one per character)

Nothing is NUL-terminated; every length is explicit, and decoding never
reads past the end of the buffer it was given. Literals are written back as
the exact bytes the lexer read, so only characters up to U+00FF can be
encoded.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable

from monkeylex.errors import WireError
from monkeylex.tokens import Token, TokenType

MAGIC = b"MLX1"

_U32 = struct.Struct("<I")


def encode_tokens(tokens: Iterable[Token]) -> bytes:
    """Encode tokens into a self-describing byte string."""
    body = bytearray()
    count = 0
    for tok in tokens:
        name = tok.type.name.encode("ascii")
        try:
            lit = tok.literal.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise WireError(
                f"literal of token {count} has a character above U+00FF: {tok.literal!r}",
                len(MAGIC) + _U32.size + len(body),
            ) from exc
        body += _U32.pack(len(name)) + name
        body += _U32.pack(len(lit)) + lit
        count += 1
    return MAGIC + _U32.pack(count) + bytes(body)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self.pos = 0

    def remaining(self) -> int:
        return len(self._data) - self.pos

    def take(self, n: int, what: str) -> bytes:
        if n > self.remaining():
            raise WireError(
                f"truncated {what}: need {n} bytes, {self.remaining()} left", self.pos
            )
        chunk = self._data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def u32(self, what: str) -> int:
        return _U32.unpack(self.take(_U32.size, what))[0]


def decode_tokens(data: bytes | bytearray | memoryview) -> list[Token]:
    """Decode a buffer produced by encode_tokens; raise WireError on any inconsistency."""
    reader = _Reader(bytes(data))

    if reader.take(len(MAGIC), "header") != MAGIC:
        raise WireError("bad magic, not a token stream", 0)
    count = reader.u32("token count")

    # Each token needs at least two length prefixes
    if count * 2 * _U32.size > reader.remaining():
        raise WireError(f"token count {count} exceeds buffer", reader.pos)

    tokens: list[Token] = []
    for i in range(count):
        type_at = reader.pos
        name_len = reader.u32(f"type length of token {i}")
        name = reader.take(name_len, f"type of token {i}")
        try:
            tt = TokenType[name.decode("ascii")]
        except (UnicodeDecodeError, KeyError):
            raise WireError(f"unknown token type {name!r}", type_at) from None

        lit_len = reader.u32(f"literal length of token {i}")
        literal = reader.take(lit_len, f"literal of token {i}").decode("latin-1")

        tokens.append(Token(tt, literal))

    if reader.remaining():
        raise WireError(f"{reader.remaining()} trailing bytes after last token", reader.pos)
    return tokens
