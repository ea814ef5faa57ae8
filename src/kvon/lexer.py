"""
Tokenizer for kvon text.

Tokens are produced lazily, one per call, by trying an ordered list of
anchored patterns at the current offset. The first pattern that matches
wins; priority, not match length, decides between overlapping rules, so
strings, numbers and the ``@`` marker are tried before the catch-all word.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from ._profile import ProfileContext
from .errors import LexError

Position: TypeAlias = int


class TokenKind(Enum):
    """Lexical categories; values double as human-readable names in errors."""

    WORD = "word"
    NUMBER = "number"
    EQUALS = "'='"
    LEFT_BRACE = "'{'"
    RIGHT_BRACE = "'}'"
    LEFT_BRACKET = "'['"
    RIGHT_BRACKET = "']'"
    SEPARATOR = "separator"
    HASH = "'#'"
    NEWLINE = "newline"
    STRING = "string"
    AT = "'@'"


@dataclass(frozen=True)
class Token:
    """A lexeme, its kind, and the character offset it starts at."""

    content: str
    kind: TokenKind
    position: Position


# Characters that end a bare word. The comma is included so that
# "a = 1, b = 2" and "[1, 2]" split on it.
WORD_EXCLUDED = '"#\\=,{}[]'

NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
WORD_PATTERN = re.compile(r"[^\s" + re.escape(WORD_EXCLUDED) + r"]+")

_RULES: tuple[tuple[re.Pattern[str], TokenKind], ...] = (
    (re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL), TokenKind.STRING),
    (NUMBER_PATTERN, TokenKind.NUMBER),
    (re.compile(r"@"), TokenKind.AT),
    (WORD_PATTERN, TokenKind.WORD),
    # Newline must precede separator: both start with whitespace
    (re.compile(r"[^\S\r\n]*[\r\n]+"), TokenKind.NEWLINE),
    (re.compile(r"(?:,|[^\S\r\n])+"), TokenKind.SEPARATOR),
    (re.compile(r"="), TokenKind.EQUALS),
    (re.compile(r"\{"), TokenKind.LEFT_BRACE),
    (re.compile(r"\}"), TokenKind.RIGHT_BRACE),
    (re.compile(r"\["), TokenKind.LEFT_BRACKET),
    (re.compile(r"\]"), TokenKind.RIGHT_BRACKET),
    (re.compile(r"#"), TokenKind.HASH),
)

_REST_OF_LINE = re.compile(r"[^\r\n]*")


class Lexer:
    """
    Scans ``text`` from left to right, handing out one token at a time.

    The lexer keeps no token buffer: ``next_token`` returns the token at
    the current offset and moves past it, or ``None`` at end of input.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def next_token(self) -> Token | None:
        """Returns the next token or None if at end."""
        if self.pos >= self.length:
            return None

        with ProfileContext("next_token"):
            for pattern, kind in _RULES:
                match = pattern.match(self.text, self.pos)
                if match:
                    token = Token(match.group(), kind, self.pos)
                    self.pos = match.end()
                    return token

        if self.text[self.pos] == '"':
            raise LexError(
                "Unterminated string starting at", self.text, self.pos
            )
        raise LexError(
            f"Unexpected character {self.text[self.pos]!r}",
            self.text,
            self.pos,
        )

    def skip_line(self) -> None:
        """Moves to the next line break without tokenizing the rest."""
        self.pos = _REST_OF_LINE.match(self.text, self.pos).end()  # type: ignore[union-attr]


def tokenize(text: str) -> Iterator[Token]:
    """Yields the tokens of ``text`` in order; raises LexError on bad input."""
    lexer = Lexer(text)
    while True:
        token = lexer.next_token()
        if token is None:
            return
        yield token


__all__ = [
    "NUMBER_PATTERN",
    "WORD_PATTERN",
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
]
