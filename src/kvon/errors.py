"""
Exceptions raised while parsing kvon text.

Every error carries the offending document together with a character
offset, and derives line, column and UTF-8 byte offset from it so that
callers can point at the exact spot in the source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from .lexer import Token
    from .lexer import TokenKind
    from .parser import Mode

Position: TypeAlias = int


class ParseError(ValueError):
    """
    Base class for every failure to turn text into a document.

    Mirrors ``json.JSONDecodeError``: ``msg`` is the bare message, ``pos``
    the character offset, ``lineno``/``colno`` are 1-based.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    @property
    def byte_offset(self) -> int:
        """Offset of the error in the UTF-8 encoding of ``doc``."""
        return len(self.doc[: self.pos].encode("utf-8"))


class LexError(ParseError):
    """No lexical rule matches the text at ``pos``."""


class UnexpectedTokenError(ParseError):
    """A token arrived that the current parser mode does not accept."""

    def __init__(
        self, doc: str, token: Token, mode: Mode, msg: str = ""
    ) -> None:
        self.token = token
        self.found: TokenKind = token.kind
        self.mode = mode
        super().__init__(
            msg
            or f"Unexpected {token.kind.value} {token.content!r} "
            f"while expecting {mode.value}",
            doc,
            token.position,
        )


class TruncatedInputError(ParseError):
    """The text ended while a map, array or entry was still open."""

    def __init__(self, doc: str, mode: Mode, msg: str = "") -> None:
        self.mode = mode
        super().__init__(
            msg or f"Unexpected end of input while expecting {mode.value}",
            doc,
            len(doc),
        )


class UndefinedConstantError(ParseError):
    """``@name`` was referenced before any ``@name = value`` declaration."""

    def __init__(self, doc: str, name: str, pos: Position) -> None:
        self.name = name
        super().__init__(f"Undefined constant @{name}", doc, pos)


class NestingDepthError(ParseError):
    """Maps and arrays are nested deeper than ``ParseConfig.max_depth``."""

    def __init__(self, doc: str, depth: int, pos: Position) -> None:
        self.depth = depth
        super().__init__(f"Maximum nesting depth {depth} exceeded", doc, pos)


__all__ = [
    "LexError",
    "NestingDepthError",
    "ParseError",
    "TruncatedInputError",
    "UndefinedConstantError",
    "UnexpectedTokenError",
]
