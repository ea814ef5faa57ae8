"""
Mode-stack parser turning a kvon token stream into a document.

Every map and array is parsed by its own frame holding an explicit stack
of modes. The mode on top of the stack decides which token kinds are
acceptable (``EXPECTED_TOKENS``) and what each of them does. Frames
recurse into each other for nested maps and arrays, sharing a single
lexer and a single constant table for the whole document.
"""

import copy
import logging
import re
from enum import Enum

from ._profile import ProfileContext
from ._types import Document
from ._types import Value
from .config import ParseConfig
from .errors import NestingDepthError
from .errors import TruncatedInputError
from .errors import UndefinedConstantError
from .errors import UnexpectedTokenError
from .lexer import Lexer
from .lexer import Token
from .lexer import TokenKind

logger = logging.getLogger("kvon")


class Mode(Enum):
    """
    Parser modes; values double as human-readable names in errors.

    ``ELEMENT`` is the base mode of an array frame, the others belong to
    map frames (``COMMENT`` and ``RETRIEVE_CONSTANT`` are shared).
    """

    KEY = "key"
    EQUALS = "'='"
    VALUE = "value"
    COMMENT = "end of comment"
    DECLARE_CONSTANT = "constant name"
    RETRIEVE_CONSTANT = "constant reference"
    ELEMENT = "array element"


_SCALARS = frozenset({TokenKind.WORD, TokenKind.NUMBER, TokenKind.STRING})
_BLANK = frozenset({TokenKind.SEPARATOR, TokenKind.NEWLINE})
_VALUE_STARTS = _SCALARS | {
    TokenKind.AT,
    TokenKind.LEFT_BRACE,
    TokenKind.LEFT_BRACKET,
}

EXPECTED_TOKENS: dict[Mode, frozenset[TokenKind]] = {
    Mode.KEY: _SCALARS
    | _BLANK
    | {TokenKind.HASH, TokenKind.AT, TokenKind.RIGHT_BRACE},
    Mode.EQUALS: _BLANK | {TokenKind.EQUALS, TokenKind.HASH},
    Mode.VALUE: _VALUE_STARTS | _BLANK | {TokenKind.HASH},
    Mode.COMMENT: frozenset(TokenKind),
    Mode.DECLARE_CONSTANT: _SCALARS,
    Mode.RETRIEVE_CONSTANT: _SCALARS,
    Mode.ELEMENT: _VALUE_STARTS
    | _BLANK
    | {TokenKind.HASH, TokenKind.RIGHT_BRACKET},
}

_LITERALS: dict[str, Value] = {"null": None, "true": True, "false": False}

_ESCAPE = re.compile(r'\\(["\\])')


def unescape(literal: str) -> str:
    """
    Strips the quotes of a string token and resolves its escapes.

    Only ``\\"`` and ``\\\\`` are escapes; any other backslash is kept
    as a literal character.
    """
    return _ESCAPE.sub(r"\1", literal[1:-1])


class Parser:
    """
    Builds one document from a lexer.

    A parser instance owns the constant table for the document it parses
    and must not be reused for another document.
    """

    def __init__(self, lexer: Lexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.constants: dict[str, Value] = {}
        # Innermost map or array opened so far, as (depth, position)
        self.deepest: tuple[int, int] = (0, 0)

    @property
    def doc(self) -> str:
        return self.lexer.text

    def parse(self) -> Document:
        """
        Parses the whole input as a top-level map.

        A ``max_depth`` above what the interpreter stack can hold still
        fails with ``NestingDepthError``, reported at the innermost
        opening bracket reached.
        """
        logger.debug("Parsing %d characters", self.lexer.length)
        try:
            document = self.parse_map(0)
        except RecursionError as exc:
            depth, pos = self.deepest
            raise NestingDepthError(self.doc, depth, pos) from exc
        logger.debug(
            "Parsed %d entries (%d constants) from %d characters",
            len(document),
            len(self.constants),
            self.lexer.length,
        )
        return document

    def _check(self, token: Token, mode: Mode) -> None:
        if token.kind not in EXPECTED_TOKENS[mode]:
            raise UnexpectedTokenError(self.doc, token, mode)

    def parse_map(self, depth: int) -> Document:
        """
        Parses ``key = value`` entries up to the closing brace.

        The top-level frame (depth 0) runs to end of input instead and
        treats a closing brace as an error.
        """
        with ProfileContext("parse_map"):
            modes = [Mode.KEY]
            keys: list[str] = []
            constant_names: list[str] = []
            result: Document = {}

            while True:
                token = self.lexer.next_token()
                if token is None:
                    self._end_of_map(modes, depth)
                    return result

                mode = modes[-1]
                self._check(token, mode)
                kind = token.kind

                if mode is Mode.COMMENT:
                    if kind is TokenKind.NEWLINE:
                        modes.pop()
                    continue
                if kind is TokenKind.HASH:
                    self.lexer.skip_line()
                    modes.append(Mode.COMMENT)
                    continue
                if kind in _BLANK:
                    continue

                if mode is Mode.KEY:
                    if kind is TokenKind.RIGHT_BRACE:
                        if depth == 0:
                            raise UnexpectedTokenError(
                                self.doc, token, mode, "Unmatched '}'"
                            )
                        return result
                    if kind is TokenKind.AT:
                        modes.append(Mode.DECLARE_CONSTANT)
                    else:
                        keys.append(self._name(token))
                        modes.append(Mode.EQUALS)
                elif mode is Mode.DECLARE_CONSTANT:
                    constant_names.append(self._name(token))
                    modes[-1] = Mode.EQUALS
                elif mode is Mode.EQUALS:
                    modes[-1] = Mode.VALUE
                elif mode is Mode.VALUE:
                    if kind is TokenKind.AT:
                        modes[-1] = Mode.RETRIEVE_CONSTANT
                        continue
                    value = self._parse_value(token, depth)
                    self._store(value, keys, constant_names, result)
                    modes.pop()
                else:
                    value = self._retrieve(token)
                    self._store(value, keys, constant_names, result)
                    modes.pop()

    def _end_of_map(self, modes: list[Mode], depth: int) -> None:
        if modes[-1] is Mode.COMMENT:
            modes.pop()
        if len(modes) > 1:
            raise TruncatedInputError(self.doc, modes[-1])
        if depth > 0:
            raise TruncatedInputError(self.doc, Mode.KEY, "Unterminated map")

    def parse_array(self, depth: int) -> list[Value]:
        """Parses array elements up to the closing bracket."""
        with ProfileContext("parse_array"):
            modes = [Mode.ELEMENT]
            items: list[Value] = []

            while True:
                token = self.lexer.next_token()
                if token is None:
                    raise TruncatedInputError(
                        self.doc, Mode.ELEMENT, "Unterminated array"
                    )

                mode = modes[-1]
                self._check(token, mode)
                kind = token.kind

                if mode is Mode.COMMENT:
                    if kind is TokenKind.NEWLINE:
                        modes.pop()
                    continue
                if kind is TokenKind.HASH:
                    self.lexer.skip_line()
                    modes.append(Mode.COMMENT)
                    continue
                if kind in _BLANK:
                    continue

                if mode is Mode.ELEMENT:
                    if kind is TokenKind.RIGHT_BRACKET:
                        return items
                    if kind is TokenKind.AT:
                        modes.append(Mode.RETRIEVE_CONSTANT)
                        continue
                    items.append(self._parse_value(token, depth))
                else:
                    items.append(self._retrieve(token))
                    modes.pop()

    def _parse_value(self, token: Token, depth: int) -> Value:
        kind = token.kind
        if kind is TokenKind.LEFT_BRACE or kind is TokenKind.LEFT_BRACKET:
            if depth >= self.config.max_depth:
                raise NestingDepthError(
                    self.doc, self.config.max_depth, token.position
                )
            self.deepest = max(self.deepest, (depth + 1, token.position))
            if kind is TokenKind.LEFT_BRACE:
                return self.parse_map(depth + 1)
            return self.parse_array(depth + 1)
        return self._parse_scalar(token)

    def _parse_scalar(self, token: Token) -> Value:
        if token.kind is TokenKind.WORD:
            return _LITERALS.get(token.content, token.content)
        if token.kind is TokenKind.NUMBER:
            if self.config.parse_float:
                return self.config.parse_float(token.content)  # type: ignore[no-any-return]
            return float(token.content)
        return unescape(token.content)

    def _name(self, token: Token) -> str:
        if token.kind is TokenKind.STRING:
            return unescape(token.content)
        return token.content

    def _retrieve(self, token: Token) -> Value:
        name = self._name(token)
        if name not in self.constants:
            # Report the '@' that starts the reference
            raise UndefinedConstantError(self.doc, name, token.position - 1)
        value = self.constants[name]
        if isinstance(value, dict | list):
            return copy.deepcopy(value)
        return value

    def _store(
        self,
        value: Value,
        keys: list[str],
        constant_names: list[str],
        result: Document,
    ) -> None:
        # A pending constant name takes the value; the map never sees it
        if constant_names:
            name = constant_names.pop()
            self.constants[name] = value
            logger.debug("Declared constant @%s", name)
        else:
            result[keys.pop()] = value


__all__ = ["EXPECTED_TOKENS", "Mode", "Parser", "unescape"]
