"""
Parser and serializer for kvon, a small human-editable configuration format.

A document is a sequence of ``key = value`` entries separated by commas,
whitespace or newlines. Values are ``null``, ``true``/``false``, numbers,
bare words, quoted strings, ``[...]`` arrays and ``{...}`` nested maps.
``# ...`` comments run to the end of the line, and ``@name = value``
declares a constant that a later ``@name`` reference substitutes::

    @port = 8080
    server = { host = localhost, port = @port }
    tags = [web, "front end"]  # quoted when it holds a space

The API mirrors the standard library ``json`` module: ``parse``/``loads``
and ``load`` read, ``stringify``/``dumps`` and ``dump`` write.
"""

from collections.abc import Mapping
from typing import IO
from typing import Any

from ._profile import HotPathStats
from ._profile import ProfileContext
from ._profile import clear_hot_path_stats
from ._profile import format_hot_path_stats
from ._profile import get_hot_path_stats
from ._types import Document
from ._types import Value
from ._types import ValueLoose
from .config import EncodeConfig
from .config import ParseConfig
from .encoder import encode_document
from .errors import LexError
from .errors import NestingDepthError
from .errors import ParseError
from .errors import TruncatedInputError
from .errors import UndefinedConstantError
from .errors import UnexpectedTokenError
from .lexer import Lexer
from .lexer import Token
from .lexer import TokenKind
from .lexer import tokenize
from .parser import EXPECTED_TOKENS
from .parser import Mode
from .parser import Parser

__version__ = "0.1.0"


def parse(text: str, **kwargs: Any) -> Document:
    """
    Parses kvon text into a dict.

    Raises a ``ParseError`` subclass describing the first problem found;
    a document is never partially returned.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the kvon document must be str, not {type(text).__name__}"
        )

    config = ParseConfig(**kwargs)
    # Tolerate a byte order mark left by editors
    if text.startswith("\ufeff"):
        text = text[1:]

    with ProfileContext("parse", len(text)):
        return Parser(Lexer(text), config).parse()


def loads(s: str, **kwargs: Any) -> Document:
    """Alias of ``parse`` matching the ``json`` module's naming."""
    return parse(s, **kwargs)


def load(fp: IO[str], **kwargs: Any) -> Document:
    """
    Parses kvon from a file-like object opened by the caller.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), **kwargs)


def stringify(
    obj: Mapping[Any, ValueLoose], inline: bool = False, **kwargs: Any
) -> str:
    """
    Serializes a map to kvon text.

    Block mode (the default) puts one entry per line; ``inline=True``
    separates entries with ", ". See ``EncodeConfig`` for other options.
    """
    config = EncodeConfig(inline=inline, **kwargs)
    return encode_document(obj, config)


def dumps(obj: Mapping[Any, ValueLoose], **kwargs: Any) -> str:
    """Alias of ``stringify`` matching the ``json`` module's naming."""
    return encode_document(obj, EncodeConfig(**kwargs))


def dump(obj: Mapping[Any, ValueLoose], fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes a map to a file-like object opened by the caller.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


__all__ = [
    "EXPECTED_TOKENS",
    "Document",
    "EncodeConfig",
    "HotPathStats",
    "LexError",
    "Lexer",
    "Mode",
    "NestingDepthError",
    "ParseConfig",
    "ParseError",
    "Parser",
    "Token",
    "TokenKind",
    "TruncatedInputError",
    "UndefinedConstantError",
    "UnexpectedTokenError",
    "Value",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "format_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "stringify",
    "tokenize",
]
