"""
Parsing and encoding options.

Both configs are frozen dataclasses built from the keyword arguments of
``kvon.parse``/``kvon.stringify``, so an unknown option fails loudly with
``TypeError`` before any text is touched.
"""

from dataclasses import dataclass

from ._types import DefaultHook
from ._types import ParseFloatHook

DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``max_depth`` bounds how deeply maps and arrays may nest before the
    parser gives up with ``NestingDepthError`` instead of exhausting the
    interpreter stack. ``parse_float`` receives the text of every number
    literal, e.g. ``decimal.Decimal``.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    parse_float: ParseFloatHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(
            self.max_depth, bool
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.parse_float is not None and not callable(self.parse_float):
            raise TypeError("parse_float must be callable")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures serialization with immutable settings.

    ``inline`` joins entries with ", " instead of newlines. ``indent``
    spreads nested maps over several lines in block mode; it has no
    effect when ``inline`` is set.
    """

    inline: bool = False
    sort_keys: bool = False
    indent: str | int | None = None
    skipkeys: bool = False
    default: DefaultHook = None

    def __post_init__(self) -> None:
        if not isinstance(self.inline, bool):
            raise TypeError("inline must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")
        if self.indent is not None and not isinstance(self.indent, str | int):
            raise TypeError("indent must be a string, an integer or None")
        if isinstance(self.indent, str) and self.indent.strip():
            raise ValueError("indent must contain only whitespace")
