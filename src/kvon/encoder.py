"""
Serializer turning a value tree back into kvon text.

The output only uses constructs the parser accepts: every string is
quoted and escaped, keys are quoted unless they lex back as one bare
token, and numbers are written positionally because the tokenizer has no
exponent syntax.
"""

import math
from collections.abc import Mapping
from decimal import Decimal

from ._profile import ProfileContext
from ._types import ValueLoose
from .config import EncodeConfig
from .lexer import NUMBER_PATTERN
from .lexer import WORD_PATTERN


def _encode_string(s: str) -> str:
    """Quotes a string, escaping only backslashes and double quotes."""
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _is_bare_key(key: str) -> bool:
    if not WORD_PATTERN.fullmatch(key) or key.startswith("@"):
        return False
    # "1a" would lex as a number followed by a word
    number = NUMBER_PATTERN.match(key)
    return number is None or number.end() == len(key)


def _encode_key(key: str) -> str:
    return key if _is_bare_key(key) else _encode_string(key)


def _encode_number(n: int | float | Decimal) -> str:
    """
    Renders a number in the canonical positional form.

    Floats use their shortest round-trip digits with any trailing ".0"
    dropped, so 5.0 becomes "5" and 1e-07 becomes "0.0000001".
    """
    if isinstance(n, int):
        return str(n)
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            msg = "Out of range float values are not kvon compliant"
            raise ValueError(msg)
        n = Decimal(repr(n))
    elif not n.is_finite():
        msg = "Out of range decimal values are not kvon compliant"
        raise ValueError(msg)

    text = format(n, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _stringify_key(key: object, config: EncodeConfig) -> str | None:
    """Returns the key as a string, or None when it should be skipped."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int | float):
        return str(key)
    if config.skipkeys:
        return None
    msg = f"keys must be strings, not {type(key).__name__}"
    raise TypeError(msg)


def _encode_entries(
    mapping: Mapping[object, ValueLoose], config: EncodeConfig, level: int
) -> list[str]:
    """Encodes each entry of a map as ``key = value``."""
    items: list[tuple[str, ValueLoose]] = []
    for key, value in mapping.items():
        str_key = _stringify_key(key, config)
        if str_key is not None:
            items.append((str_key, value))

    if config.sort_keys:
        items.sort(key=lambda item: item[0])

    entries = []
    for key, value in items:
        try:
            encoded = _encode_value(value, config, level)
        except (TypeError, ValueError) as exc:
            exc.add_note(
                f"when serializing {type(mapping).__name__} item {key!r}"
            )
            raise
        entries.append(f"{_encode_key(key)} = {encoded}")
    return entries


def _encode_map(
    mapping: Mapping[object, ValueLoose], config: EncodeConfig, level: int
) -> str:
    """Encodes a nested map in braces."""
    entries = _encode_entries(mapping, config, level + 1)
    if not entries:
        return "{}"

    if config.indent is None or config.inline:
        return "{" + ", ".join(entries) + "}"

    indent_str = _get_indent_string(config.indent, level)
    inner_indent = _get_indent_string(config.indent, level + 1)
    lines = ["{"]
    lines.extend(f"{inner_indent}{entry}" for entry in entries)
    lines.append(f"{indent_str}}}")
    return "\n".join(lines)


def _encode_array(
    arr: list[ValueLoose] | tuple[ValueLoose, ...],
    config: EncodeConfig,
    level: int,
) -> str:
    encoded_items = []
    for i, item in enumerate(arr):
        try:
            encoded_items.append(_encode_value(item, config, level))
        except (TypeError, ValueError) as exc:
            exc.add_note(f"when serializing {type(arr).__name__} item {i}")
            raise
    return "[" + ", ".join(encoded_items) + "]"


def _get_indent_string(indent: str | int, level: int) -> str:
    """Generate indentation string for given level."""
    if isinstance(indent, int):
        return " " * (indent * level)
    return indent * level


def _encode_value(obj: ValueLoose, config: EncodeConfig, level: int) -> str:  # noqa: PLR0911
    """Encode any value of the value tree."""
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, str):
        return _encode_string(obj)
    elif isinstance(obj, int | float | Decimal):
        return _encode_number(obj)
    elif isinstance(obj, Mapping):
        return _encode_map(obj, config, level)
    elif isinstance(obj, list | tuple):
        return _encode_array(obj, config, level)
    elif config.default is not None:
        return _encode_value(config.default(obj), config, level)
    else:
        msg = f"Object of type {type(obj).__name__} is not kvon serializable"
        raise TypeError(msg)


def encode_document(
    obj: Mapping[object, ValueLoose], config: EncodeConfig
) -> str:
    """
    Serializes a top-level map.

    Entries are joined by newlines, or by ", " when ``config.inline`` is
    set. The top level is never wrapped in braces. A tree that loops back
    on itself or nests deeper than the interpreter stack raises
    ``ValueError``.
    """
    if not isinstance(obj, Mapping):
        msg = f"top-level value must be a mapping, not {type(obj).__name__}"
        raise TypeError(msg)

    with ProfileContext("encode_document"):
        try:
            entries = _encode_entries(obj, config, 0)
        except RecursionError as exc:
            msg = "Circular reference or nesting too deep to serialize"
            raise ValueError(msg) from exc
        return (", " if config.inline else "\n").join(entries)


__all__ = ["encode_document"]
