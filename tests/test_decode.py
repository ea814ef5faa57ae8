"""
Decoding tests.

Validates parsing of every value kind, separators, comments, nesting and
the ParseConfig options.
"""

import decimal
import logging
from io import StringIO
from typing import Any

import pytest

import kvon

from .conftest import KvonTestCase


def test_pass_cases(kvon_pass_cases: list[KvonTestCase]) -> None:
    """
    Validates documents that must parse to a known result.
    """
    for case in kvon_pass_cases:
        assert kvon.parse(case.input_data) == case.expected_output, (
            case.description
        )


def test_numbers_are_floats() -> None:
    """
    Validates that every number literal becomes a float.
    """
    result = kvon.parse("a = 1\nb = -2.5\nc = 0")
    assert result == {"a": 1.0, "b": -2.5, "c": 0.0}
    assert all(isinstance(value, float) for value in result.values())


def test_words_are_strings() -> None:
    result = kvon.parse("a = hello\nb = /usr/local/bin\nc = True\nd = nil")
    assert result == {
        "a": "hello",
        "b": "/usr/local/bin",
        "c": "True",
        "d": "nil",
    }


def test_literals_are_case_sensitive() -> None:
    assert kvon.parse("a = NULL, b = False") == {"a": "NULL", "b": "False"}


def test_string_escapes() -> None:
    """
    Validates that only \\" and \\\\ are escapes inside strings.
    """
    assert kvon.parse(r'a = "say \"hi\""') == {"a": 'say "hi"'}
    assert kvon.parse(r'a = "C:\\temp"') == {"a": "C:\\temp"}
    assert kvon.parse(r'a = "line\n"') == {"a": "line\\n"}
    assert kvon.parse('a = ""') == {"a": ""}


def test_string_keeps_special_characters() -> None:
    assert kvon.parse('a = "x = {1, 2} # not a comment"') == {
        "a": "x = {1, 2} # not a comment"
    }


def test_multiline_string() -> None:
    assert kvon.parse('a = "one\ntwo"') == {"a": "one\ntwo"}


def test_quoted_keys() -> None:
    assert kvon.parse('"a key" = 1') == {"a key": 1.0}
    assert kvon.parse(r'"say \"hi\"" = 1') == {'say "hi"': 1.0}


def test_numeric_keys_keep_their_text() -> None:
    assert kvon.parse("1 = one\n2.50 = two") == {"1": "one", "2.50": "two"}


def test_insertion_order_preserved() -> None:
    assert list(kvon.parse("b = 1\na = 2\nc = 3")) == ["b", "a", "c"]


def test_duplicate_key_keeps_first_position() -> None:
    result = kvon.parse("a = 1\nb = 2\na = 3")
    assert result == {"a": 3.0, "b": 2.0}
    assert list(result) == ["a", "b"]


def test_value_on_following_line() -> None:
    assert kvon.parse("a =\n  1") == {"a": 1.0}


def test_comments_between_tokens() -> None:
    """
    Validates comments after a key, after '=' and after a value.
    """
    text = "a # key\n= # equals\n1 # value\nb = 2"
    assert kvon.parse(text) == {"a": 1.0, "b": 2.0}


def test_comment_text_is_not_tokenized() -> None:
    assert kvon.parse('# it\'s a "quote and a \\ backslash\na = 1') == {
        "a": 1.0
    }


def test_comment_at_end_without_newline() -> None:
    assert kvon.parse("a = 1 # trailing") == {"a": 1.0}


def test_multiline_array_with_comments() -> None:
    text = "a = [\n  1,  # first\n  2\n  # last\n]"
    assert kvon.parse(text) == {"a": [1.0, 2.0]}


def test_mixed_array() -> None:
    result = kvon.parse('a = [1, x, "y z", true, null, [2, []], {b = 3}]')
    assert result == {
        "a": [1.0, "x", "y z", True, None, [2.0, []], {"b": 3.0}]
    }


def test_deeply_nested_maps() -> None:
    text = "a = { b = { c = { d = 1 } } }"
    assert kvon.parse(text) == {"a": {"b": {"c": {"d": 1.0}}}}


def test_nesting_up_to_limit() -> None:
    depth = 50
    result = kvon.parse("a = " + "[" * depth + "]" * depth)

    expected: Any = []
    for _ in range(depth - 1):
        expected = [expected]
    assert result == {"a": expected}


def test_crlf_line_endings() -> None:
    assert kvon.parse("a = 1\r\nb = 2\r\n") == {"a": 1.0, "b": 2.0}


def test_byte_order_mark_ignored() -> None:
    assert kvon.parse("\ufeffa = 1") == {"a": 1.0}


def test_realistic_document(server_config: str) -> None:
    assert kvon.parse(server_config) == {
        "name": "gateway",
        "display name": 'Edge "gateway"',
        "debug": False,
        "timeout": 2.5,
        "retries": 3.0,
        "listen": {"host": "0.0.0.0", "port": 8080.0},
        "upstreams": [
            {"name": "alpha", "port": 8080.0},
            {"name": "beta", "port": 9090.0},
        ],
        "backends": ["alpha.internal", "beta.internal"],
        "limits": {"rate": 100.0, "burst": None},
    }


def test_decimal_parsing() -> None:
    """
    Validates decimal.Decimal parsing via parse_float hook.
    """
    result = kvon.parse("a = 1.10", parse_float=decimal.Decimal)
    assert isinstance(result["a"], decimal.Decimal)
    assert result["a"] == decimal.Decimal("1.10")


def test_loads_alias() -> None:
    assert kvon.loads("a = 1") == kvon.parse("a = 1")


def test_load_from_file_object() -> None:
    assert kvon.load(StringIO("a = [1, 2]")) == {"a": [1.0, 2.0]}


def test_load_requires_read() -> None:
    with pytest.raises(TypeError, match="read"):
        kvon.load("a = 1")  # type: ignore[arg-type]


@pytest.mark.parametrize("invalid_value", [b"a = 1", 1, None, ["a = 1"]])
def test_invalid_input_type_rejection(invalid_value: Any) -> None:
    """
    Validates rejection of non-string input types.
    """
    with pytest.raises(TypeError, match="the kvon document must be str"):
        kvon.parse(invalid_value)


def test_unknown_option_rejected() -> None:
    with pytest.raises(TypeError):
        kvon.parse("a = 1", object_hook=dict)


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"max_depth": 0}, ValueError),
        ({"max_depth": "10"}, TypeError),
        ({"max_depth": True}, TypeError),
        ({"parse_float": 3}, TypeError),
    ],
)
def test_parse_config_validation(
    kwargs: dict[str, Any], error: type[Exception]
) -> None:
    with pytest.raises(error):
        kvon.ParseConfig(**kwargs)


def test_expected_tokens_table_covers_every_mode() -> None:
    assert set(kvon.EXPECTED_TOKENS) == set(kvon.Mode)
    assert kvon.EXPECTED_TOKENS[kvon.Mode.COMMENT] == frozenset(kvon.TokenKind)


def test_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """
    Validates the debug messages emitted over one parse.
    """
    caplog.set_level(logging.DEBUG, logger="kvon")

    kvon.parse("@port = 80\na = @port, b = {c = 1}")

    assert [r.getMessage() for r in caplog.records] == [
        "Parsing 33 characters",
        "Declared constant @port",
        "Parsed 2 entries (1 constants) from 33 characters",
    ]


def test_no_logging_above_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="kvon")
    kvon.parse("@port = 80\na = @port")
    assert caplog.records == []
