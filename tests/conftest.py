"""
Pytest configuration and shared fixtures for kvon tests.

Provides immutable test case fixtures shared by the pass, fail and
round-trip suites.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import kvon


@dataclass(frozen=True)
class KvonTestCase:
    """
    Immutable container for kvon test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_error: type[kvon.ParseError] = kvon.ParseError


@pytest.fixture
def kvon_fail_cases() -> list[KvonTestCase]:
    """
    Provides documents that must be rejected, with the error each raises.
    """
    unexpected = kvon.UnexpectedTokenError
    truncated = kvon.TruncatedInputError
    return [
        KvonTestCase("key without equals", "a b", True, None, unexpected),
        KvonTestCase("equals without key", "= 1", True, None, unexpected),
        KvonTestCase("double equals", "a = = 1", True, None, unexpected),
        KvonTestCase("value then equals", "a = 1 = 2", True, None, unexpected),
        KvonTestCase("stray closing brace", "a = 1 }", True, None, unexpected),
        KvonTestCase("bracket as value", "a = ]", True, None, unexpected),
        KvonTestCase("brace closes array", "a = [1 }", True, None, unexpected),
        KvonTestCase("bracket closes map", "a = {b = 1]", True, None, unexpected),
        KvonTestCase("space after at", "@ x = 1", True, None, unexpected),
        KvonTestCase("space in reference", "a = @ x", True, None, unexpected),
        KvonTestCase("bare key", "a", True, None, truncated),
        KvonTestCase("missing value", "a =", True, None, truncated),
        KvonTestCase("lone at", "@", True, None, truncated),
        KvonTestCase("constant without value", "@x", True, None, truncated),
        KvonTestCase("unclosed array", "a = [1, 2", True, None, truncated),
        KvonTestCase("unclosed map", "a = {b = 1", True, None, truncated),
        KvonTestCase("comment in array", "a = [1 # ]", True, None, truncated),
        KvonTestCase("bare backslash", "a = \\x", True, None, kvon.LexError),
        KvonTestCase("unterminated string", 'a = "open', True, None, kvon.LexError),
        KvonTestCase(
            "undeclared constant",
            "a = @missing",
            True,
            None,
            kvon.UndefinedConstantError,
        ),
        KvonTestCase(
            "constant used before declaration",
            "a = @x\n@x = 1",
            True,
            None,
            kvon.UndefinedConstantError,
        ),
    ]


@pytest.fixture
def kvon_pass_cases() -> list[KvonTestCase]:
    """
    Provides documents that must parse, with the document they produce.
    """
    return [
        KvonTestCase("number", "a = 1", False, {"a": 1.0}),
        KvonTestCase("nested map", "a = { b = 1 }", False, {"a": {"b": 1.0}}),
        KvonTestCase(
            "array", "a = [1, 2, 3]", False, {"a": [1.0, 2.0, 3.0]}
        ),
        KvonTestCase(
            "literals",
            "a = true\nb = false\nc = null",
            False,
            {"a": True, "b": False, "c": None},
        ),
        KvonTestCase("constant", "@x = 5\na = @x", False, {"a": 5.0}),
        KvonTestCase(
            "constant alias", "@x = 5\n@y = @x\na = @y", False, {"a": 5.0}
        ),
        KvonTestCase(
            "comment", "# ignore = this { [ ] }\na = 1", False, {"a": 1.0}
        ),
        KvonTestCase("duplicate key", "a = 1\na = 2", False, {"a": 2.0}),
        KvonTestCase(
            "comma separated", "a = 1, b = 2", False, {"a": 1.0, "b": 2.0}
        ),
        KvonTestCase("compact", "a=1,b=x", False, {"a": 1.0, "b": "x"}),
        KvonTestCase("empty document", "", False, {}),
        KvonTestCase("blank lines only", "  \n\n\t\n", False, {}),
        KvonTestCase("comment only", "# nothing here", False, {}),
        KvonTestCase("empty map", "a = {}", False, {"a": {}}),
        KvonTestCase("empty array", "a = []", False, {"a": []}),
    ]


@pytest.fixture
def server_config() -> str:
    """A realistic document exercising every construct of the format."""
    return """\
# Service configuration
@port = 8080
@hosts = ["alpha.internal", "beta.internal"]

name = gateway
"display name" = "Edge \\"gateway\\""
debug = false
timeout = 2.5
retries = 3

listen = {
    host = "0.0.0.0"   # all interfaces
    port = @port
}

upstreams = [
    { name = alpha, port = @port },
    { name = beta, port = 9090 }  # beta runs elsewhere
]

backends = @hosts
limits = { rate = 100, burst = null }
"""
