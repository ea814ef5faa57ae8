"""
Test data generators for kvon benchmarks.

Every data set is built once as a value tree and rendered twice, as kvon
text and as JSON text, so that parsers can be compared on equal content:
- Different sizes (small/large)
- Different shapes (flat/nested/array heavy)
- Quote and backslash heavy strings
- Documents leaning on constants
"""

import json
import random
import string
from functools import cache
from typing import Any

import kvon

_ESCAPE_PROBABILITY = 0.3

DATA_TYPES = [
    "small_config",
    "large_config",
    "mixed_array",
    "nested_structure",
    "string_heavy",
    "constant_heavy",
]


@cache
def generate_test_data(data_type: str) -> tuple[str, str]:
    """
    Returns ``(kvon_text, json_text)`` for the named data set.

    Generation is seeded per data set, so repeated calls return the same
    documents.
    """
    generators = {
        "small_config": _generate_small_config,
        "large_config": _generate_large_config,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    random.seed(data_type)
    if data_type == "constant_heavy":
        text = _generate_constant_heavy()
        return text, json.dumps(kvon.parse(text))
    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    tree = generators[data_type]()
    return kvon.dumps(tree), json.dumps(tree)


def generate_tree(data_type: str) -> dict[str, Any]:
    """Returns the parsed value tree of a data set, for encoder benchmarks."""
    return kvon.parse(generate_test_data(data_type)[0])


def _generate_small_config() -> dict[str, Any]:
    """A service config of a dozen entries (< 1KB)."""
    return {
        "name": "billing-api",
        "debug": False,
        "workers": 8,
        "timeout": 2.5,
        "listen": {"host": "0.0.0.0", "port": 8443},
        "database": {
            "url": "postgres://db.internal:5432/billing",
            "pool": 20,
        },
        "allowed origins": ["https://example.com", "https://admin.example"],
    }


def _generate_large_config() -> dict[str, Any]:
    """A deployment manifest (> 10KB) with many services and routes."""
    return {
        "cluster": _random_string(12),
        "services": {
            f"svc_{i:03d}": {
                "image": f"registry.local/{_random_string(8)}:{i}.0",
                "replicas": random.randint(1, 12),
                "cpu": round(random.uniform(0.1, 4.0), 2),
                "env": {
                    "LOG_LEVEL": random.choice(["debug", "info", "warn"]),
                    "REGION": random.choice(["eu-west", "us-east", "ap"]),
                },
                "ports": [random.randint(1024, 65535) for _ in range(3)],
            }
            for i in range(40)
        },
        "routes": [
            {
                "path": f"/{_random_string(6)}/{_random_string(4)}",
                "service": f"svc_{random.randint(0, 39):03d}",
                "auth": random.choice([True, False, None]),
            }
            for _ in range(60)
        ],
    }


def _generate_mixed_array() -> dict[str, Any]:
    """A single large array of mixed scalars and small maps."""
    items: list[Any] = []
    for i in range(200):
        choice = random.randint(1, 6)
        if choice == 1:
            items.append(random.randint(-1000, 1000))
        elif choice == 2:
            items.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == 3:
            items.append(_random_string(random.randint(5, 30)))
        elif choice == 4:
            items.append(random.choice([True, False]))
        elif choice == 5:
            items.append(None)
        else:
            items.append({"index": i, "value": _random_string(10)})
    # Documents are always maps at the top level
    return {"items": items}


def _generate_nested_structure() -> dict[str, Any]:
    """A tree of maps and arrays eight levels deep."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(2)],
            "nested": create_nested_dict(depth - 1),
        }

    return {"root": create_nested_dict(8)}


def _generate_string_heavy() -> dict[str, Any]:
    """Strings full of quotes, backslashes and line breaks."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(['"', "\\", "\n", "\t", "#"]))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_escaped_string() for _ in range(100)],
        "paths": {
            f"file {i}": f"C:\\Users\\{_random_string(8)}\\file_{i}.txt"
            for i in range(20)
        },
    }


def _generate_constant_heavy() -> str:
    """kvon text where most values are ``@name`` references."""
    lines = [f"@c{i} = {_random_string(12)}" for i in range(30)]
    lines.append('@base = {retries = 3, backoff = 0.5, mode = "fast"}')
    for i in range(150):
        lines.append(
            f"entry_{i} = {{name = @c{i % 30}, policy = @base, "
            f"tags = [@c{(i + 1) % 30}, @c{(i + 2) % 30}]}}"
        )
    return "\n".join(lines)


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
