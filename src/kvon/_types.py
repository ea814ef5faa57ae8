"""Type aliases for the in-memory value tree."""

from collections.abc import Callable
from typing import Any

# Recursive definition: null, bool, number, string, array, map
Value = None | bool | float | str | list["Value"] | dict[str, "Value"]
Document = dict[str, Value]

# Values handed to the encoder may be looser than what the parser produces
ValueLoose = Any

ParseFloatHook = Callable[[str], Any] | None
DefaultHook = Callable[[Any], Any] | None
