"""Path parameter types and constraint checks.

Built-in converters for route path segments like ``{id:int}``, plus the
rules that decide whether a stringified value may fill a segment.
"""

import re
from collections.abc import Callable

# Regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"-?\d+",
    "float": r"-?\d+(?:\.\d+)?",
    "path": r".+",
}

type Constraint = str | re.Pattern[str] | Callable[[str], bool]


def matches_type(value: str, param_type: str) -> bool:
    """True if *value* fits the converter pattern for *param_type*.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return re.fullmatch(CONVERTERS[param_type], value) is not None


def satisfies(value: str, constraint: Constraint) -> bool:
    """Check *value* against a route constraint.

    String patterns must match the whole value and are compared
    case-insensitively. Compiled patterns are used as given. Callables
    receive the stringified value and return a truth value.
    """
    if isinstance(constraint, str):
        return re.fullmatch(constraint, value, re.IGNORECASE) is not None
    if isinstance(constraint, re.Pattern):
        return constraint.fullmatch(value) is not None
    return bool(constraint(value))
