"""Name normalization helpers."""

import re
from typing import Any

_SEPARATORS = re.compile(r"[\s\-_.]+")


def camel_case(value: str) -> str:
    """Convert hyphenated, spaced or underscored tokens to camel form.

    Examples:
        "set-name" → "setName"
        "is enabled" → "isEnabled"
        "already_snake" → "alreadySnake"
        "eh" → "eh"
    """
    parts = [p for p in _SEPARATORS.split(value.strip()) if p]
    if not parts:
        return ""
    head, *rest = parts
    return head[0].lower() + head[1:] + "".join(p[0].upper() + p[1:] for p in rest)


def snake_case(value: str) -> str:
    """Convert hyphenated, spaced or camel tokens to snake form.

    Examples:
        "get-fooBar" → "get_foo_bar"
        "set name" → "set_name"
    """
    spaced = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", value.strip())
    return _SEPARATORS.sub("_", spaced).lower()


def to_list(value: Any) -> list:
    """Coerce None/scalars/sequences into a list.

    Strings are treated as scalars, never split into characters.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]
