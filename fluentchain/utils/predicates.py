"""Capability checks used for branching throughout fluentchain.

All of these are total and side-effect free.
"""

from collections.abc import Mapping
from typing import Any


class _Missing:
    """Sentinel for "not configured", distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


def is_obj(value: Any) -> bool:
    """True for mappings (the equivalent of a plain object)."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_function(value: Any) -> bool:
    return callable(value) and not isinstance(value, type)


def is_true(value: Any) -> bool:
    return value is True


def is_empty(value: Any) -> bool:
    """True for None, MISSING, empty sequences and empty mappings."""
    if value is None or value is MISSING:
        return True
    if is_array(value) or is_obj(value):
        return len(value) == 0
    return False
