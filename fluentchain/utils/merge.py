"""Deep merge with list concatenation and mapping recursion."""

from collections.abc import Mapping
from typing import Any

from .predicates import MISSING


def deep_merge(target: Any, source: Any) -> Any:
    """Merge ``source`` into ``target`` and return a new structure.

    - lists/tuples are concatenated (result is a list)
    - mappings are merged key by key, recursively
    - anything else: ``source`` wins, unless it is None/MISSING

    Neither input is mutated.

    Examples:
        deep_merge([1], [2]) → [1, 2]
        deep_merge({"a": {"b": 1}}, {"a": {"c": 2}}) → {"a": {"b": 1, "c": 2}}
        deep_merge(None, ["x"]) → ["x"]
    """
    if source is None or source is MISSING:
        return _copy(target)
    if target is None or target is MISSING:
        return _copy(source)

    if isinstance(target, (list, tuple)) and isinstance(source, (list, tuple)):
        return list(target) + list(source)
    if isinstance(target, (list, tuple)):
        return list(target) + [source]

    if isinstance(target, Mapping) and isinstance(source, Mapping):
        merged = {k: _copy(v) for k, v in target.items()}
        for key, value in source.items():
            if key in merged:
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = _copy(value)
        return merged

    return _copy(source)


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value
