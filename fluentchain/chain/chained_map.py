"""ChainedMap: the key/value store behind every chain.

Keys are unique; a later `set` on the same key overwrites. Every mutating
operation returns the map itself so calls can be chained:

    chain.set("eh", [1]).merge({"eh": [2]}).get("eh") == [1, 2]
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from ..core.keys import key_name
from ..utils import deep_merge, is_empty
from .chainable import Chainable

logger = logging.getLogger(__name__)

# Attributes that are bookkeeping rather than owned children
IGNORED_ATTRIBUTES = frozenset(
    {"parent", "store", "shorthands", "decorated", "inspect", "meta"}
)


def _is_ignored(attr: str) -> bool:
    return attr in IGNORED_ATTRIBUTES or attr.startswith("_")


class ChainedMap(Chainable):
    """A Chainable backed by a dict store."""

    def __init__(self, parent: Any = None):
        super().__init__(parent)
        self.shorthands: list[str] = []
        self.store: dict = {}

    # ── Read / write ──

    def get(self, key: Any, default: Any = None) -> Any:
        return self.store.get(key_name(key), default)

    def has(self, key: Any) -> bool:
        return key_name(key) in self.store

    def set(self, key: Any, value: Any) -> "ChainedMap":
        self.store[key_name(key)] = value
        return self

    def delete(self, key: Any) -> "ChainedMap":
        self.store.pop(key_name(key), None)
        return self

    def values(self) -> list:
        return list(self.store.values())

    def tap(self, key: Any, fn: Callable[[Any, Callable], Any]) -> "ChainedMap":
        """Replace a value with `fn(current_value, deep_merge)`.

        Example:
            chain.set("moose", {"eh": True}).tap(
                "moose", lambda moose, merge: merge(moose, {"eh": False})
            )
        """
        return self.set(key, fn(self.get(key), deep_merge))

    # ── Shorthands ──

    def extend(self, names: list[str]) -> "ChainedMap":
        """Add `self.<name>(value)` methods that call `self.set(name, value)`."""
        for name in names:
            key = key_name(name)
            self.shorthands.append(key)
            setattr(self, key, self._shorthand(key))
        return self

    def _shorthand(self, key: str) -> Callable[[Any], "ChainedMap"]:
        def shorthand(value: Any) -> "ChainedMap":
            return self.set(key, value)

        shorthand.__name__ = key
        return shorthand

    # ── Bulk operations ──

    def clear(self) -> "ChainedMap":
        """Empty the store and every owned child chain or dict."""
        self.store.clear()
        for attr, value in list(vars(self).items()):
            if _is_ignored(attr):
                continue
            if isinstance(value, ChainedMap):
                value.clear()
            elif isinstance(value, dict):
                value.clear()
        return self

    def entries(self, include_chains: bool = False) -> dict:
        """Snapshot of the store.

        With `include_chains`, every child ChainedMap attribute is inlined
        under its attribute name (recursively).
        """
        reduced = dict(self.store)
        if not include_chains:
            return reduced

        for attr, value in vars(self).items():
            if _is_ignored(attr):
                continue
            if isinstance(value, ChainedMap):
                reduced[attr] = value.entries(True) or {}
        return reduced

    def merge(
        self, obj: Mapping, cb: Callable[[dict], Any] | None = None
    ) -> "ChainedMap":
        """Deep-merge `obj` into the store.

        Lists concatenate, mappings merge recursively, scalars overwrite. When
        `cb` is given the merged mapping is passed to it and the store is left
        untouched.

        Example:
            chain.set("eh", [1]).merge({"eh": [2]}).get("eh") == [1, 2]
        """
        if cb is not None:
            cb(deep_merge(self.entries(), obj))
            return self

        for key, value in obj.items():
            child = getattr(self, key, None) if isinstance(key, str) else None
            if isinstance(child, ChainedMap):
                child.merge(value)
            elif self.has(key):
                self.set(key, deep_merge(self.get(key), value))
            else:
                self.set(key, value)
        return self

    def from_(self, obj: Mapping) -> "ChainedMap":
        """Apply each key of `obj` through the matching chain method.

        Example:
            chain.from_({"eh": True}) is equivalent to chain.eh(True)
        """
        for key, value in obj.items():
            attr = getattr(self, key, None) if isinstance(key, str) else None
            if isinstance(attr, ChainedMap):
                attr.merge(value)
            elif callable(attr):
                attr(value)
            else:
                self.set(key, value)
        return self

    def clean(self, obj: Mapping) -> dict:
        """Drop None values, empty sequences and empty mappings."""
        return {key: value for key, value in obj.items() if not is_empty(value)}
