"""MetaStore: per-target metadata, including the decoration registry.

A MetaStore is callable so it reads like a tiny query language:

    meta("schema")                  → {"a": int, "b": str}
    meta("schema", "a")             → int
    meta("schema", "a", int)        → writes, returns the store
    meta("decorated", "eh")         → appends "eh" to the decorated names
    meta("decorated")               → ["eh"]
"""

import logging
from typing import Any

from ..core.keys import SET_LIKE_META_KEYS, MetaKey, key_name
from ..core.models import DecorationRecord
from ..utils import MISSING

logger = logging.getLogger(__name__)


class MetaStore:
    """Metadata keyed by category, then by member name."""

    def __init__(self):
        self._data: dict[str, Any] = {}
        self.records: list[DecorationRecord] = []

    def __call__(self, key: Any, prop: Any = MISSING, value: Any = MISSING) -> Any:
        key = key_name(key)
        if prop is MISSING:
            return self.lookup(key)
        if value is MISSING:
            if key in SET_LIKE_META_KEYS:
                self.add(key, prop)
                return self
            return self.lookup(key, prop)
        return self.record(key, prop, value)

    def __repr__(self) -> str:
        return f"MetaStore({self._data!r})"

    # ── Writes ──

    def record(self, key: Any, prop: Any, value: Any) -> "MetaStore":
        """Store `value` under `key`/`prop`."""
        self._data.setdefault(key_name(key), {})[prop] = value
        return self

    def add(self, key: Any, prop: Any) -> "MetaStore":
        """Append `prop` to a set-like key, keeping first-seen order."""
        names = self._data.setdefault(key_name(key), [])
        if prop not in names:
            names.append(prop)
        return self

    def remove(self, key: Any, prop: Any) -> "MetaStore":
        entry = self._data.get(key_name(key))
        if isinstance(entry, list) and prop in entry:
            entry.remove(prop)
        elif isinstance(entry, dict):
            entry.pop(prop, None)
        return self

    # ── Reads ──

    def lookup(self, key: Any, prop: Any = MISSING) -> Any:
        """Copy of everything under `key`, or the single entry for `prop`."""
        key = key_name(key)
        entry = self._data.get(key)
        if prop is MISSING:
            if entry is None:
                return [] if key in SET_LIKE_META_KEYS else {}
            return list(entry) if isinstance(entry, list) else dict(entry)
        if isinstance(entry, list):
            return prop in entry
        if isinstance(entry, dict):
            return entry.get(prop)
        return None

    def has(self, key: Any, prop: Any = MISSING) -> bool:
        key = key_name(key)
        if prop is MISSING:
            return bool(self._data.get(key))
        entry = self._data.get(key)
        return entry is not None and prop in entry

    # ── Decoration registry ──

    def record_decoration(self, name: str, kind: str) -> DecorationRecord:
        """Register a member injected by `decorate()`."""
        record = DecorationRecord(name=name, kind=kind)
        self.records.append(record)
        self.add(MetaKey.DECORATED, name)
        logger.debug("Recorded decoration %r (%s)", name, kind)
        return record
