"""Per-target metadata and the decoration registry."""

from .store import MetaStore
from .registry import (
    ensure_meta,
    decorated_names,
    decoration_records,
    undecorate,
    describe_decorations,
)

__all__ = [
    "MetaStore",
    "ensure_meta",
    "decorated_names",
    "decoration_records",
    "undecorate",
    "describe_decorations",
]
