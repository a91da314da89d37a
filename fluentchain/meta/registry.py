"""Decoration registry helpers.

Targets get a MetaStore attached lazily the first time something is decorated
onto them. The registry then tells injected members apart from the target's
own, and lets them be listed or removed again.
"""

import logging
from typing import Any

from rich.table import Table

from ..core.keys import MetaKey
from ..core.models import DecorationRecord, ValueDescriptor
from ..synthesis.installer import get_own_descriptor, install, uninstall
from ..utils import to_list
from .store import MetaStore

logger = logging.getLogger(__name__)


def ensure_meta(target: Any) -> MetaStore | None:
    """Return the target's MetaStore, attaching one if it has no `meta`.

    Returns None when the target already has an unrelated `meta` member.
    """
    meta = getattr(target, "meta", None)
    if isinstance(meta, MetaStore):
        return meta
    if meta is not None:
        logger.debug(
            "%s has its own 'meta' member, decorations not recorded",
            type(target).__name__,
        )
        return None

    meta = MetaStore()
    install(target, "meta", ValueDescriptor(value=meta, enumerable=False))
    return meta


def decorated_names(target: Any) -> list[str]:
    """Names injected onto `target` that are still recorded as decorated."""
    meta = getattr(target, "meta", None)
    if not isinstance(meta, MetaStore):
        return []
    return meta(MetaKey.DECORATED)


def decoration_records(target: Any) -> list[DecorationRecord]:
    meta = getattr(target, "meta", None)
    if not isinstance(meta, MetaStore):
        return []
    return list(meta.records)


def undecorate(target: Any, names: Any = None) -> list[str]:
    """Remove injected members from `target`.

    Args:
        target: A previously decorated object
        names: Name or names to remove; all decorated names when omitted

    Returns:
        The names that were removed
    """
    decorated = decorated_names(target)
    requested = decorated if names is None else to_list(names)

    removed = []
    for name in requested:
        if name not in decorated:
            logger.debug("%r was not decorated onto %s", name, type(target).__name__)
            continue
        uninstall(target, name)
        target.meta.remove(MetaKey.DECORATED, name)
        removed.append(name)
    return removed


def describe_decorations(target: Any, title: str | None = None) -> Table:
    """Render the decorated members of `target` as a rich Table."""
    table = Table(title=title or f"Decorations on {type(target).__name__}")
    table.add_column("Member", style="cyan")
    table.add_column("Kind")
    table.add_column("Installed", justify="center")

    for record in decoration_records(target):
        installed = get_own_descriptor(target, record.name) is not None
        table.add_row(record.name, record.kind, "✓" if installed else "[dim]removed[/dim]")
    return table
