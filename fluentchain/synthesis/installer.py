"""Installer: writes descriptors onto a target's property map.

Python properties live on classes, not instances, so the first install on a
target gives that one instance its own subclass. Value descriptors go into the
instance `__dict__`; accessor descriptors (and non-writable values) become
`property` objects on the private subclass. Flags such as `configurable` are
kept in a descriptor table on that subclass.

Copies made with `copy.copy` / `copy.deepcopy` keep the original's class, so a
copy shares the descriptor table and the accessor properties (whose get/set
closures still point at the original's store). Build members on the copy
again when it needs its own.

    install(target, "eh", ValueDescriptor(value=fn))
    install(target, "size", AccessorDescriptor(get=read, set=write))
    get_own_descriptor(target, "eh")   → ValueDescriptor(value=fn, ...)
"""

import logging
from typing import Any

from ..core.models import AccessorDescriptor, Descriptor, ValueDescriptor

logger = logging.getLogger(__name__)

_OWN_CLASS_MARKER = "__fluentchain_own_class__"
_TABLE_ATTR = "__fluentchain_descriptors__"


class InstallError(TypeError):
    """Raised when a member cannot be (re)defined on a target."""


def _own_class(target: Any, create: bool = True) -> type | None:
    """The per-instance subclass of `target`, created on demand."""
    cls = type(target)
    if cls.__dict__.get(_OWN_CLASS_MARKER, False):
        return cls
    if not create:
        return None

    namespace = {
        _OWN_CLASS_MARKER: True,
        _TABLE_ATTR: {},
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
    }
    own = type(cls)(cls.__name__, (cls,), namespace)
    try:
        target.__class__ = own
    except TypeError as exc:
        raise InstallError(
            f"Cannot install members on {cls.__name__!r} instances: {exc}"
        ) from exc
    return own


def _table(target: Any) -> dict:
    own = _own_class(target, create=False)
    return own.__dict__[_TABLE_ATTR] if own is not None else {}


def _instance_dict(target: Any) -> dict:
    return getattr(target, "__dict__", None) or {}


def _drop_class_member(own: type, name: str) -> None:
    if name in own.__dict__:
        delattr(own, name)


def get_own_descriptor(target: Any, name: str) -> Descriptor | None:
    """Descriptor of a member the target owns directly, or None.

    Plain instance attributes that were never installed through here are
    reported as writable, configurable value descriptors.
    """
    table = _table(target)
    instance_dict = _instance_dict(target)

    if name in table:
        descriptor = table[name]
        if (
            isinstance(descriptor, ValueDescriptor)
            and descriptor.writable
            and name in instance_dict
        ):
            return descriptor.model_copy(update={"value": instance_dict[name]})
        return descriptor

    if name in instance_dict:
        return ValueDescriptor(value=instance_dict[name])
    return None


def has_own_property(target: Any, name: str) -> bool:
    return get_own_descriptor(target, name) is not None


def install(target: Any, name: str, descriptor: Descriptor) -> None:
    """Define `name` on `target` from `descriptor`.

    Raises:
        InstallError: if the current member is non-configurable, or the target
            cannot carry per-instance members (e.g. `__slots__` only).
    """
    existing = get_own_descriptor(target, name)
    if existing is not None and not existing.configurable:
        raise InstallError(f"Cannot redefine non-configurable member {name!r}")

    own = _own_class(target)
    instance_dict = target.__dict__

    if isinstance(descriptor, AccessorDescriptor):
        getter, setter = descriptor.get, descriptor.set
        instance_dict.pop(name, None)
        setattr(
            own,
            name,
            property(
                (lambda _self: getter()) if getter is not None else None,
                (lambda _self, value: setter(value)) if setter is not None else None,
            ),
        )
    elif descriptor.writable:
        _drop_class_member(own, name)
        instance_dict[name] = descriptor.value
    else:
        value = descriptor.value
        instance_dict.pop(name, None)
        setattr(own, name, property(lambda _self: value))

    own.__dict__[_TABLE_ATTR][name] = descriptor
    logger.debug("Installed %s member %r on %s", descriptor.kind, name, own.__name__)


def uninstall(target: Any, name: str) -> bool:
    """Remove a member installed on `target`. Returns whether one was removed.

    Raises:
        InstallError: if the member is non-configurable.
    """
    existing = get_own_descriptor(target, name)
    if existing is None:
        return False
    if not existing.configurable:
        raise InstallError(f"Cannot remove non-configurable member {name!r}")

    own = _own_class(target, create=False)
    if own is not None:
        own.__dict__[_TABLE_ATTR].pop(name, None)
        _drop_class_member(own, name)
    _instance_dict(target).pop(name, None)
    return True


def installed_names(target: Any, enumerable_only: bool = True) -> list[str]:
    """Names installed through the installer, in installation order."""
    return [
        name
        for name, descriptor in _table(target).items()
        if descriptor.enumerable or not enumerable_only
    ]
