"""Descriptor synthesis: turns an accumulated MethodChain into live members.

For each name (camel-cased first when configured):

1. Conflict detection: a non-configurable member is skipped; an existing
   callable is reused as the method to decorate further.
2. Default wiring: get/call/set handlers that were not supplied (or were
   themselves defaults) read/write the parent store under the name.
3. Factories run with (name, parent) and may reconfigure the chain.
4. Composition: bind → type validator or encasing → invoker → returns →
   initial value.
5. Descriptor assembly (value or accessor, merged over an existing one).
6. Installation on the decoration target, get/set shorthands, aliases.

The accumulator store is restored to its pre-name state between names, so one
name's factory output never leaks into the next.
"""

import logging
from types import FunctionType, MethodType
from typing import TYPE_CHECKING, Any, Callable

from ..config import get_config
from ..core.keys import MetaKey, SpecKey
from ..core.models import (
    AccessorDescriptor,
    MethodSpec,
    ValueDescriptor,
    merge_descriptors,
)
from ..meta.registry import ensure_meta
from ..utils import camel_case, is_missing, is_true, snake_case
from .installer import get_own_descriptor, install
from .validators import method_encasing_factory, validator_method_factory

if TYPE_CHECKING:
    from ..chain.method_chain import MethodChain

logger = logging.getLogger(__name__)

# Wrappers built here, renamed after their member in debug mode
_WRAPPER_NAMES = frozenset({"invoke", "returning", "validated", "encased"})


# =============================================================================
# Tags
# =============================================================================


def _tag(fn: Callable, attr: str) -> None:
    """Set a boolean marker on a plain function (builtins and bound methods
    cannot carry attributes)."""
    if isinstance(fn, FunctionType):
        setattr(fn, attr, True)


def is_defaulted(fn: Any) -> bool:
    """Whether a handler is fallback wiring rather than an explicit one."""
    return bool(getattr(fn, "defaulted", False))


def is_bindable(fn: Any) -> bool:
    """Whether `bind` may pass a receiver to `fn`.

    Defaults, wrappers built by an earlier synthesis and callables that
    already carry a receiver are left as they are.
    """
    if is_defaulted(fn) or getattr(fn, "synthesized", False):
        return False
    return getattr(fn, "__self__", None) is None


# =============================================================================
# Entry point
# =============================================================================


def synthesize(chain: "MethodChain") -> list[str]:
    """Install every name configured on `chain` onto its target.

    Returns the names that were actually installed (skipped names excluded).
    """
    parent = chain.parent
    baseline = chain.entries()
    spec = MethodSpec.from_entries(baseline)

    queue = list(spec.names)
    seen: set = set()
    installed = []

    while queue:
        raw = queue.pop(0)
        if raw in seen:
            continue
        seen.add(raw)
        name = camel_case(raw) if spec.camel else raw

        chain.store.clear()
        chain.store.update(baseline)

        added = _synthesize_name(chain, name, parent)
        if added is None:
            continue
        installed.append(name)
        queue.extend(n for n in added if n not in seen and n not in queue)

    return installed


# =============================================================================
# Per-name steps
# =============================================================================


def _read(chain: "MethodChain") -> MethodSpec:
    return MethodSpec.from_entries(chain.entries())


def _wire_defaults(chain: "MethodChain", name: str, parent: Any) -> None:
    """Default get/call/set handlers backed by the parent store."""

    def default_on_set(*args: Any) -> Any:
        # extra arguments are dropped
        return parent.set(name, args[0] if args else None)

    def default_on_get() -> Any:
        return parent.get(name)

    _tag(default_on_set, "defaulted")
    _tag(default_on_get, "defaulted")

    spec = _read(chain)
    if spec.get is None or is_defaulted(spec.get):
        chain.on_get(default_on_get)
    if spec.call is None or is_defaulted(spec.call):
        chain.on_call(default_on_set)
    if spec.set is None or is_defaulted(spec.set):
        chain.on_set(default_on_set)


def _bind_handlers(chain: "MethodChain", receiver: Any) -> None:
    for key in (SpecKey.GET, SpecKey.SET, SpecKey.CALL):
        handler = chain.get(key)
        if handler is not None and is_bindable(handler):
            chain.set(key, MethodType(handler, receiver))


def _invoker(call: Callable, default: Any) -> Callable[..., Any]:
    def invoke(*args: Any, **kwargs: Any) -> Any:
        if not args and not kwargs and not is_missing(default):
            return call(default)
        return call(*args, **kwargs)

    _tag(invoke, "synthesized")
    return invoke


def _returning(
    inner: Callable, returns: Any, call_returns: Any
) -> Callable[..., Any]:
    def returning(*args: Any, **kwargs: Any) -> Any:
        result = inner(*args, **kwargs)
        if is_true(call_returns):
            return returns(result, *args)
        return returns

    _tag(returning, "synthesized")
    return returning


def _synthesize_name(chain: "MethodChain", name: str, parent: Any) -> list | None:
    """Run steps 1-6 for one name. Returns names added by factories, or None
    when the name was skipped."""
    config = get_config()
    target = chain.get(SpecKey.DECORATION_TARGET)
    if target is None:
        target = parent
    method = None

    # 1. conflict detection
    existing = get_own_descriptor(target, name)
    if existing is not None:
        if not existing.configurable:
            logger.debug("Skipping non-configurable member %r", name)
            return None
        if isinstance(existing, ValueDescriptor) and callable(existing.value):
            method = existing.value
        elif isinstance(existing, AccessorDescriptor):
            if existing.get is not None:
                chain.on_get(existing.get)
            if existing.set is not None:
                chain.on_set(existing.set)
    if method is None and chain.get(SpecKey.OVERRIDE) is not None:
        method = chain.get(SpecKey.OVERRIDE)
    if method is not None:
        _tag(method, "decorated")
        chain.on_call(method).on_set(method)

    # 2. default wiring
    _wire_defaults(chain, name, parent)

    # 3. factories
    spec = _read(chain)
    names_before = list(spec.names)
    for factory in spec.factories:
        factory(name, parent)
    spec = _read(chain)
    added = [n for n in spec.names if n not in names_before]
    target = parent if spec.decoration_target is None else spec.decoration_target

    # 4. composition
    if not is_missing(spec.bind) and spec.bind is not None:
        _bind_handlers(chain, spec.bind)
        if method is not None and is_bindable(method):
            method = MethodType(method, spec.bind)
        spec = _read(chain)

    if not is_missing(spec.type):
        validated = validator_method_factory(name, parent, spec)
        _tag(validated, "synthesized")
        chain.set(SpecKey.CALL, validated).set(SpecKey.SET, validated)
        method = None
        spec = _read(chain)
    elif not is_missing(spec.encase) and spec.encase is not False:
        encased = method_encasing_factory(name, parent, spec, method)
        _tag(encased, "synthesized")
        chain.set(SpecKey.CALL, encased).set(SpecKey.SET, encased)
        method = encased
        spec = _read(chain)

    if method is None:
        method = _invoker(spec.call, spec.default)

    if not is_missing(spec.returns):
        method = _returning(method, spec.returns, spec.call_returns)

    if not is_missing(spec.initial):
        parent.set(name, spec.initial)

    if config.debug:
        if getattr(method, "__name__", None) in _WRAPPER_NAMES:
            method.__name__ = method.__qualname__ = name
        logger.debug(
            "Synthesizing %r: default=%r initial=%r returns=%r get=%r set=%r",
            name,
            spec.default,
            spec.initial,
            spec.returns,
            spec.get,
            spec.set,
        )

    # 5. descriptor assembly
    if spec.accessor_mode:
        descriptor = AccessorDescriptor(get=spec.get, set=spec.set)
    else:
        descriptor = ValueDescriptor(value=method)
    if existing is not None:
        descriptor = merge_descriptors(existing, descriptor)

    # 6. installation
    install(target, name, descriptor)

    shorthands = []
    if spec.get_set:
        meta = getattr(target, "meta", None)
        if callable(meta):
            meta(MetaKey.SHORTHANDS, name, spec.set)
        getter_name, setter_name = snake_case(f"get_{name}"), snake_case(f"set_{name}")
        install(target, getter_name, ValueDescriptor(value=spec.get))
        install(target, setter_name, ValueDescriptor(value=spec.set))
        shorthands = [getter_name, setter_name]

    for alias in spec.alias:
        install(target, alias, descriptor)

    if spec.decoration_target is not None:
        registry = ensure_meta(target)
        if registry is not None:
            for member in [name, *spec.alias]:
                registry.record_decoration(member, descriptor.kind)
            for member in shorthands:
                registry.record_decoration(member, "value")

    logger.debug("Synthesized %s %r on %s", descriptor.kind, name, type(target).__name__)
    return added
