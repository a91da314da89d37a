"""MethodChain: the fluent spec accumulator.

A MethodChain collects everything needed to synthesize one or more members
on its parent, then `build()` installs them and hands back the parent:

    chain = Chain()
    chain.method("eh").type(int).default(1).build()
    chain.eh(5)
    chain.get("eh")  # 5

Every configuration call returns the MethodChain. `build()` consumes it: the
store is cleared and the parent link dropped, so an instance must not be
reused afterwards (a second `build()` is a no-op).
"""

import logging
from typing import Any, Callable

from ..config import get_config
from ..core.keys import MetaKey, SpecKey
from ..meta.registry import ensure_meta
from ..synthesis.synthesizer import synthesize
from ..synthesis.validators import schema_factory
from ..utils import MISSING, camel_case, is_function, is_obj, to_list
from .chained_map import ChainedMap

logger = logging.getLogger(__name__)

# Keys of a name-mapping entry handled by name() itself, never via from_()
_HANDLER_KEYS = frozenset({"get", "set", "call", "name", "names"})


class ConfigurationError(ValueError):
    """A MethodChain was configured in a way that cannot be built."""


class MethodChain(ChainedMap):
    """Accumulates a member definition for `parent`."""

    def __init__(self, parent: Any):
        super().__init__(parent)
        self._consumed = False

        self.extend(
            [
                SpecKey.ON_INVALID,
                SpecKey.ON_VALID,
                SpecKey.INITIAL,
                SpecKey.DEFAULT,
                SpecKey.TYPE,
                SpecKey.CALL_RETURNS,
                SpecKey.DECORATION_TARGET,
            ]
        )

        # promise-style aliases
        self.then = self.on_valid
        self.catch = self.on_invalid

    @property
    def consumed(self) -> bool:
        """Whether `build()` has already run."""
        return self._consumed

    # ── Names ──

    def name(self, names: Any) -> "MethodChain":
        """Set the member name(s): a string, a list, or a mapping.

        In a mapping, a callable value becomes the member's call handler;
        a mapping value is applied with `from_()`, with its `get`/`set`/`call`
        entries routed to the handlers (both `get` and `set` make it an
        accessor).

        Example:
            chain.method({
                "shout": lambda text: text.upper(),
                "size": {"get": read_size, "set": write_size},
            }).build()
        """
        if is_obj(names):
            members = dict(names)
            by_camel = {camel_case(str(key)): value for key, value in members.items()}

            def configure_member(name: str, parent: Any) -> None:
                member = members.get(name, by_camel.get(name))
                if is_function(member):
                    self.define(False).get_set(False).on_call(member)
                elif is_obj(member):
                    self.from_({k: v for k, v in member.items() if k not in _HANDLER_KEYS})
                    if member.get("set"):
                        self.on_set(member["set"])
                    if member.get("get"):
                        self.on_get(member["get"])
                    if member.get("call"):
                        self.on_call(member["call"])
                    if member.get("set") and member.get("get"):
                        self.define().get_set()

            self.factory(configure_member)
            names = list(members)

        return self.set(SpecKey.NAMES, to_list(names))

    def method(self, names: Any) -> Any:
        """Name this spec, or, when it is already named, build it and start
        the next one on the parent."""
        if not self.has(SpecKey.NAMES):
            return self.name(names)
        return self.build().methods(names)

    methods = method

    def camel_case(self) -> "MethodChain":
        """Install names in camel form ("is-enabled" → "isEnabled")."""
        return self.set(SpecKey.CAMEL, True)

    def alias(self, names: Any) -> "MethodChain":
        return self.tap(SpecKey.ALIAS, lambda old, merge: merge(old, to_list(names)))

    # ── Handlers ──

    def on_get(self, fn: Callable[[], Any]) -> "MethodChain":
        return self.set(SpecKey.GET, fn)

    def on_set(self, fn: Callable[[Any], Any]) -> "MethodChain":
        return self.set(SpecKey.SET, fn)

    def on_call(self, fn: Callable[..., Any]) -> "MethodChain":
        return self.set(SpecKey.CALL, fn)

    def override(self, fn: Callable[..., Any]) -> "MethodChain":
        """Decorate an existing callable instead of the default store write."""
        return self.set(SpecKey.OVERRIDE, fn)

    def encase(self, x: Any = True) -> "MethodChain":
        """Wrap a callable so its errors go to `on_invalid`.

        `x` may name a member of the parent, be a callable, or be True to wrap
        the existing member / call handler.
        """
        resolved = getattr(self.parent, x, None) if isinstance(x, str) else None
        return self.set(SpecKey.ENCASE, resolved or x or True)

    # ── Composition ──

    def bind(self, target: Any = MISSING) -> "MethodChain":
        """Pass `target` (default: the parent) as the first argument of every
        explicit handler."""
        return self.set(SpecKey.BIND, self.parent if target is MISSING else target)

    def returns(self, value: Any = MISSING, call_returns: bool = False) -> "MethodChain":
        """Replace the member's return value.

        With `call_returns=True`, `value(result, *args)` is returned instead.
        Defaults to returning the parent.
        """
        if value is MISSING:
            value = self.parent
        return self.set(SpecKey.RETURNS, value).set(SpecKey.CALL_RETURNS, call_returns)

    chainable = returns

    def factory(self, fn: Callable[[str, Any], Any]) -> "MethodChain":
        """Queue `fn(name, parent)`, run once per name during `build()`."""
        return self.tap(SpecKey.FACTORIES, lambda old, merge: merge(old, [fn]))

    def define(self, x: bool = True) -> "MethodChain":
        return self.set(SpecKey.DEFINE, x)

    def get_set(self, x: bool = True) -> "MethodChain":
        return self.set(SpecKey.GET_SET, x)

    def decorate(self, target: Any = None) -> "MethodChain":
        """Install onto `target` (default: the parent's parent) instead.

        Calling a decorated member returns its own truthy result, else the
        decorated object, so chaining continues on that object.

        Raises:
            ConfigurationError: no target could be resolved (strict mode only;
                otherwise this is a logged no-op).
        """
        if target is None:
            target = getattr(self.parent, "parent", None)
        if target is None:
            if get_config().strict:
                raise ConfigurationError(
                    "decorate() needs a target: pass one, or build from a chain that has a parent"
                )
            logger.warning("decorate() called without a resolvable target, ignoring")
            return self

        self.decoration_target(target)
        ensure_meta(target)
        owner = self.parent

        def decorated_result(result: Any, *args: Any) -> Any:
            return result if result and result is not owner else target

        return self.factory(
            lambda name, parent: self.returns(decorated_result, call_returns=True)
        )

    def auto_increment(self) -> "MethodChain":
        """Each call increments a counter stored under the member name."""

        def increment(name: str, parent: Any) -> None:
            self.set(SpecKey.INITIAL, 0).set(
                SpecKey.CALL,
                lambda *args: parent.tap(name, lambda num, merge: (num or 0) + 1),
            )

        return self.factory(increment)

    # ── Schema ──

    def schema(self, obj: dict) -> "MethodChain":
        """Build one validated member per key of `obj`.

        Values are types (see `fluentchain.synthesis.validators`); nested
        mappings validate nested data. `on_invalid`, `on_valid`, `define` and
        `get_set` configured on this chain carry over to every member.

        Example:
            chain.method("person").schema({"name": str, "age": int})
        """
        entries = self.entries()
        meta = ensure_meta(self.parent)

        for key, value in obj.items():
            builder = self._builder_for(key)
            if entries.get(SpecKey.ON_INVALID.value):
                builder.on_invalid(entries[SpecKey.ON_INVALID.value])
            if entries.get(SpecKey.ON_VALID.value):
                builder.on_valid(entries[SpecKey.ON_VALID.value])
            if entries.get(SpecKey.DEFINE.value):
                builder.define()
            if entries.get(SpecKey.GET_SET.value):
                builder.get_set()

            if is_obj(value):
                builder.type(schema_factory(key, value))
            else:
                builder.type(value)

            if meta is not None:
                meta(MetaKey.SCHEMA, key, value)
            builder.build()

        return self

    def _builder_for(self, key: str) -> "MethodChain":
        make = getattr(self.parent, "method", None)
        if callable(make):
            return make(key)
        return MethodChain(self.parent).name(key)

    # ── Materialization ──

    def build(self, return_value: Any = MISSING) -> Any:
        """Install every configured name, then consume this spec.

        Returns `return_value` when given, else the parent.
        """
        parent = self.parent
        if self._consumed:
            logger.debug("build() on a consumed MethodChain is a no-op")
        else:
            installed = synthesize(self)
            logger.debug("Built %d member(s): %s", len(installed), installed)
            self.clear()
            self.parent = None
            self._consumed = True
        return parent if return_value is MISSING else return_value

    def to_number(self) -> int:
        """Build and return 0, for chains that end in a numeric context."""
        return self.build(0)
