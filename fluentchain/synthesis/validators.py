"""Validator and encasing construction for synthesized methods.

A `type` on a MethodChain can be:
- a class, or tuple of classes (isinstance check)
- a type name string: "str", "int", "float", "number", "bool", "list",
  "dict", "callable", "none", "any", unions with "|" (e.g. "str|none")
- a predicate callable returning a truthy value for accepted input
- a mapping, turned into a traversable validator by `schema_factory`
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from ..core.models import MethodSpec
from ..utils import is_obj

logger = logging.getLogger(__name__)


class TypeValidationError(TypeError):
    """A value rejected by a synthesized method's type."""

    def __init__(self, name: str, value: Any, expected: Any):
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(
            f"{name!r} expected {describe_type(expected)}, "
            f"got {type(value).__name__}: {value!r}"
        )


_NAMED_TYPES: dict[str, Callable[[Any], bool]] = {
    "str": lambda v: isinstance(v, str),
    "string": lambda v: isinstance(v, str),
    "int": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "float": lambda v: isinstance(v, float),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "bool": lambda v: isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "list": lambda v: isinstance(v, (list, tuple)),
    "array": lambda v: isinstance(v, (list, tuple)),
    "dict": lambda v: isinstance(v, Mapping),
    "object": lambda v: isinstance(v, Mapping),
    "callable": callable,
    "function": callable,
    "none": lambda v: v is None,
    "null": lambda v: v is None,
    "any": lambda v: True,
}


def describe_type(expected: Any) -> str:
    if isinstance(expected, type):
        return expected.__name__
    if isinstance(expected, tuple):
        return " | ".join(describe_type(t) for t in expected)
    if isinstance(expected, str):
        return expected
    if isinstance(expected, TraversableValidator):
        return f"schema({', '.join(expected.schema)})"
    return getattr(expected, "__name__", repr(expected))


def build_validator(expected: Any) -> Callable[[Any], bool]:
    """Turn any supported `type` value into a predicate.

    Raises:
        ValueError: for an unknown type name string.
    """
    if isinstance(expected, TraversableValidator):
        return expected
    if isinstance(expected, type) or (
        isinstance(expected, tuple) and all(isinstance(t, type) for t in expected)
    ):
        return lambda value: isinstance(value, expected)
    if isinstance(expected, str):
        checks = []
        for part in expected.split("|"):
            part = part.strip().lower()
            if part not in _NAMED_TYPES:
                raise ValueError(f"Unknown type name {part!r} in {expected!r}")
            checks.append(_NAMED_TYPES[part])
        return lambda value: any(check(value) for check in checks)
    if is_obj(expected):
        return schema_factory("schema", expected)
    if callable(expected):
        return lambda value: bool(expected(value))
    raise ValueError(f"Unsupported type: {expected!r}")


class TraversableValidator:
    """Validates a mapping against a nested schema.

    Every key in `schema` must be present in the value and pass its own
    validator; nested mappings are validated recursively. Extra keys are
    allowed.
    """

    def __init__(self, name: str, schema: Mapping):
        self.name = name
        self.schema = dict(schema)
        self._validators = {
            key: schema_factory(f"{name}.{key}", expected)
            if is_obj(expected)
            else build_validator(expected)
            for key, expected in self.schema.items()
        }

    def __call__(self, value: Any) -> bool:
        return not self.errors(value)

    def errors(self, value: Any) -> list[str]:
        """Dotted paths of every key that failed."""
        if not isinstance(value, Mapping):
            return [self.name]
        failed = []
        for key, validator in self._validators.items():
            if key not in value:
                failed.append(f"{self.name}.{key}")
            elif isinstance(validator, TraversableValidator):
                failed.extend(validator.errors(value[key]))
            elif not validator(value[key]):
                failed.append(f"{self.name}.{key}")
        return failed

    def __repr__(self) -> str:
        return f"TraversableValidator({self.name!r}, keys={list(self.schema)})"


def schema_factory(name: str, schema: Mapping) -> TraversableValidator:
    return TraversableValidator(name, schema)


def validator_method_factory(
    name: str, parent: Any, spec: MethodSpec
) -> Callable[..., Any]:
    """Build the call/set function enforcing `spec.type`.

    Accepted values go to `on_valid` when configured, else to the wired call
    handler (by default a store write). Rejected values go to `on_invalid`
    with a TypeValidationError; without `on_invalid` the error is raised.
    """
    is_valid = build_validator(spec.type)
    accept = spec.on_valid or spec.call
    reject = spec.on_invalid

    def validated(*args: Any) -> Any:
        value = args[0] if args else None
        if is_valid(value):
            return accept(value)
        error = TypeValidationError(name, value, spec.type)
        logger.debug("Rejected value for %r: %s", name, error)
        if reject is None:
            raise error
        return reject(error)

    validated.validator = is_valid
    return validated


def method_encasing_factory(
    name: str, parent: Any, spec: MethodSpec, method: Callable[..., Any] | None
) -> Callable[..., Any]:
    """Wrap a callable so its failures and results are routed to handlers.

    The wrapped callable is `spec.encase` when that is callable itself,
    else the existing `method`, else the wired call handler. Exceptions go to
    `on_invalid` (re-raised without one); results go through `on_valid` when
    configured.
    """
    if callable(spec.encase):
        wrapped = spec.encase
    elif method is not None:
        wrapped = method
    else:
        wrapped = spec.call

    on_valid = spec.on_valid
    on_invalid = spec.on_invalid

    def encased(*args: Any, **kwargs: Any) -> Any:
        try:
            result = wrapped(*args, **kwargs)
        except Exception as exc:
            if on_invalid is None:
                raise
            logger.debug("Encased %r raised %s, routing to on_invalid", name, exc)
            return on_invalid(exc)
        if on_valid is not None:
            return on_valid(result)
        return result

    encased.encased = wrapped
    return encased
