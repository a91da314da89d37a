"""Models for synthesized members and decoration records.

- ValueDescriptor / AccessorDescriptor: the installable shape of one member.
  Exactly one of {value} or {get/set}, never both.
- DecorationRecord: one entry in a target's decoration registry.
- MethodSpec: typed snapshot of a MethodChain store, read by the synthesizer.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..utils import MISSING, to_list
from .keys import SpecKey


# =============================================================================
# Descriptors
# =============================================================================


class ValueDescriptor(BaseModel):
    """A member holding a direct value (usually the synthesized method)."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["value"] = "value"
    value: Any = None
    writable: bool = True
    enumerable: bool = True
    configurable: bool = True


class AccessorDescriptor(BaseModel):
    """A member backed by get/set handlers (a property)."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["accessor"] = "accessor"
    get: Callable[..., Any] | None = None
    set: Callable[..., Any] | None = None
    enumerable: bool = True
    configurable: bool = True


Descriptor = Annotated[
    Union[ValueDescriptor, AccessorDescriptor], Field(discriminator="kind")
]


def merge_descriptors(existing: Descriptor, new: Descriptor) -> Descriptor:
    """Carry flags from an overridden descriptor onto its replacement.

    The new descriptor decides the shape. When the result is an accessor, any
    value/writable attribute of the old descriptor is dropped.
    """
    flags = {
        "enumerable": existing.enumerable,
        "configurable": existing.configurable,
    }
    if isinstance(new, ValueDescriptor) and isinstance(existing, ValueDescriptor):
        flags["writable"] = existing.writable
    return new.model_copy(update=flags)


# =============================================================================
# Decoration registry
# =============================================================================


class DecorationRecord(BaseModel):
    """A member injected onto a foreign target by `decorate()`."""

    name: str
    kind: Literal["value", "accessor"] = "value"


# =============================================================================
# Spec snapshot
# =============================================================================


@dataclass
class MethodSpec:
    """Everything a MethodChain has accumulated, as read at synthesis time.

    Optional values that were never configured are MISSING, so a configured
    None stays distinguishable from "not set".
    """

    names: list = field(default_factory=list)
    type: Any = MISSING
    encase: Any = MISSING
    get: Callable[..., Any] | None = None
    set: Callable[..., Any] | None = None
    call: Callable[..., Any] | None = None
    initial: Any = MISSING
    default: Any = MISSING
    bind: Any = MISSING
    returns: Any = MISSING
    call_returns: Any = False
    alias: list = field(default_factory=list)
    factories: list = field(default_factory=list)
    define: bool = False
    get_set: bool = False
    decoration_target: Any = None
    camel: bool = False
    on_valid: Callable[..., Any] | None = None
    on_invalid: Callable[..., Any] | None = None
    override: Callable[..., Any] | None = None

    @classmethod
    def from_entries(cls, entries: dict) -> "MethodSpec":
        spec = cls()
        for key in SpecKey:
            if key.value not in entries:
                continue
            value = entries[key.value]
            if key in (SpecKey.NAMES, SpecKey.ALIAS, SpecKey.FACTORIES):
                value = to_list(value)
            setattr(spec, key.value, value)
        return spec

    @property
    def accessor_mode(self) -> bool:
        """Whether the member is installed as a get/set pair."""
        return bool(self.define) or bool(self.get_set)
