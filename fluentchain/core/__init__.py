"""Core keys and models for fluentchain."""

from .keys import SpecKey, MetaKey, SET_LIKE_META_KEYS, key_name
from .models import (
    ValueDescriptor,
    AccessorDescriptor,
    Descriptor,
    DecorationRecord,
    MethodSpec,
    merge_descriptors,
)

__all__ = [
    # Keys
    "SpecKey",
    "MetaKey",
    "SET_LIKE_META_KEYS",
    "key_name",
    # Models
    "ValueDescriptor",
    "AccessorDescriptor",
    "Descriptor",
    "DecorationRecord",
    "MethodSpec",
    "merge_descriptors",
]
