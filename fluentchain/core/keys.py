"""Named keys for spec stores and metadata stores."""

from enum import Enum


class SpecKey(str, Enum):
    """Every key a MethodChain writes into its store."""

    NAMES = "names"
    TYPE = "type"
    ENCASE = "encase"
    GET = "get"
    SET = "set"
    CALL = "call"
    INITIAL = "initial"
    DEFAULT = "default"
    BIND = "bind"
    RETURNS = "returns"
    CALL_RETURNS = "call_returns"
    ALIAS = "alias"
    FACTORIES = "factories"
    DEFINE = "define"
    GET_SET = "get_set"
    DECORATION_TARGET = "decoration_target"
    CAMEL = "camel"
    ON_VALID = "on_valid"
    ON_INVALID = "on_invalid"
    OVERRIDE = "override"


class MetaKey(str, Enum):
    """Keys of a target's metadata store."""

    DECORATED = "decorated"
    SHORTHANDS = "shorthands"
    SCHEMA = "schema"
    OBSERVERS = "observers"
    TRANSFORMERS = "transformers"


# Metadata keys that hold an ordered set of names rather than a mapping
SET_LIKE_META_KEYS = frozenset(
    {MetaKey.DECORATED.value, MetaKey.OBSERVERS.value, MetaKey.TRANSFORMERS.value}
)


def key_name(key) -> object:
    """Plain store key for an enum member (str keys pass through)."""
    return key.value if isinstance(key, Enum) else key
