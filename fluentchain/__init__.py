"""fluentchain: synthesize chainable, fluent APIs on objects at run time.

    from fluentchain import Chain

    chain = Chain()
    chain.method("count").auto_increment().build()
    chain.count().count()
    chain.get("count")  # 2
"""

__version__ = "0.1.0"

from .chain import Chain, Chainable, ChainedMap, MethodChain, ConfigurationError
from .config import FluentChainConfig, configure, get_config, reset_config
from .core import (
    AccessorDescriptor,
    DecorationRecord,
    MetaKey,
    SpecKey,
    ValueDescriptor,
)
from .meta import (
    MetaStore,
    decorated_names,
    decoration_records,
    describe_decorations,
    undecorate,
)
from .synthesis import InstallError, TypeValidationError, install, uninstall
from .utils import MISSING, camel_case, deep_merge

__all__ = [
    "__version__",
    # Chains
    "Chain",
    "Chainable",
    "ChainedMap",
    "MethodChain",
    "ConfigurationError",
    # Config
    "FluentChainConfig",
    "configure",
    "get_config",
    "reset_config",
    # Models
    "AccessorDescriptor",
    "DecorationRecord",
    "MetaKey",
    "SpecKey",
    "ValueDescriptor",
    # Registry
    "MetaStore",
    "decorated_names",
    "decoration_records",
    "describe_decorations",
    "undecorate",
    # Installation
    "InstallError",
    "TypeValidationError",
    "install",
    "uninstall",
    # Utils
    "MISSING",
    "camel_case",
    "deep_merge",
]
