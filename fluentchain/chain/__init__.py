"""Chain building blocks: Chainable → ChainedMap → MethodChain / Chain."""

from .chainable import Chainable
from .chained_map import ChainedMap
from .method_chain import MethodChain, ConfigurationError
from .chain import Chain

__all__ = [
    "Chainable",
    "ChainedMap",
    "MethodChain",
    "ConfigurationError",
    "Chain",
]
