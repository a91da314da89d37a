"""Chain: the composable users build fluent APIs on.

    class Config(Chain):
        def __init__(self, parent=None):
            super().__init__(parent)
            self.methods(["host", "port"]).build()

    Config().host("localhost").port(8080).entries()
    # {"host": "localhost", "port": 8080}
"""

from typing import Any

from ..meta.store import MetaStore
from .chained_map import ChainedMap
from .method_chain import MethodChain


class Chain(ChainedMap):
    """A ChainedMap that can synthesize members on itself."""

    def __init__(self, parent: Any = None):
        super().__init__(parent)
        self.meta = MetaStore()

    def method(self, names: Any) -> MethodChain:
        """Start a MethodChain for `names` on this chain."""
        return MethodChain(self).name(names)

    methods = method

    def schema(self, obj: dict) -> "Chain":
        """Build one validated member per key of `obj` on this chain."""
        MethodChain(self).schema(obj)
        return self
