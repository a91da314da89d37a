"""Base class for every composable in a chain."""

from typing import Any, Callable


class Chainable:
    """Something that lives under a parent and can hand control back to it.

    Chainable objects are always truthy, even with an empty store.
    """

    def __init__(self, parent: Any = None):
        self.parent = parent

    def end(self) -> Any:
        """Return the parent, to continue chaining one level up."""
        return self.parent

    def when(
        self,
        condition: Any,
        true_fn: Callable[["Chainable"], Any] | None = None,
        false_fn: Callable[["Chainable"], Any] | None = None,
    ) -> "Chainable":
        """Run `true_fn(self)` or `false_fn(self)` depending on `condition`.

        Example:
            chain.when(is_prod, lambda c: c.set("minify", True))
        """
        if condition:
            if true_fn is not None:
                true_fn(self)
        elif false_fn is not None:
            false_fn(self)
        return self
