"""Pure utility functions for fluentchain.

This module contains pure functions with ZERO dependencies on other
fluentchain modules, so they can be imported from anywhere without
circular import risk.

Modules:
- predicates: capability checks and the MISSING sentinel
- merge: deep merge (list concatenation, mapping recursion)
- naming: camel/snake case normalization, list coercion
"""

from .predicates import (
    MISSING,
    is_missing,
    is_obj,
    is_array,
    is_function,
    is_true,
    is_empty,
)
from .merge import deep_merge
from .naming import camel_case, snake_case, to_list

__all__ = [
    # Predicates
    "MISSING",
    "is_missing",
    "is_obj",
    "is_array",
    "is_function",
    "is_true",
    "is_empty",
    # Merge
    "deep_merge",
    # Naming
    "camel_case",
    "snake_case",
    "to_list",
]
