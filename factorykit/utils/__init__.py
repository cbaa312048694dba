"""Pure utility functions for factorykit.

This module contains pure functions with ZERO dependencies on factorykit
models or other factorykit modules, so they can be imported from anywhere
without circular import risk.

Modules:
- arity: callable signature inspection
- objects: uniform child access for mappings and attribute objects
"""

from .arity import required_positional_count, accepts_positional
from .objects import get_child, has_child, set_child, remove_child

__all__ = [
    # Arity
    "required_positional_count",
    "accepts_positional",
    # Objects
    "get_child",
    "has_child",
    "set_child",
    "remove_child",
]
