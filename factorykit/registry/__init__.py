"""Process-wide registries backing sequence() and unique() generators."""

from .sequence import (
    SequenceRegistry,
    sequence,
    reset_sequence,
    current_sequence_value,
    get_sequence_registry,
)
from .unique import (
    UniqueRegistry,
    unique,
    clear_unique_store,
    clear_all_unique_stores,
    get_unique_registry,
)

__all__ = [
    # Sequences
    "SequenceRegistry",
    "sequence",
    "reset_sequence",
    "current_sequence_value",
    "get_sequence_registry",
    # Uniqueness
    "UniqueRegistry",
    "unique",
    "clear_unique_store",
    "clear_all_unique_stores",
    "get_unique_registry",
]
