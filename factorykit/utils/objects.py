"""Child access helpers that treat mappings and attribute objects alike.

Built objects are usually dicts, but hooks and generators may hand back
dataclasses or pydantic models. These helpers let nested overrides and
transient stripping walk either shape.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

_MISSING = object()


def get_child(target: Any, key: str, default: Any = None) -> Any:
    """Read `key` from a mapping, or attribute `key` from any other object."""
    if isinstance(target, Mapping):
        return target.get(key, default)
    return getattr(target, key, default)


def has_child(target: Any, key: str) -> bool:
    if isinstance(target, Mapping):
        return key in target
    return get_child(target, key, _MISSING) is not _MISSING


def set_child(target: Any, key: str, value: Any) -> None:
    """Write `key` on a mutable mapping, or set attribute `key` otherwise.

    Raises:
        TypeError: If the target accepts neither item nor attribute assignment.
    """
    if isinstance(target, MutableMapping):
        target[key] = value
        return
    try:
        setattr(target, key, value)
    except (AttributeError, TypeError, ValueError) as e:
        raise TypeError(
            f"Cannot set '{key}' on {type(target).__name__} object: {e}"
        ) from e


def remove_child(target: Any, key: str) -> bool:
    """Delete `key` from a mapping or object. Returns False if it was absent."""
    if isinstance(target, MutableMapping):
        if key in target:
            del target[key]
            return True
        return False
    if not has_child(target, key):
        return False
    try:
        delattr(target, key)
    except (AttributeError, TypeError):
        return False
    return True
