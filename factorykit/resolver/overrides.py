"""Build overrides: top-level keys and `a__b__c` nested paths.

Nested keys are parsed once into an OverridePath. Applying a path walks
the built object, creating missing (or None) intermediate objects as empty
dicts, and sets the leaf.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..core.errors import InvalidOverrideError
from ..core.models import FieldKind
from ..utils import get_child, set_child
from .fields import classify_field, evaluate_independent

PATH_SEPARATOR = "__"


@dataclass(frozen=True)
class OverridePath:
    """A parsed nested override key: `profile__preferences__theme`."""

    key: str
    parts: tuple[str, ...]

    @property
    def root(self) -> str:
        return self.parts[0]

    @property
    def leaf(self) -> str:
        return self.parts[-1]


def parse_override_key(key: str) -> OverridePath | None:
    """Parse a nested override key; returns None for plain top-level keys.

    Raises:
        InvalidOverrideError: If the path has an empty segment.
    """
    if PATH_SEPARATOR not in key:
        return None
    parts = tuple(key.split(PATH_SEPARATOR))
    if any(not part for part in parts):
        raise InvalidOverrideError(
            f"Invalid override path {key!r}: empty segment between '{PATH_SEPARATOR}'"
        )
    return OverridePath(key=key, parts=parts)


@dataclass
class SplitOverrides:
    """Overrides partitioned by the resolution pass that applies them."""

    top_level: dict[str, Any]
    nested: list[tuple[OverridePath, Any]]


def split_overrides(overrides: Mapping[str, Any]) -> SplitOverrides:
    """Partition overrides into top-level keys and parsed nested paths."""
    top_level: dict[str, Any] = {}
    nested: list[tuple[OverridePath, Any]] = []
    for key, value in overrides.items():
        path = parse_override_key(key)
        if path is None:
            top_level[key] = value
        else:
            nested.append((path, value))
    return SplitOverrides(top_level=top_level, nested=nested)


def nested_override_value(path: OverridePath, value: Any) -> Any:
    """Resolve the value set by a nested override.

    Zero-argument callables are invoked. Dependent generators are not
    supported at nested paths.
    """
    definition = classify_field(value)
    if definition.kind is FieldKind.DEPENDENT:
        raise InvalidOverrideError(
            f"Override {path.key!r}: dependent generators are not supported "
            f"for nested paths; pass a value or a zero-argument callable"
        )
    return evaluate_independent(definition, copy_static=False)


def apply_nested_override(instance: Any, path: OverridePath, value: Any) -> None:
    """Set `value` at `path` inside `instance`, creating intermediates."""
    resolved = nested_override_value(path, value)
    target = instance
    try:
        for part in path.parts[:-1]:
            child = get_child(target, part)
            if child is None:
                child = {}
                set_child(target, part, child)
            target = child
        set_child(target, path.leaf, resolved)
    except TypeError as e:
        raise InvalidOverrideError(f"Override {path.key!r}: {e}") from e
