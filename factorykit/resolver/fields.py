"""Field classification and evaluation.

Every raw field value is normalized into a FieldDefinition before
resolution. Explicit markers (Static, LazyFunction, LazyAttribute) decide
the kind outright. Bare values fall back to these rules:

- classes (list, dict, a dataclass, ...) are DIRECT: called with no arguments
- callables with no required positional parameters are DIRECT, even if they
  could accept context
- callables with one or more required positional parameters are DEPENDENT
  and deferred until every non-dependent field is set
- callables whose signature cannot be inspected are DIRECT
- anything else is STATIC

Arity is the sole implicit discriminator. Wrap a callable in a marker when
the default reading is wrong for it.
"""

import copy
from collections.abc import Mapping
from typing import Any

from ..core.models import (
    FieldDefinition,
    FieldKind,
    LazyAttribute,
    LazyFunction,
    Static,
)
from ..utils import accepts_positional, required_positional_count


def _dependent(fn) -> FieldDefinition:
    arity = 2 if accepts_positional(fn, 2) else 1
    return FieldDefinition(FieldKind.DEPENDENT, fn, arity)


def classify_field(value: Any) -> FieldDefinition:
    """Normalize a raw field value into a FieldDefinition."""
    if isinstance(value, FieldDefinition):
        return value
    if isinstance(value, Static):
        return FieldDefinition(FieldKind.STATIC, value.value)
    if isinstance(value, LazyFunction):
        return FieldDefinition(FieldKind.DIRECT, value.function)
    if isinstance(value, LazyAttribute):
        return _dependent(value.function)
    if isinstance(value, type):
        return FieldDefinition(FieldKind.DIRECT, value)
    if callable(value):
        if required_positional_count(value) == 0:
            return FieldDefinition(FieldKind.DIRECT, value)
        return _dependent(value)
    return FieldDefinition(FieldKind.STATIC, value)


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, FieldDefinition]:
    """Classify every value of a field mapping, keeping declaration order."""
    return {name: classify_field(value) for name, value in fields.items()}


def evaluate_independent(definition: FieldDefinition, copy_static: bool = True) -> Any:
    """Produce the value of a STATIC or DIRECT field.

    Static values are deep-copied by default so builds never share
    mutable state through a definition.
    """
    if definition.kind is FieldKind.DIRECT:
        return definition.value()
    if definition.kind is FieldKind.STATIC:
        return copy.deepcopy(definition.value) if copy_static else definition.value
    raise ValueError("Dependent fields need resolved attributes; use evaluate_dependent")


def evaluate_dependent(
    definition: FieldDefinition, attributes: Mapping[str, Any], data_source: Any
) -> Any:
    """Call a DEPENDENT field with the attribute snapshot (and data source)."""
    if definition.arity >= 2:
        return definition.value(attributes, data_source)
    return definition.value(attributes)
