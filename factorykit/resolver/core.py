"""Attribute resolution engine.

Turns a base definition, a list of requested traits, and build overrides
into one resolved dict. The passes run in a fixed order:

    A. base STATIC/DIRECT fields, declaration order
    B. each requested trait's STATIC/DIRECT fields, request order
    C. top-level overrides (zero-argument callables invoked)
    D. base DEPENDENT fields, declaration order
    E. each requested trait's DEPENDENT fields, request order, then
       top-level DEPENDENT overrides
    F. nested `a__b__c` overrides

Precedence is base < trait (later beats earlier) < override. A DEPENDENT
generator only runs when its layer is the winning layer for that field,
so it never overwrites a trait value or a caller override.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..core.models import FieldDefinition
from .fields import classify_field, evaluate_dependent, evaluate_independent
from .overrides import apply_nested_override, split_overrides

logger = logging.getLogger(__name__)

_BASE_LAYER = -1
_OVERRIDE_LAYER = 1 << 30


class Attributes(dict):
    """Snapshot of resolved fields handed to dependent generators.

    Supports both `attrs["first_name"]` and `attrs.first_name`.
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None


@dataclass
class ResolutionResult:
    """Output of resolve().

    `instance` is the object handed to the hook pipeline. `attributes` is a
    shallow copy taken before transient stripping; hooks receive it as
    their second argument.
    """

    instance: dict[str, Any]
    attributes: dict[str, Any]


def _applied_traits(
    traits: Mapping[str, Mapping[str, FieldDefinition]], trait_names: Sequence[str]
) -> list[tuple[str, Mapping[str, FieldDefinition]]]:
    applied = []
    for name in trait_names:
        trait = traits.get(name)
        if trait is None:
            logger.warning(f"Trait '{name}' is not defined, skipping")
            continue
        applied.append((name, trait))
    return applied


def _winning_layers(
    definition: Mapping[str, FieldDefinition],
    applied: list[tuple[str, Mapping[str, FieldDefinition]]],
    top_level_overrides: Mapping[str, Any],
) -> dict[str, int]:
    """Map each field name to the highest layer that defines it."""
    owners = {name: _BASE_LAYER for name in definition}
    for index, (_, trait) in enumerate(applied):
        for name in trait:
            owners[name] = index
    for name in top_level_overrides:
        owners[name] = _OVERRIDE_LAYER
    return owners


def _set_independent(
    instance: dict[str, Any], fields: Mapping[str, FieldDefinition]
) -> None:
    for name, field_def in fields.items():
        if not field_def.is_dependent:
            instance[name] = evaluate_independent(field_def)


def resolve(
    definition: Mapping[str, FieldDefinition],
    traits: Mapping[str, Mapping[str, FieldDefinition]] | None = None,
    trait_names: Sequence[str] = (),
    overrides: Mapping[str, Any] | None = None,
    data_source: Any = None,
) -> ResolutionResult:
    """Resolve every field of one instance.

    Args:
        definition: Base field definitions, in declaration order
        traits: All trait definitions known to the factory
        trait_names: Traits requested for this build, in application order
        overrides: Caller overrides; `__` in a key denotes a nested path
        data_source: Passed as the second argument to dependent generators

    Returns:
        ResolutionResult with the resolved instance and a pre-strip copy.

    Exceptions raised by generators propagate unchanged.
    """
    applied = _applied_traits(traits or {}, trait_names)
    split = split_overrides(overrides or {})
    top_level = {name: classify_field(value) for name, value in split.top_level.items()}
    owners = _winning_layers(definition, applied, top_level)

    instance: dict[str, Any] = {}

    # Pass A: base static values and zero-argument generators
    _set_independent(instance, definition)

    # Pass B: trait static values and zero-argument generators
    for _, trait in applied:
        _set_independent(instance, trait)

    # Pass C: top-level overrides, visible to every dependent generator
    for name, field_def in top_level.items():
        if not field_def.is_dependent:
            instance[name] = evaluate_independent(field_def, copy_static=False)

    # Pass D: base dependent generators
    for name, field_def in definition.items():
        if field_def.is_dependent and owners[name] == _BASE_LAYER:
            instance[name] = evaluate_dependent(
                field_def, Attributes(instance), data_source
            )

    # Pass E: trait dependent generators, then dependent overrides
    for index, (_, trait) in enumerate(applied):
        for name, field_def in trait.items():
            if field_def.is_dependent and owners[name] == index:
                instance[name] = evaluate_dependent(
                    field_def, Attributes(instance), data_source
                )
    for name, field_def in top_level.items():
        if field_def.is_dependent:
            instance[name] = evaluate_dependent(
                field_def, Attributes(instance), data_source
            )

    # Pass F: nested overrides
    for path, value in split.nested:
        apply_nested_override(instance, path, value)

    logger.debug(
        "Resolved %d fields (traits=%s, overrides=%d)",
        len(instance),
        [name for name, _ in applied],
        len(split.top_level) + len(split.nested),
    )
    return ResolutionResult(instance=instance, attributes=dict(instance))
