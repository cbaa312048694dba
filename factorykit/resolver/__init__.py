"""Attribute resolution: field classification, override paths, layering passes."""

from .core import resolve, ResolutionResult, Attributes
from .fields import (
    classify_field,
    normalize_fields,
    evaluate_independent,
    evaluate_dependent,
)
from .overrides import (
    PATH_SEPARATOR,
    OverridePath,
    SplitOverrides,
    parse_override_key,
    split_overrides,
    apply_nested_override,
)

__all__ = [
    "resolve",
    "ResolutionResult",
    "Attributes",
    "classify_field",
    "normalize_fields",
    "evaluate_independent",
    "evaluate_dependent",
    "PATH_SEPARATOR",
    "OverridePath",
    "SplitOverrides",
    "parse_override_key",
    "split_overrides",
    "apply_nested_override",
]
