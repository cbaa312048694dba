"""Core models, errors and the data source shared by every factorykit module."""

from .errors import (
    FactoryKitError,
    UniqueValueExhaustedError,
    UnhashableUniqueValueError,
    InvalidOverrideError,
    AsyncHookError,
)
from .models import (
    FieldKind,
    FieldDefinition,
    Static,
    LazyFunction,
    LazyAttribute,
    DefineOptions,
    BuildOptions,
)
from .data_source import get_data_source, seed_data_source, reset_data_sources

__all__ = [
    # Errors
    "FactoryKitError",
    "UniqueValueExhaustedError",
    "UnhashableUniqueValueError",
    "InvalidOverrideError",
    "AsyncHookError",
    # Models
    "FieldKind",
    "FieldDefinition",
    "Static",
    "LazyFunction",
    "LazyAttribute",
    "DefineOptions",
    "BuildOptions",
    # Data source
    "get_data_source",
    "seed_data_source",
    "reset_data_sources",
]
