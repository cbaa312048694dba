"""factorykit: declarative test-data factories.

Factories map field names to static values or generators, layer named
traits and caller overrides on top, thread transient fields through
dependent generators and hooks, and return a fresh object per build.

Usage:
    from factorykit import create_factory, sequence, unique

    users = create_factory("user").define(
        {
            "id": sequence(),
            "email": unique(lambda: fake.email(), "email"),
            "_first": lambda: "Ada",
            "greeting": lambda attrs: f"Hi {attrs['_first']}",
        }
    )
    users.build_many(3)
"""

from .config import (
    FactoryKitConfig,
    DataSourceConfig,
    TransientConfig,
    SequenceConfig,
    UniqueConfig,
    get_config,
    configure,
    reset_config,
)
from .core import (
    FactoryKitError,
    UniqueValueExhaustedError,
    UnhashableUniqueValueError,
    InvalidOverrideError,
    AsyncHookError,
    Static,
    LazyFunction,
    LazyAttribute,
    DefineOptions,
    BuildOptions,
    get_data_source,
    seed_data_source,
)
from .factory import Factory, create_factory, PipelineState
from .registry import (
    sequence,
    reset_sequence,
    current_sequence_value,
    unique,
    clear_unique_store,
    clear_all_unique_stores,
)

__all__ = [
    # Factory
    "Factory",
    "create_factory",
    "PipelineState",
    # Field markers
    "Static",
    "LazyFunction",
    "LazyAttribute",
    # Options
    "DefineOptions",
    "BuildOptions",
    # Registries
    "sequence",
    "reset_sequence",
    "current_sequence_value",
    "unique",
    "clear_unique_store",
    "clear_all_unique_stores",
    # Data source
    "get_data_source",
    "seed_data_source",
    # Config
    "FactoryKitConfig",
    "DataSourceConfig",
    "TransientConfig",
    "SequenceConfig",
    "UniqueConfig",
    "get_config",
    "configure",
    "reset_config",
    # Errors
    "FactoryKitError",
    "UniqueValueExhaustedError",
    "UnhashableUniqueValueError",
    "InvalidOverrideError",
    "AsyncHookError",
]
