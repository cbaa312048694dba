"""Models shared across factorykit.

- FieldKind / FieldDefinition: the tagged variant every field value is
  normalized into before resolution
- Static, LazyFunction, LazyAttribute: explicit markers that pick a kind
  without relying on arity inspection
- DefineOptions, BuildOptions: validated option payloads for Factory calls
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Field definitions
# =============================================================================


class FieldKind(str, Enum):
    STATIC = "static"
    DIRECT = "direct"
    DEPENDENT = "dependent"


@dataclass(frozen=True)
class FieldDefinition:
    """A normalized field definition.

    `value` is the static value for STATIC, or the callable for DIRECT and
    DEPENDENT. `arity` is the number of positional arguments a DEPENDENT
    callable receives: 1 for `fn(attrs)`, 2 for `fn(attrs, fake)`.
    """

    kind: FieldKind
    value: Any
    arity: int = 0

    @property
    def is_dependent(self) -> bool:
        return self.kind is FieldKind.DEPENDENT


@dataclass(frozen=True)
class Static:
    """Marks a value as static, even when it is callable."""

    value: Any


@dataclass(frozen=True)
class LazyFunction:
    """Marks a callable as a zero-argument generator."""

    function: Callable[[], Any]


@dataclass(frozen=True)
class LazyAttribute:
    """Marks a callable as a dependent generator: fn(attrs, fake) or fn(attrs)."""

    function: Callable[..., Any]


# =============================================================================
# Option payloads
# =============================================================================


class DefineOptions(BaseModel):
    """Transient-field declarations accepted by Factory.define()."""

    model_config = ConfigDict(extra="forbid")

    transient_attributes: list[str] = Field(
        default_factory=list,
        description="Top-level field names stripped from built objects",
    )
    nested_transient_attributes: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Parent field name -> sub-keys stripped inside that field",
    )


class BuildOptions(BaseModel):
    """Per-build traits and overrides."""

    model_config = ConfigDict(extra="forbid")

    traits: list[str] = Field(default_factory=list)
    overrides: dict[str, Any] = Field(default_factory=dict)
