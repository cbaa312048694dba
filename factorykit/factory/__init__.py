"""Factories and the build hook pipeline."""

from .core import Factory, create_factory
from .hooks import (
    HookPipeline,
    PipelineState,
    TransientSpec,
    strip_transient,
    call_hook,
)

__all__ = [
    "Factory",
    "create_factory",
    "HookPipeline",
    "PipelineState",
    "TransientSpec",
    "strip_transient",
    "call_hook",
]
