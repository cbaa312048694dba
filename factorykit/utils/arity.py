"""Callable signature inspection.

factorykit tells zero-argument generators apart from dependent ones by
counting positional parameters. All signature inspection lives here so the
rule is defined in one place.
"""

import inspect
from typing import Any, Callable

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _signature(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins and C extension callables expose no signature
        return None


def required_positional_count(fn: Callable[..., Any]) -> int:
    """Number of positional parameters without a default.

    Returns 0 when the signature cannot be inspected.
    """
    sig = _signature(fn)
    if sig is None:
        return 0
    return sum(
        1
        for p in sig.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


def accepts_positional(
    fn: Callable[..., Any], count: int, uninspectable: bool = True
) -> bool:
    """Whether `fn` can be called with `count` positional arguments.

    Returns `uninspectable` when the signature cannot be read.
    """
    sig = _signature(fn)
    if sig is None:
        return uninspectable
    params = list(sig.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return True
    return sum(1 for p in params if p.kind in _POSITIONAL) >= count
