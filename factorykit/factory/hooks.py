"""Before/after build hook pipeline.

States: RESOLVED -> BEFORE_HOOKS_APPLIED -> TRANSIENT_STRIPPED ->
AFTER_HOOKS_APPLIED -> FINAL.

The ordering lives in one generator, `_pipeline`, which yields each hook's
raw return value and receives the settled value back. `run_sync` and
`run_async` only differ in how they settle it, so sync and async builds
share one ordering.
"""

import inspect
import logging
from collections.abc import Generator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ..core.errors import AsyncHookError
from ..utils import accepts_positional, get_child, remove_child

logger = logging.getLogger(__name__)

Hook = Callable[..., Any]


class PipelineState(str, Enum):
    RESOLVED = "resolved"
    BEFORE_HOOKS_APPLIED = "before_hooks_applied"
    TRANSIENT_STRIPPED = "transient_stripped"
    AFTER_HOOKS_APPLIED = "after_hooks_applied"
    FINAL = "final"


@dataclass
class TransientSpec:
    """Which fields to strip between before- and after-build hooks."""

    attributes: list[str] = field(default_factory=list)
    nested: dict[str, list[str]] = field(default_factory=dict)
    prefix: str = "_"

    def is_transient(self, name: str) -> bool:
        if name in self.attributes:
            return True
        return bool(self.prefix) and isinstance(name, str) and name.startswith(self.prefix)


def strip_transient(obj: Any, spec: TransientSpec) -> Any:
    """Remove transient fields from `obj` in place and return it."""
    if isinstance(obj, Mapping):
        names = list(obj.keys())
    else:
        names = list(getattr(obj, "__dict__", {}).keys())
    for name in names:
        if spec.is_transient(name):
            remove_child(obj, name)
    # Declared names not present in the snapshot (e.g. class-level attributes)
    for name in spec.attributes:
        remove_child(obj, name)

    for parent, sub_keys in spec.nested.items():
        child = get_child(obj, parent)
        if child is None:
            continue
        for key in sub_keys:
            remove_child(child, key)
    return obj


def call_hook(hook: Hook, obj: Any, attributes: Mapping[str, Any]) -> Any:
    """Call `hook(obj, attributes)`, or `hook(obj)` if it takes one argument.

    Hooks without an inspectable signature (builtins such as `dict`) get
    one argument.
    """
    if accepts_positional(hook, 2, uninspectable=False):
        return hook(obj, attributes)
    return hook(obj)


@dataclass
class HookPipeline:
    """One build's pass through the hook lists."""

    before: Sequence[Hook]
    after: Sequence[Hook]
    transient: TransientSpec
    state: PipelineState = PipelineState.RESOLVED

    def _pipeline(
        self, obj: Any, attributes: Mapping[str, Any]
    ) -> Generator[Any, Any, Any]:
        for hook in self.before:
            obj = _replace(obj, (yield call_hook(hook, obj, attributes)))
        self.state = PipelineState.BEFORE_HOOKS_APPLIED

        obj = strip_transient(obj, self.transient)
        self.state = PipelineState.TRANSIENT_STRIPPED

        for hook in self.after:
            obj = _replace(obj, (yield call_hook(hook, obj, attributes)))
        self.state = PipelineState.AFTER_HOOKS_APPLIED

        self.state = PipelineState.FINAL
        return obj

    def run_sync(self, obj: Any, attributes: Mapping[str, Any]) -> Any:
        """Run every hook immediately.

        Raises:
            AsyncHookError: If a hook returns an awaitable.
        """
        steps = self._pipeline(obj, attributes)
        try:
            result = next(steps)
            while True:
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    steps.close()
                    raise AsyncHookError(
                        "A build hook returned an awaitable; use build_async() "
                        "for factories with asynchronous hooks"
                    )
                result = steps.send(result)
        except StopIteration as stop:
            logger.debug("Hook pipeline finished (sync)")
            return stop.value

    async def run_async(self, obj: Any, attributes: Mapping[str, Any]) -> Any:
        """Run every hook, awaiting each result before the next hook starts."""
        steps = self._pipeline(obj, attributes)
        try:
            result = next(steps)
            while True:
                if inspect.isawaitable(result):
                    result = await result
                result = steps.send(result)
        except StopIteration as stop:
            logger.debug("Hook pipeline finished (async)")
            return stop.value


def _replace(current: Any, returned: Any) -> Any:
    # Hooks that mutate in place and return None keep the working object
    return current if returned is None else returned
