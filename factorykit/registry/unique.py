"""Process-wide uniqueness stores for unique() generators.

Each scope (usually one per factory) holds one set of emitted values per
field name. Stores are created lazily and live until cleared.
"""

import logging
import threading
from typing import Any, Callable, Hashable

from ..config import get_config
from ..core.errors import UnhashableUniqueValueError, UniqueValueExhaustedError

logger = logging.getLogger(__name__)


class UniqueRegistry:
    """scope -> field name -> set of previously emitted values.

    Thread-safe: each scope has its own lock, and the scope table has one
    for creating and clearing scopes.
    """

    def __init__(self) -> None:
        self._stores: dict[str, dict[str, set[Hashable]]] = {}
        self._scope_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def _scope_lock(self, scope: str) -> threading.Lock:
        with self._lock:
            if scope not in self._scope_locks:
                self._scope_locks[scope] = threading.Lock()
                self._stores[scope] = {}
            return self._scope_locks[scope]

    def draw(
        self,
        generator: Callable[[], Any],
        field_name: str,
        scope: str,
        max_retries: int,
    ) -> Any:
        """Call `generator` until it yields a value unseen in (scope, field).

        The first attempt always runs. No more than max(max_retries, 1)
        attempts are made in total. Rejected values are not recorded.

        The generator runs outside the scope lock, so it may itself call
        other unique() generators in the same scope.

        Raises:
            UniqueValueExhaustedError: If every attempt produced a seen value.
            UnhashableUniqueValueError: If the generator returns an unhashable value.
        """
        lock = self._scope_lock(scope)
        attempts = 0
        while True:
            value = generator()
            attempts += 1
            try:
                hash(value)
            except TypeError as e:
                raise UnhashableUniqueValueError(field_name, value) from e
            with lock:
                seen = self._stores[scope].setdefault(field_name, set())
                if value not in seen:
                    seen.add(value)
                    return value
            if attempts >= max_retries:
                break

        logger.warning(
            "Unique generator for '%s' exhausted after %d attempts (scope '%s')",
            field_name,
            attempts,
            scope,
        )
        raise UniqueValueExhaustedError(field_name, attempts, scope)

    def values(self, field_name: str, scope: str) -> frozenset:
        """Snapshot of the values recorded for (scope, field)."""
        lock = self._scope_lock(scope)
        with lock:
            return frozenset(self._stores[scope].get(field_name, ()))

    def clear(self, scope: str) -> None:
        """Forget every value recorded in one scope."""
        with self._scope_lock(scope):
            self._stores[scope] = {}
        logger.debug("Cleared unique store for scope '%s'", scope)

    def clear_all(self) -> None:
        """Forget every value in every scope."""
        with self._lock:
            scopes = list(self._scope_locks)
        for scope in scopes:
            with self._scope_locks[scope]:
                self._stores[scope] = {}
        logger.debug("Cleared all unique stores")


_registry = UniqueRegistry()


def get_unique_registry() -> UniqueRegistry:
    """Get the process-wide uniqueness registry."""
    return _registry


def unique(
    generator: Callable[[], Any],
    field_name: str,
    *,
    factory_id: str | None = None,
    max_retries: int | None = None,
) -> Callable[[], Any]:
    """Wrap a zero-argument generator so it never repeats a value.

    Args:
        generator: Produces candidate values (must return hashable values)
        field_name: Store key within the scope
        factory_id: Scope name (configured default scope if omitted)
        max_retries: Attempt bound per call, inclusive of the first attempt
            (configured default, 100, if omitted)

    Example:
        email = unique(lambda: fake.email(), "email", factory_id="users")
    """

    def next_unique() -> Any:
        config = get_config().unique
        scope = factory_id if factory_id is not None else config.default_scope
        retries = max_retries if max_retries is not None else config.max_retries
        return _registry.draw(generator, field_name, scope, retries)

    return next_unique


def clear_unique_store(factory_id: str | None = None) -> None:
    """Clear recorded values for one scope (the default scope if omitted)."""
    scope = factory_id if factory_id is not None else get_config().unique.default_scope
    _registry.clear(scope)


def clear_all_unique_stores() -> None:
    """Clear recorded values for every scope."""
    _registry.clear_all()
