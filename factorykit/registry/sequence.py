"""Process-wide monotonic counters for sequence() generators.

Counters are keyed by id, created lazily, and shared by every generator
bound to the same id. Thread-safe: each mutation holds the registry lock.
"""

import logging
import threading
import uuid
from typing import Any, Callable

from ..config import get_config

logger = logging.getLogger(__name__)


class SequenceRegistry:
    """Named integer counters.

    The stored value is the next value to hand out: after n calls it is
    start + n, and the last value returned was start + n - 1.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def ensure(self, sequence_id: str, start: int) -> None:
        """Create the counter at `start` unless it already exists."""
        with self._lock:
            self._counters.setdefault(sequence_id, start)

    def next_value(self, sequence_id: str, start: int) -> int:
        """Return the current value and advance the counter by one.

        A counter removed by reset() is re-created at `start`.
        """
        with self._lock:
            current = self._counters.get(sequence_id, start)
            self._counters[sequence_id] = current + 1
        return current

    def peek(self, sequence_id: str) -> int | None:
        """Next value the counter will hand out, or None if it doesn't exist."""
        with self._lock:
            return self._counters.get(sequence_id)

    def reset(self, sequence_id: str | None = None) -> None:
        """Remove one counter, or every counter when no id is given."""
        with self._lock:
            if sequence_id is None:
                self._counters.clear()
            else:
                self._counters.pop(sequence_id, None)
        logger.debug("Reset sequence %s", sequence_id or "<all>")

    def __contains__(self, sequence_id: str) -> bool:
        with self._lock:
            return sequence_id in self._counters


_registry = SequenceRegistry()


def get_sequence_registry() -> SequenceRegistry:
    """Get the process-wide sequence registry."""
    return _registry


def sequence(
    transform: Callable[[int], Any] | None = None,
    *,
    id: str | None = None,
    start: int | None = None,
) -> Callable[[], Any]:
    """Create a zero-argument generator backed by a named counter.

    Args:
        transform: Maps the counter value to the field value (identity if None)
        id: Counter name. A unique id is generated when omitted, so each
            call site gets its own counter.
        start: Initial value, applied only when the counter is first created.
            Defaults to the configured sequence start (1).

    Returns:
        A generator returning transform(n) for n = start, start + 1, ...

    Example:
        >>> next_email = sequence(lambda n: f"user{n}@example.com", id="email")
        >>> next_email(), next_email()
        ('user1@example.com', 'user2@example.com')
    """
    sequence_id = id if id is not None else f"seq_{uuid.uuid4().hex[:12]}"
    initial = start if start is not None else get_config().sequence.start
    _registry.ensure(sequence_id, initial)

    def next_in_sequence() -> Any:
        value = _registry.next_value(sequence_id, initial)
        return transform(value) if transform is not None else value

    next_in_sequence.sequence_id = sequence_id
    return next_in_sequence


def reset_sequence(id: str | None = None) -> None:
    """Reset a specific sequence counter, or all of them when no id is given."""
    _registry.reset(id)


def current_sequence_value(id: str) -> int | None:
    """Next value the named counter will produce, or None if it doesn't exist."""
    return _registry.peek(id)
