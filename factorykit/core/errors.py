"""Exception taxonomy for factorykit.

Generator and hook exceptions are never wrapped: they propagate to the
caller of build() unchanged. The classes here cover failures raised by
factorykit itself.
"""


class FactoryKitError(Exception):
    """Base class for errors raised by factorykit."""

    pass


class UniqueValueExhaustedError(FactoryKitError):
    """Raised when a unique() generator cannot produce a novel value."""

    def __init__(self, field_name: str, attempts: int, scope: str):
        self.field_name = field_name
        self.attempts = attempts
        self.scope = scope
        super().__init__(
            f"Could not generate unique value for field '{field_name}' "
            f"after {attempts} attempts (scope '{scope}')"
        )


class UnhashableUniqueValueError(FactoryKitError):
    """Raised when a unique() generator returns a value that cannot be hashed."""

    def __init__(self, field_name: str, value: object):
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"unique() generator for field '{field_name}' returned an unhashable "
            f"{type(value).__name__}; return a hashable value such as a str or tuple"
        )


class InvalidOverrideError(FactoryKitError):
    """Raised when a build override cannot be applied."""

    pass


class AsyncHookError(FactoryKitError):
    """Raised when a hook returns an awaitable during a synchronous build."""

    pass
