"""Factory: the public handle for declaring and building test objects.

A factory accumulates base field definitions, named traits, transient-field
declarations and hook lists. Each build runs one resolution followed by one
pass through the hook pipeline and returns a fresh object.

Example:
    users = (
        create_factory("user")
        .define({
            "id": sequence(),
            "_first": lambda: "John",
            "full_name": lambda attrs, fake: f"{attrs['_first']} {fake.last_name()}",
        })
        .trait("admin", {"role": "admin"})
        .after_build(lambda user: {**user, "built": True})
    )
    users.build(traits=["admin"], overrides={"profile__theme": "dark"})
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..config import get_config
from ..core.data_source import get_data_source
from ..core.models import BuildOptions, DefineOptions, FieldDefinition, LazyFunction
from ..resolver import ResolutionResult, normalize_fields, resolve
from .hooks import Hook, HookPipeline, TransientSpec

logger = logging.getLogger(__name__)


class Factory:
    """Blueprint producing instances of one object shape.

    Configuration calls (define, trait, before_build, after_build) return
    the factory for chaining. Builds only read the configuration.
    """

    def __init__(self, name: str | None = None, data_source: Any = None):
        self.name = name or "factory"
        self._data_source = data_source
        self._fields: dict[str, FieldDefinition] = {}
        self._traits: dict[str, dict[str, FieldDefinition]] = {}
        self._transient: list[str] = []
        self._nested_transient: dict[str, list[str]] = {}
        self._before_hooks: list[Hook] = []
        self._after_hooks: list[Hook] = []

    def __repr__(self) -> str:
        return (
            f"Factory(name={self.name!r}, fields={list(self._fields)}, "
            f"traits={list(self._traits)})"
        )

    # ── Configuration ──

    def define(
        self,
        fields: Mapping[str, Any] | None = None,
        options: DefineOptions | Mapping[str, Any] | None = None,
    ) -> "Factory":
        """Merge field definitions into the base definition.

        Later calls replace same-named fields (keeping their original
        position). `options` registers transient fields; declarations
        accumulate across calls.

        Args:
            fields: Field name -> static value or generator
            options: DefineOptions, or a mapping with `transient_attributes`
                and/or `nested_transient_attributes`
        """
        merged = dict(fields or {})
        self._fields.update(_normalize(merged))

        if options is not None:
            if not isinstance(options, DefineOptions):
                options = DefineOptions.model_validate(dict(options))
            for name in options.transient_attributes:
                if name not in self._transient:
                    self._transient.append(name)
            for parent, keys in options.nested_transient_attributes.items():
                known = self._nested_transient.setdefault(parent, [])
                known.extend(k for k in keys if k not in known)

        logger.debug(f"[{self.name}] defined fields: {list(merged)}")
        return self

    def trait(self, name: str, fields: Mapping[str, Any]) -> "Factory":
        """Store (or replace) a named trait."""
        self._traits[name] = _normalize(fields)
        return self

    def before_build(self, hook: Hook) -> "Factory":
        """Append a hook run before transient fields are stripped.

        Hooks are called as hook(obj, attributes) or hook(obj) and return the
        replacement object (None keeps the current one).
        """
        self._before_hooks.append(hook)
        return self

    def after_build(self, hook: Hook) -> "Factory":
        """Append a hook run after transient fields are stripped."""
        self._after_hooks.append(hook)
        return self

    # ── Introspection ──

    @property
    def fields(self) -> list[str]:
        return list(self._fields)

    @property
    def trait_names(self) -> list[str]:
        return list(self._traits)

    @property
    def transient_attributes(self) -> list[str]:
        return list(self._transient)

    @property
    def data_source(self) -> Any:
        return self._data_source if self._data_source is not None else get_data_source()

    # ── Building ──

    def _resolve(self, options: BuildOptions) -> ResolutionResult:
        return resolve(
            self._fields,
            self._traits,
            options.traits,
            options.overrides,
            self.data_source,
        )

    def _pipeline(self) -> HookPipeline:
        return HookPipeline(
            before=list(self._before_hooks),
            after=list(self._after_hooks),
            transient=TransientSpec(
                attributes=list(self._transient),
                nested={k: list(v) for k, v in self._nested_transient.items()},
                prefix=get_config().transient.prefix,
            ),
        )

    def build(
        self,
        traits: Sequence[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> Any:
        """Build one instance.

        Args:
            traits: Trait names applied in order
            overrides: Field overrides; `a__b__c` keys set nested fields

        Raises:
            AsyncHookError: If a hook returns an awaitable (use build_async).
        """
        options = _build_options(traits, overrides)
        result = self._resolve(options)
        return self._pipeline().run_sync(result.instance, result.attributes)

    async def build_async(
        self,
        traits: Sequence[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> Any:
        """Build one instance, awaiting each hook before running the next."""
        options = _build_options(traits, overrides)
        result = self._resolve(options)
        return await self._pipeline().run_async(result.instance, result.attributes)

    def build_many(
        self,
        count: int,
        traits: Sequence[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> list[Any]:
        """Build `count` independent instances sequentially."""
        _check_count(count)
        return [self.build(traits, overrides) for _ in range(count)]

    async def build_many_async(
        self,
        count: int,
        traits: Sequence[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> list[Any]:
        """Build `count` instances sequentially with async hooks."""
        _check_count(count)
        return [await self.build_async(traits, overrides) for _ in range(count)]


def _normalize(fields: Mapping[str, Any]) -> dict[str, FieldDefinition]:
    # A factory used as a field value builds a fresh sub-object per build
    return normalize_fields(
        {
            name: LazyFunction(value.build) if isinstance(value, Factory) else value
            for name, value in fields.items()
        }
    )


def _build_options(
    traits: Sequence[str] | None, overrides: Mapping[str, Any] | None
) -> BuildOptions:
    if isinstance(traits, str):
        traits = [traits]
    return BuildOptions(traits=list(traits or []), overrides=dict(overrides or {}))


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"count must be an int, got {type(count).__name__}")
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")


def create_factory(name: str | None = None, data_source: Any = None) -> Factory:
    """Create an empty factory.

    Args:
        name: Label used in logs and repr
        data_source: Object passed to dependent generators (the shared Faker
            instance for the configured locale if omitted)
    """
    return Factory(name=name, data_source=data_source)
