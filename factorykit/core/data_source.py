"""Faker-backed data source handed to dependent generators.

The resolver treats the data source as opaque: it is passed through to
dependent generators and never inspected.
"""

from __future__ import annotations

import logging

from faker import Faker

from ..config import get_config

logger = logging.getLogger(__name__)

_faker_cache: dict[str, Faker] = {}


def get_data_source(locale: str | None = None) -> Faker:
    """Get or create the shared Faker instance for a locale.

    Defaults to the configured locale. A configured seed is applied once,
    when the instance is first created.
    """
    config = get_config().data_source
    locale = locale or config.locale
    if locale in _faker_cache:
        return _faker_cache[locale]

    fake = Faker(locale)
    if config.seed is not None:
        fake.seed_instance(config.seed)
    logger.debug("Created Faker data source for locale %s", locale)
    _faker_cache[locale] = fake
    return fake


def seed_data_source(seed: int, locale: str | None = None) -> None:
    """Seed the shared data source for reproducible builds."""
    get_data_source(locale).seed_instance(seed)


def reset_data_sources() -> None:
    """Drop cached Faker instances (next call recreates them from config)."""
    _faker_cache.clear()
