"""Pytest configuration and shared fixtures."""

import pytest

import factorykit.config as config_module
from factorykit import (
    FactoryKitConfig,
    clear_all_unique_stores,
    configure,
    reset_config,
    reset_sequence,
)
from factorykit.core import reset_data_sources


@pytest.fixture(autouse=True)
def isolated_factorykit():
    """Fresh config, registries and data sources for every test."""
    # Tests never read the developer's config file or .env
    original_dotenv_loaded = config_module._dotenv_loaded
    configure(FactoryKitConfig())
    reset_sequence()
    clear_all_unique_stores()
    reset_data_sources()

    yield

    reset_config()
    reset_sequence()
    clear_all_unique_stores()
    reset_data_sources()
    config_module._dotenv_loaded = original_dotenv_loaded


@pytest.fixture
def fixed_source():
    """A stand-in data source with predictable values."""

    class FixedSource:
        def first_name(self):
            return "Ada"

        def last_name(self):
            return "Lovelace"

        def email(self):
            return "ada@example.com"

    return FixedSource()
