"""Tests for configuration loading and the shared data source."""

import json

import pytest

import factorykit.config as config_module
from factorykit import (
    DataSourceConfig,
    FactoryKitConfig,
    configure,
    create_factory,
    get_config,
    get_data_source,
    reset_config,
    seed_data_source,
)
from factorykit.core import reset_data_sources

ENV_VARS = [
    "FACTORYKIT_LOCALE",
    "FACTORYKIT_SEED",
    "FACTORYKIT_TRANSIENT_PREFIX",
    "FACTORYKIT_SEQUENCE_START",
    "FACTORYKIT_UNIQUE_MAX_RETRIES",
    "FACTORYKIT_UNIQUE_SCOPE",
]


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear FACTORYKIT_ env vars."""
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "factorykit")
    monkeypatch.setattr(
        config_module, "CONFIG_FILE", tmp_path / "factorykit" / "config.json"
    )
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "factorykit" / "config.json"


class TestLoad:
    def test_defaults_without_file_or_env(self, config_file):
        config = FactoryKitConfig.load()

        assert config.data_source.locale == "en_US"
        assert config.data_source.seed is None
        assert config.transient.prefix == "_"
        assert config.sequence.start == 1
        assert config.unique.max_retries == 100
        assert config.unique.default_scope == "default"

    def test_reads_config_file(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(
            json.dumps(
                {
                    "data_source": {"locale": "de_DE", "seed": "7"},
                    "unique": {"max_retries": 10},
                }
            )
        )

        config = FactoryKitConfig.load()

        assert config.data_source.locale == "de_DE"
        assert config.data_source.seed == 7
        assert config.unique.max_retries == 10
        assert config.sequence.start == 1

    def test_unknown_file_key_is_warned(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"sequence": {"step": 2}}))

        with caplog.at_level("WARNING"):
            FactoryKitConfig.load()

        assert "sequence.step" in caplog.text

    def test_corrupt_file_is_warned_and_ignored(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{not json")

        with caplog.at_level("WARNING"):
            config = FactoryKitConfig.load()

        assert config.data_source.locale == "en_US"
        assert "Failed to load config" in caplog.text

    def test_invalid_int_in_file_is_warned_and_skipped(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(
            json.dumps(
                {
                    "data_source": {"seed": "abc", "locale": "de_DE"},
                    "sequence": {"start": [1]},
                }
            )
        )

        with caplog.at_level("WARNING"):
            config = FactoryKitConfig.load()

        assert config.data_source.seed is None
        assert config.data_source.locale == "de_DE"
        assert config.sequence.start == 1
        assert "data_source.seed" in caplog.text
        assert "sequence.start" in caplog.text

    def test_invalid_file_value_does_not_break_builds(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"unique": {"max_retries": "many"}}))
        reset_config()

        assert create_factory().define({"a": 1}).build() == {"a": 1}
        assert get_config().unique.max_retries == 100

    def test_env_overrides_file(self, config_file, monkeypatch):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"data_source": {"locale": "de_DE"}}))
        monkeypatch.setenv("FACTORYKIT_LOCALE", "fr_FR")
        monkeypatch.setenv("FACTORYKIT_SEED", "42")
        monkeypatch.setenv("FACTORYKIT_SEQUENCE_START", "0")
        monkeypatch.setenv("FACTORYKIT_UNIQUE_MAX_RETRIES", "7")
        monkeypatch.setenv("FACTORYKIT_UNIQUE_SCOPE", "suite")

        config = FactoryKitConfig.load()

        assert config.data_source.locale == "fr_FR"
        assert config.data_source.seed == 42
        assert config.sequence.start == 0
        assert config.unique.max_retries == 7
        assert config.unique.default_scope == "suite"

    def test_empty_transient_prefix_from_env(self, config_file, monkeypatch):
        monkeypatch.setenv("FACTORYKIT_TRANSIENT_PREFIX", "")

        assert FactoryKitConfig.load().transient.prefix == ""

    def test_invalid_int_env_is_ignored(self, config_file, monkeypatch, caplog):
        monkeypatch.setenv("FACTORYKIT_SEED", "abc")

        with caplog.at_level("WARNING"):
            config = FactoryKitConfig.load()

        assert config.data_source.seed is None
        assert "FACTORYKIT_SEED" in caplog.text


class TestSaveAndGlobal:
    def test_save_round_trips_through_load(self, config_file):
        FactoryKitConfig(data_source=DataSourceConfig(locale="ja_JP", seed=3)).save()

        assert json.loads(config_file.read_text())["data_source"] == {
            "locale": "ja_JP",
            "seed": 3,
        }
        assert FactoryKitConfig.load().data_source.locale == "ja_JP"

    def test_to_dict_sections(self):
        assert set(FactoryKitConfig().to_dict()) == {
            "data_source",
            "transient",
            "sequence",
            "unique",
        }

    def test_configure_and_reset(self, config_file):
        custom = FactoryKitConfig(data_source=DataSourceConfig(locale="it_IT"))
        configure(custom)
        assert get_config() is custom

        reset_config()

        loaded = get_config()
        assert loaded is not custom
        assert loaded.data_source.locale == "en_US"


class TestDataSource:
    def test_shared_instance_per_locale(self):
        assert get_data_source() is get_data_source()
        assert get_data_source("fr_FR") is not get_data_source()

    def test_configured_seed_is_reproducible(self):
        configure(FactoryKitConfig(data_source=DataSourceConfig(seed=42)))
        first = [get_data_source().first_name() for _ in range(3)]

        reset_data_sources()
        second = [get_data_source().first_name() for _ in range(3)]

        assert first == second

    def test_seed_data_source(self):
        seed_data_source(7)
        first = get_data_source().email()

        seed_data_source(7)

        assert get_data_source().email() == first

    def test_factory_uses_shared_source_by_default(self):
        factory = create_factory()

        assert factory.data_source is get_data_source()
