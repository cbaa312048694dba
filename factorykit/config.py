"""Configuration management for factorykit.

Settings cover the shared Faker data source, the implicit transient-field
convention, and the defaults used by sequence and unique generators.

Config resolution order (highest priority first):
1. Programmatic (FactoryKitConfig constructed in code, installed via configure())
2. Environment variables (FACTORYKIT_LOCALE, FACTORYKIT_SEED, etc.)
3. Config file (~/.config/factorykit/config.json)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "factorykit"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class DataSourceConfig:
    """Faker data source settings.

    - locale: Faker locale used by the shared data source
    - seed: optional seed applied when the shared data source is created
    """

    locale: str = "en_US"
    seed: int | None = None


@dataclass
class TransientConfig:
    """Implicit transient-field convention.

    Any top-level field whose name starts with `prefix` is stripped from built
    objects even when not declared transient. An empty prefix disables the
    convention so only explicitly declared fields are stripped.
    """

    prefix: str = "_"


@dataclass
class SequenceConfig:
    """Defaults for sequence() generators."""

    start: int = 1


@dataclass
class UniqueConfig:
    """Defaults for unique() generators."""

    max_retries: int = 100
    default_scope: str = "default"


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class FactoryKitConfig:
    """Top-level factorykit configuration.

    Examples:
        # Package use, no files needed
        configure(FactoryKitConfig(data_source=DataSourceConfig(locale="fr_FR", seed=42)))

        # Loads from ~/.config/factorykit/config.json + env vars
        config = FactoryKitConfig.load()
    """

    data_source: DataSourceConfig = field(default_factory=DataSourceConfig)
    transient: TransientConfig = field(default_factory=TransientConfig)
    sequence: SequenceConfig = field(default_factory=SequenceConfig)
    unique: UniqueConfig = field(default_factory=UniqueConfig)

    @classmethod
    def load(cls) -> "FactoryKitConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        _ensure_dotenv()
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("FACTORYKIT_LOCALE"):
            config.data_source.locale = val
        if val := os.environ.get("FACTORYKIT_SEED"):
            try:
                config.data_source.seed = int(val)
            except ValueError:
                logger.warning("Invalid FACTORYKIT_SEED=%r, ignoring", val)
        # An empty prefix is meaningful (explicit-only mode), so test for presence
        if "FACTORYKIT_TRANSIENT_PREFIX" in os.environ:
            config.transient.prefix = os.environ["FACTORYKIT_TRANSIENT_PREFIX"]
        if val := os.environ.get("FACTORYKIT_SEQUENCE_START"):
            try:
                config.sequence.start = int(val)
            except ValueError:
                logger.warning("Invalid FACTORYKIT_SEQUENCE_START=%r, ignoring", val)
        if val := os.environ.get("FACTORYKIT_UNIQUE_MAX_RETRIES"):
            try:
                config.unique.max_retries = int(val)
            except ValueError:
                logger.warning(
                    "Invalid FACTORYKIT_UNIQUE_MAX_RETRIES=%r, ignoring", val
                )
        if val := os.environ.get("FACTORYKIT_UNIQUE_SCOPE"):
            config.unique.default_scope = val

        return config

    def save(self) -> None:
        """Save config to ~/.config/factorykit/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display or persistence."""
        return {
            "data_source": asdict(self.data_source),
            "transient": asdict(self.transient),
            "sequence": asdict(self.sequence),
            "unique": asdict(self.unique),
        }


# =============================================================================
# Config dict application
# =============================================================================

_INT_FIELDS = {"seed", "start", "max_retries"}


def _apply_dict(config: FactoryKitConfig, data: dict) -> None:
    """Apply a dict of values onto a FactoryKitConfig."""
    for section_name in ("data_source", "transient", "sequence", "unique"):
        section_data = data.get(section_name)
        if not isinstance(section_data, dict):
            continue
        section = getattr(config, section_name)
        for k, v in section_data.items():
            if not hasattr(section, k):
                logger.warning("Unknown config key %s.%s, ignoring", section_name, k)
                continue
            if k in _INT_FIELDS and v is not None:
                try:
                    v = int(v)
                except (TypeError, ValueError):
                    logger.warning(
                        "Invalid config value %s.%s=%r, ignoring", section_name, k, v
                    )
                    continue
            setattr(section, k, v)


# =============================================================================
# .env loading
# =============================================================================

_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        from dotenv import find_dotenv, load_dotenv

        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: FactoryKitConfig | None = None


def get_config() -> FactoryKitConfig:
    """Get the global FactoryKitConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = FactoryKitConfig.load()
    return _config


def configure(config: FactoryKitConfig) -> None:
    """Set the global FactoryKitConfig programmatically.

    Use this when factorykit is used as a package:
        from factorykit.config import configure, FactoryKitConfig, UniqueConfig
        configure(FactoryKitConfig(unique=UniqueConfig(max_retries=500)))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
