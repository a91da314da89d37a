"""Configuration management for fluentchain.

One setting matters to the synthesizer: the strictness mode.

- development: configuration misuse (e.g. `decorate()` with nothing to
  decorate) raises ConfigurationError
- production: the same misuse logs a warning and is a no-op
- debug: like development, plus per-name synthesis dumps at DEBUG level

Config resolution order (highest priority first):
1. Programmatic (FluentChainConfig passed to configure())
2. Environment variables (FLUENTCHAIN_MODE, FLUENTCHAIN_LOG_LEVEL)
3. Config file (~/.config/fluentchain/config.json)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "fluentchain"
CONFIG_FILE = CONFIG_DIR / "config.json"

MODES = ("development", "production", "debug")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Config dataclass
# =============================================================================


@dataclass
class FluentChainConfig:
    """Top-level fluentchain configuration.

    Examples:
        # Package use, no files needed
        configure(FluentChainConfig(mode="production"))

        # Load from ~/.config/fluentchain/config.json + env vars
        config = FluentChainConfig.load()
    """

    mode: str = "development"
    log_level: str = "WARNING"

    @classmethod
    def load(cls) -> "FluentChainConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        Invalid values are logged and ignored.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        if val := os.environ.get("FLUENTCHAIN_MODE"):
            _set_mode(config, val)
        if val := os.environ.get("FLUENTCHAIN_LOG_LEVEL"):
            _set_log_level(config, val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/fluentchain/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def strict(self) -> bool:
        """Whether configuration misuse raises instead of being ignored."""
        return self.mode != "production"

    @property
    def debug(self) -> bool:
        return self.mode == "debug"


def _set_mode(config: FluentChainConfig, value: str) -> None:
    mode = str(value).strip().lower()
    if mode not in MODES:
        logger.warning("Invalid fluentchain mode=%r, ignoring", value)
        return
    config.mode = mode


def _set_log_level(config: FluentChainConfig, value: str) -> None:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("Invalid fluentchain log_level=%r, ignoring", value)
        return
    config.log_level = level


def _apply_dict(config: FluentChainConfig, data: dict) -> None:
    """Apply a dict of values onto a FluentChainConfig."""
    if not isinstance(data, dict):
        logger.warning("Ignoring non-object config file contents")
        return
    if "mode" in data:
        _set_mode(config, data["mode"])
    if "log_level" in data:
        _set_log_level(config, data["log_level"])


# =============================================================================
# Global config singleton
# =============================================================================

_config: FluentChainConfig | None = None


def get_config() -> FluentChainConfig:
    """Get the global FluentChainConfig instance.

    First call loads from file + env vars. Subsequent calls return the cached
    instance. Use configure() to replace it programmatically.
    """
    global _config
    if _config is None:
        _config = FluentChainConfig.load()
        logging.getLogger("fluentchain").setLevel(_config.log_level)
    return _config


def configure(config: FluentChainConfig) -> None:
    """Set the global FluentChainConfig programmatically.

        from fluentchain.config import configure, FluentChainConfig
        configure(FluentChainConfig(mode="production"))
    """
    global _config
    _config = config
    logging.getLogger("fluentchain").setLevel(config.log_level)


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
