"""Shared fixtures: every test starts from default config."""

import logging

import pytest

from fluentchain import config as fc_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    package_logger = logging.getLogger("fluentchain")
    level = package_logger.level
    monkeypatch.setattr(fc_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(fc_config, "CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.delenv("FLUENTCHAIN_MODE", raising=False)
    monkeypatch.delenv("FLUENTCHAIN_LOG_LEVEL", raising=False)
    fc_config.reset_config()
    yield
    fc_config.reset_config()
    package_logger.setLevel(level)
