"""Pytest configuration and fixtures for all tests."""

import pytest

from gosling.core.config import ConfigManager, ModelProvider, api_key_env_candidates


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    """Keep API keys from the developer's shell out of the tests."""
    for provider in ModelProvider:
        for env_var in api_key_env_candidates(provider):
            monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def config_manager(tmp_path, monkeypatch):
    """A settings store backed by a temporary file and installed as the global one."""
    manager = ConfigManager(tmp_path / "gosling.json")
    monkeypatch.setattr("gosling.core.config.config_manager", manager)
    return manager
