from __future__ import annotations

import pytest

from renovate_schema_visualizer.config import DEFAULT_MAX_DEPTH, DEFAULT_SCHEMA_URL, Settings, get_settings

ENV_VARS = [
    "RENOVATE_VIZ_SCHEMA_URL",
    "RENOVATE_VIZ_TIMEOUT",
    "RENOVATE_VIZ_MAX_RETRIES",
    "RENOVATE_VIZ_BACKOFF",
    "RENOVATE_VIZ_MAX_DEPTH",
    "RENOVATE_VIZ_DEFAULT_MODE",
    "RENOVATE_VIZ_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()
    assert settings.schema_url == DEFAULT_SCHEMA_URL
    assert settings.timeout == 10.0
    assert settings.max_retries == 2
    assert settings.backoff == 0.5
    assert settings.max_depth == DEFAULT_MAX_DEPTH
    assert settings.default_mode == "JSON5"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RENOVATE_VIZ_SCHEMA_URL", "https://example.test/schema.json")
    monkeypatch.setenv("RENOVATE_VIZ_TIMEOUT", "2.5")
    monkeypatch.setenv("RENOVATE_VIZ_MAX_DEPTH", "12")
    monkeypatch.setenv("RENOVATE_VIZ_DEFAULT_MODE", "json")
    monkeypatch.setenv("RENOVATE_VIZ_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.schema_url == "https://example.test/schema.json"
    assert settings.timeout == 2.5
    assert settings.max_depth == 12
    assert settings.default_mode == "JSON"
    assert settings.log_level == "DEBUG"


def test_invalid_mode(monkeypatch):
    monkeypatch.setenv("RENOVATE_VIZ_DEFAULT_MODE", "yaml")
    with pytest.raises(ValueError, match="default_mode"):
        get_settings()


def test_invalid_depth():
    with pytest.raises(ValueError, match="max_depth"):
        Settings(max_depth=0)


@pytest.mark.parametrize("name, value", [("RENOVATE_VIZ_MAX_DEPTH", "lots"), ("RENOVATE_VIZ_TIMEOUT", "soon")])
def test_unparseable_environment_value(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    field_name = name[len("RENOVATE_VIZ_"):].lower()
    with pytest.raises(ValueError, match=field_name):
        get_settings()


def test_zero_depth_from_environment(monkeypatch):
    monkeypatch.setenv("RENOVATE_VIZ_MAX_DEPTH", "0")
    with pytest.raises(ValueError, match="max_depth must be at least 1"):
        get_settings()
