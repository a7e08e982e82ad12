from __future__ import annotations

import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("test", "config.testing"),
        (" testing ", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_unset_app_env_means_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_explicit_env_overrides_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module("testing") == "config.testing"


def test_testing_settings_never_auto_initialise(monkeypatch):
    monkeypatch.delenv("AUTO_INIT_DB", raising=False)
    settings = importlib.reload(importlib.import_module(get_settings_module("testing")))
    assert settings.TESTING is True
    assert settings.AUTO_INIT_DB is False
