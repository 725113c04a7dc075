"""Tests for the settings store helpers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from image_service.config import ENVIRONMENT_OVERRIDES, AppConfig
from image_service.settings_store import SettingsStore, default_settings_path


def _fake_os(name: str, **env: str) -> SimpleNamespace:
    def getenv(key: str, default=None):
        return env.get(key, default)

    return SimpleNamespace(name=name, getenv=getenv, environ=env)


@pytest.fixture
def clean_environment(monkeypatch):
    for variable in ENVIRONMENT_OVERRIDES:
        monkeypatch.delenv(variable, raising=False)


def test_default_settings_path_respects_xdg(monkeypatch, tmp_path):
    config_root = tmp_path / "xdg"
    fake_os = _fake_os("posix", XDG_CONFIG_HOME=str(config_root))
    monkeypatch.setattr("image_service.settings_store.os", fake_os)

    resolved = default_settings_path()

    assert resolved == config_root / "image_service" / "settings.yaml"


def test_default_settings_path_windows(monkeypatch, tmp_path):
    appdata = tmp_path / "AppData" / "Roaming"
    fake_os = _fake_os("nt", APPDATA=str(appdata))
    monkeypatch.setattr("image_service.settings_store.os", fake_os)

    resolved = default_settings_path()

    assert resolved == appdata / "image_service" / "settings.yaml"


def test_settings_store_round_trip(tmp_path, clean_environment):
    target_path = tmp_path / "settings.yaml"
    store = SettingsStore(path=target_path)
    original = AppConfig(blob_container="uploads", server_port=8081)

    store.save(original)
    loaded = store.load()

    assert loaded.blob_container == "uploads"
    assert loaded.server_port == 8081
    assert target_path.exists()


def test_settings_store_loads_defaults_when_missing(tmp_path, clean_environment):
    store = SettingsStore(path=tmp_path / "missing.yaml")

    config = store.load()

    assert isinstance(config, AppConfig)
    assert config == AppConfig()


def test_environment_takes_precedence_over_file(monkeypatch, tmp_path, clean_environment):
    target_path = tmp_path / "settings.yaml"
    AppConfig(vision_key="file-key").save(target_path)
    monkeypatch.setenv("AZURE_VISION_KEY", "env-key")

    config = SettingsStore(path=target_path).load()

    assert config.vision_key == "env-key"
