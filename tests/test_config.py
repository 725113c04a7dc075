"""Additional tests for AppConfig validation."""

from __future__ import annotations

import json

import pytest

from image_service.config import AppConfig
from image_service.models.base import ConfigurationError


def test_service_base_url_is_trimmed():
    config = AppConfig(service_base_url=" http://example.com/base/ ")
    assert config.service_base_url == "http://example.com/base"


def test_service_base_url_requires_scheme():
    with pytest.raises(ValueError):
        AppConfig(service_base_url="localhost:8000")


def test_blank_container_is_rejected():
    with pytest.raises(ValueError):
        AppConfig(blob_container="  ")


def test_require_vision_reports_missing_credentials():
    with pytest.raises(ConfigurationError):
        AppConfig(vision_endpoint="https://vision.example.com").require_vision()

    AppConfig(vision_endpoint="https://vision.example.com", vision_key="k").require_vision()


def test_require_blob_storage():
    assert AppConfig().has_blob_storage is False
    with pytest.raises(ConfigurationError):
        AppConfig().require_blob_storage()

    config = AppConfig(blob_connection_string="UseDevelopmentStorage=true")
    assert config.has_blob_storage is True


def test_environment_overrides_file_values():
    config = AppConfig(vision_key="from-file", blob_container="file-container")
    environ = {
        "AZURE_VISION_ENDPOINT": "https://env.example.com",
        "AZURE_VISION_KEY": "from-env",
        "BLOB_STORAGE_TEMP_CONTAINER": "",
        "IMAGE_SERVICE_BASE_URL": "http://remote:9000/",
    }

    merged = config.with_environment(environ)

    assert merged.vision_endpoint == "https://env.example.com"
    assert merged.vision_key == "from-env"
    assert merged.blob_container == "file-container"
    assert merged.service_base_url == "http://remote:9000"
    assert config.vision_key == "from-file"


def test_environment_without_overrides_returns_same_config():
    config = AppConfig()
    assert config.with_environment({"UNRELATED": "1"}) is config


def test_load_and_save_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    original = AppConfig(
        vision_endpoint="https://vision.example.com",
        blob_container="staging",
        upload_expiry_minutes=2.5,
        service_base_url="http://localhost:1234/",
    )
    original.save(path)

    loaded = AppConfig.load(path)
    assert loaded.vision_endpoint == "https://vision.example.com"
    assert loaded.blob_container == "staging"
    assert loaded.upload_expiry_minutes == 2.5
    assert loaded.service_base_url == "http://localhost:1234"


def test_load_rejects_invalid_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server_port": 0}), encoding="utf-8")

    with pytest.raises(ValueError):
        AppConfig.load(path)
