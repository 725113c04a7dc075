"""Application-wide configuration models and persistence helpers."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .models.base import ConfigurationError

DEFAULT_SAMPLE_IMAGE_URL = (
    "https://loveincorporated.blob.core.windows.net/contentimages/gallery/"
    "5366115e-decc-4024-941a-5237627bfa21-world-foods-tacos-shutterstock.jpg"
)

# Environment variable -> config field.
ENVIRONMENT_OVERRIDES = {
    "AZURE_VISION_ENDPOINT": "vision_endpoint",
    "AZURE_VISION_KEY": "vision_key",
    "BLOB_STORAGE_CONNECTION_STRING": "blob_connection_string",
    "BLOB_STORAGE_TEMP_CONTAINER": "blob_container",
    "IMAGE_SERVICE_BASE_URL": "service_base_url",
}


class AppConfig(BaseModel):
    """Validates and stores runtime settings for the application."""

    vision_endpoint: str | None = Field(
        default=None,
        description="Endpoint of the Azure AI Vision resource.",
    )
    vision_key: str | None = Field(
        default=None,
        description="Subscription key for the Azure AI Vision resource.",
    )
    blob_connection_string: str | None = Field(
        default=None,
        description="Connection string of the storage account used for staged uploads.",
    )
    blob_container: str = Field(
        default="temp-images",
        description="Container that receives staged uploads.",
    )
    upload_expiry_minutes: float = Field(
        default=5.0,
        gt=0.0,
        le=1440.0,
        description="Advisory lifetime of a staged upload, recorded as blob metadata.",
    )
    service_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of a running image service, used by the client runner.",
    )
    server_host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP front door binds to.",
    )
    server_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port the HTTP front door listens on.",
    )
    http_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=600.0,
        description="Timeout (seconds) for outbound HTTP calls made with requests.",
    )
    sample_image_url: str = Field(
        default=DEFAULT_SAMPLE_IMAGE_URL,
        description="Image analyzed by the standalone runner when no URL is given.",
    )

    @model_validator(mode="after")
    def _normalise_urls(self) -> AppConfig:
        base = self.service_base_url.strip()
        if not base:
            raise ValueError("Service base URL must not be empty.")
        if "://" not in base:
            raise ValueError("Service base URL must include a scheme such as http://localhost:8000.")
        self.service_base_url = base.rstrip("/")
        if self.vision_endpoint is not None:
            self.vision_endpoint = self.vision_endpoint.strip() or None
        return self

    @model_validator(mode="after")
    def _validate_container(self) -> AppConfig:
        container = self.blob_container.strip()
        if not container:
            raise ValueError("A blob container name must be configured.")
        self.blob_container = container
        return self

    @property
    def has_vision_credentials(self) -> bool:
        return bool(self.vision_endpoint) and bool(self.vision_key)

    @property
    def has_blob_storage(self) -> bool:
        return bool(self.blob_connection_string) and bool(self.blob_container)

    def require_vision(self) -> None:
        """Raise :class:`ConfigurationError` unless the vision credentials are set."""
        if not self.has_vision_credentials:
            raise ConfigurationError(
                "Azure Vision API credentials are not configured. Set vision_endpoint and "
                "vision_key in the settings file or AZURE_VISION_ENDPOINT and "
                "AZURE_VISION_KEY in the environment."
            )

    def require_blob_storage(self) -> None:
        """Raise :class:`ConfigurationError` unless staged uploads can be written."""
        if not self.has_blob_storage:
            raise ConfigurationError(
                "Blob storage is not configured. Set blob_connection_string and blob_container "
                "or BLOB_STORAGE_CONNECTION_STRING and BLOB_STORAGE_TEMP_CONTAINER."
            )

    def with_environment(self, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Return a copy with non-empty environment variables applied on top."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for variable, field_name in ENVIRONMENT_OVERRIDES.items():
            value = env.get(variable, "").strip()
            if value:
                overrides[field_name] = value
        if not overrides:
            return self
        data = self.model_dump()
        data.update(overrides)
        return type(self).model_validate(data)

    def as_dict(self) -> dict[str, Any]:
        """Serialize the configuration to primitive Python types."""
        return self.model_dump(mode="json")

    @classmethod
    def load(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML or JSON file."""
        data = _read_config_file(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:  # pragma: no cover - pass through details
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        """Persist configuration to a YAML file."""
        _write_config_file(path, self.as_dict())


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    return json.loads(text)


def _write_config_file(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in {".yaml", ".yml"}:
        yaml_text = yaml.safe_dump(
            data,
            allow_unicode=False,
            sort_keys=False,
        )
        path.write_text(yaml_text, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
