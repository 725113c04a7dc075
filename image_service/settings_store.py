"""Persistence helpers for service configuration."""

from __future__ import annotations

import os
from pathlib import Path

from .config import AppConfig


class SettingsStore:
    """Load and save service settings from a well-known path.

    Values found in the environment (``AZURE_VISION_KEY`` and friends) take
    precedence over the file so secrets can stay out of it.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppConfig:
        if not self._path.exists():
            config = AppConfig()
        else:
            config = AppConfig.load(self._path)
        return config.with_environment(os.environ)

    def save(self, config: AppConfig) -> None:
        config.save(self._path)


def default_settings_path() -> Path:
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base.expanduser() / "image_service" / "settings.yaml"
