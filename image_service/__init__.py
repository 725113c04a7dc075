"""Top-level package for the image analysis service."""

__version__ = "0.1.0"

from .config import AppConfig  # noqa: E402
from .services.analyzer import ImageAnalysisService  # noqa: E402
from .settings_store import SettingsStore  # noqa: E402

__all__ = ["AppConfig", "ImageAnalysisService", "SettingsStore", "__version__"]
