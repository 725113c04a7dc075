"""FastAPI application exposing the image analysis front door."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .. import __version__
from ..config import AppConfig
from ..models.azure_vision import AzureVisionAnalyzer
from ..services.analyzer import ImageAnalysisService
from ..settings_store import SettingsStore
from ..storage.uploader import TemporaryImageUploader
from .routes import image_analysis

logger = logging.getLogger(__name__)

API_PREFIX = "/api/ImageAnalysis"


def create_app(
    config: AppConfig | None = None,
    *,
    analysis_service: ImageAnalysisService | None = None,
    uploader: TemporaryImageUploader | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Without ``config`` the settings file and environment are read, so this also
    works as an ASGI factory. Raises ``ConfigurationError`` when no analysis
    service is supplied and the vision credentials are missing. Blob storage is
    optional at startup; the upload route reports it as an error when it is not
    configured.
    """
    if config is None:
        config = SettingsStore().load()
    if analysis_service is None:
        analysis_service = ImageAnalysisService(AzureVisionAnalyzer.from_config(config))
    if uploader is None and config.has_blob_storage:
        uploader = TemporaryImageUploader.from_config(config)
    if uploader is None:
        logger.warning("Blob storage is not configured; %s/upload will fail.", API_PREFIX)

    app = FastAPI(
        title="Image Analysis API",
        description="API for analyzing and processing images",
        version=__version__,
    )

    # Collaborators are created once and shared by every request.
    app.state.config = config
    app.state.analysis_service = analysis_service
    app.state.uploader = uploader

    app.include_router(image_analysis.router, prefix=API_PREFIX, tags=["ImageAnalysis"])
    return app
