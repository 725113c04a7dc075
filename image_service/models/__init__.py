"""Analysis result types and the vision service integration."""

from .azure_vision import AzureVisionAnalyzer
from .base import (
    AnalysisResult,
    AnalyzerOptions,
    ConfigurationError,
    ImageAnalyzer,
    ImageValidationError,
    VisualFeature,
)

__all__ = [
    "AnalysisResult",
    "AnalyzerOptions",
    "AzureVisionAnalyzer",
    "ConfigurationError",
    "ImageAnalyzer",
    "ImageValidationError",
    "VisualFeature",
]
