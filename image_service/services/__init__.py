"""Service layer for coordinating image analysis."""

from .analyzer import ImageAnalysisService

__all__ = ["ImageAnalysisService"]
