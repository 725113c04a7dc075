"""Service layer validating analysis requests and delegating to the analyzer."""

from __future__ import annotations

import asyncio
import logging

from ..models.base import AnalysisResult, ImageAnalyzer, ImageValidationError

logger = logging.getLogger(__name__)


class ImageAnalysisService:
    """High-level orchestration for analyzing a single image URL.

    Failures are logged here once and re-raised unchanged; callers decide how
    to present them.
    """

    def __init__(self, analyzer: ImageAnalyzer) -> None:
        if analyzer is None:
            raise ValueError("An analyzer is required.")
        self._analyzer = analyzer

    @property
    def analyzer(self) -> ImageAnalyzer:
        return self._analyzer

    def analyze_image(self, image_url: str | None) -> AnalysisResult:
        """Analyze the image at ``image_url`` and return the structured result."""
        url = _validate_url(image_url)
        logger.info("Analyzing image at %s", url)
        try:
            result = self._analyzer.analyze(url)
        except Exception:
            logger.exception("Error analyzing image at %s", url)
            raise
        logger.info("Successfully analyzed image at %s", url)
        return result

    async def analyze_image_async(self, image_url: str | None) -> AnalysisResult:
        """Run :meth:`analyze_image` on a worker thread so the event loop stays free."""
        url = _validate_url(image_url)
        logger.debug("Scheduling analysis of %s on a worker thread", url)
        return await asyncio.to_thread(self.analyze_image, url)


def _validate_url(image_url: str | None) -> str:
    if image_url is None:
        raise ImageValidationError("Image URL is required")
    url = str(image_url).strip()
    if not url:
        raise ImageValidationError("Image URL is required")
    return url
