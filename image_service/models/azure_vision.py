"""Azure AI Vision Image Analysis integration."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from azure.ai.vision.imageanalysis import ImageAnalysisClient
from azure.ai.vision.imageanalysis.models import VisualFeatures
from azure.core.credentials import AzureKeyCredential

from .base import (
    AnalysisResult,
    AnalyzerOptions,
    BoundingBox,
    Caption,
    CropRegion,
    DenseCaption,
    DetectedObject,
    DetectedPerson,
    ImageMetadata,
    Point,
    Tag,
    TextBlock,
    TextLine,
    TextWord,
)

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)


class AzureVisionAnalyzer:
    """Calls the Image Analysis 4.0 API with a fixed feature set.

    The underlying ``ImageAnalysisClient`` is created once and shared by every
    call; the SDK client is safe for concurrent use. Errors raised by the SDK
    (``azure.core.exceptions.HttpResponseError`` and friends) are not caught.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        key: str | None = None,
        *,
        options: AnalyzerOptions | None = None,
        client: ImageAnalysisClient | None = None,
    ) -> None:
        self._options = options or AnalyzerOptions()
        if client is None:
            if not endpoint or not key:
                raise ValueError("An endpoint and key are required to create the vision client.")
            client = ImageAnalysisClient(endpoint=endpoint, credential=AzureKeyCredential(key))
        self._client = client
        self._visual_features = [VisualFeatures(feature.value) for feature in self._options.features]

    @classmethod
    def from_config(cls, config: AppConfig) -> AzureVisionAnalyzer:
        config.require_vision()
        return cls(config.vision_endpoint, config.vision_key)

    @property
    def options(self) -> AnalyzerOptions:
        return self._options

    def analyze(self, image_url: str) -> AnalysisResult:
        logger.debug("Requesting %d visual features for %s", len(self._visual_features), image_url)
        raw = self._client.analyze_from_url(
            image_url=image_url,
            visual_features=self._visual_features,
            gender_neutral_caption=self._options.gender_neutral_caption,
            language=self._options.language,
            smart_crops_aspect_ratios=list(self._options.smart_crops_aspect_ratios),
        )
        return convert_result(raw)


# ----- SDK result conversion -------------------------------------------------


def convert_result(raw: Any) -> AnalysisResult:
    """Copy an SDK ``ImageAnalysisResult`` into an immutable :class:`AnalysisResult`."""
    caption = None
    raw_caption = getattr(raw, "caption", None)
    if raw_caption is not None:
        caption = Caption(text=raw_caption.text, confidence=float(raw_caption.confidence))

    dense_captions = _convert_list(
        getattr(raw, "dense_captions", None),
        lambda item: DenseCaption(
            text=item.text,
            confidence=float(item.confidence),
            bounding_box=_box(item.bounding_box),
        ),
    )
    objects = _convert_list(
        getattr(raw, "objects", None),
        lambda item: DetectedObject(
            bounding_box=_box(item.bounding_box),
            tags=tuple(_tag(tag) for tag in (item.tags or ())),
        ),
    )
    tags = _convert_list(getattr(raw, "tags", None), _tag)
    people = _convert_list(
        getattr(raw, "people", None),
        lambda item: DetectedPerson(
            bounding_box=_box(item.bounding_box),
            confidence=float(item.confidence),
        ),
    )
    smart_crops = _convert_list(
        getattr(raw, "smart_crops", None),
        lambda item: CropRegion(
            aspect_ratio=float(item.aspect_ratio),
            bounding_box=_box(item.bounding_box),
        ),
    )

    read = None
    raw_read = getattr(raw, "read", None)
    if raw_read is not None:
        read = tuple(_block(block) for block in (raw_read.blocks or ()))

    metadata = None
    raw_metadata = getattr(raw, "metadata", None)
    if raw_metadata is not None:
        metadata = ImageMetadata(width=int(raw_metadata.width), height=int(raw_metadata.height))

    return AnalysisResult(
        caption=caption,
        dense_captions=dense_captions,
        objects=objects,
        read=read,
        tags=tags,
        people=people,
        smart_crops=smart_crops,
        metadata=metadata,
        model_version=getattr(raw, "model_version", None),
    )


def _convert_list(section: Any, convert) -> tuple | None:
    # Sections wrap their items in ``.list``.
    if section is None:
        return None
    items: Iterable[Any] = getattr(section, "list", None) or ()
    return tuple(convert(item) for item in items)


def _box(raw: Any) -> BoundingBox:
    return BoundingBox(x=int(raw.x), y=int(raw.y), width=int(raw.width), height=int(raw.height))


def _polygon(points: Iterable[Any] | None) -> tuple[Point, ...]:
    return tuple(Point(x=int(point.x), y=int(point.y)) for point in (points or ()))


def _tag(raw: Any) -> Tag:
    return Tag(name=raw.name, confidence=float(raw.confidence))


def _block(raw: Any) -> TextBlock:
    lines = []
    for line in raw.lines or ():
        words = tuple(
            TextWord(
                text=word.text,
                confidence=float(word.confidence),
                bounding_polygon=_polygon(word.bounding_polygon),
            )
            for word in (line.words or ())
        )
        lines.append(
            TextLine(text=line.text, bounding_polygon=_polygon(line.bounding_polygon), words=words)
        )
    return TextBlock(lines=tuple(lines))
