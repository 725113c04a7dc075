"""Analysis result types and the analyzer interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class VisualFeature(str, Enum):
    """Analysis capabilities that can be requested from the vision service."""

    CAPTION = "caption"
    DENSE_CAPTIONS = "denseCaptions"
    OBJECTS = "objects"
    READ = "read"
    TAGS = "tags"
    PEOPLE = "people"
    SMART_CROPS = "smartCrops"


DEFAULT_FEATURES: tuple[VisualFeature, ...] = (
    VisualFeature.CAPTION,
    VisualFeature.DENSE_CAPTIONS,
    VisualFeature.OBJECTS,
    VisualFeature.READ,
    VisualFeature.TAGS,
    VisualFeature.PEOPLE,
    VisualFeature.SMART_CROPS,
)


@dataclass(frozen=True, slots=True)
class AnalyzerOptions:
    """Fixed request options sent with every analysis call."""

    features: tuple[VisualFeature, ...] = DEFAULT_FEATURES
    language: str = "en"
    gender_neutral_caption: bool = True
    smart_crops_aspect_ratios: tuple[float, ...] = (0.9, 1.33)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned pixel rectangle locating a feature in the image."""

    x: int
    y: int
    width: int
    height: int

    def __str__(self) -> str:
        return f"{{x={self.x}, y={self.y}, w={self.width}, h={self.height}}}"

    def as_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class Point:
    """Pixel coordinate of one vertex of a bounding polygon."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"{{x={self.x}, y={self.y}}}"

    def as_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class Caption:
    """Single sentence describing the whole image."""

    text: str
    confidence: float

    def as_dict(self) -> dict[str, Any]:
        return {"text": self.text, "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class DenseCaption:
    """Caption describing one region of the image."""

    text: str
    confidence: float
    bounding_box: BoundingBox

    def as_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "boundingBox": self.bounding_box.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class Tag:
    """Content label with the service's confidence in it."""

    name: str
    confidence: float

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class DetectedObject:
    """Object found in the image together with its labels."""

    bounding_box: BoundingBox
    tags: tuple[Tag, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "boundingBox": self.bounding_box.as_dict(),
            "tags": [tag.as_dict() for tag in self.tags],
        }


@dataclass(frozen=True, slots=True)
class TextWord:
    """Word recognized by OCR."""

    text: str
    confidence: float
    bounding_polygon: tuple[Point, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "boundingPolygon": [point.as_dict() for point in self.bounding_polygon],
        }


@dataclass(frozen=True, slots=True)
class TextLine:
    """Line of recognized text and the words it contains."""

    text: str
    bounding_polygon: tuple[Point, ...] = ()
    words: tuple[TextWord, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "boundingPolygon": [point.as_dict() for point in self.bounding_polygon],
            "words": [word.as_dict() for word in self.words],
        }


@dataclass(frozen=True, slots=True)
class TextBlock:
    """Group of recognized text lines."""

    lines: tuple[TextLine, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {"lines": [line.as_dict() for line in self.lines]}


@dataclass(frozen=True, slots=True)
class DetectedPerson:
    """Person found in the image."""

    bounding_box: BoundingBox
    confidence: float

    def as_dict(self) -> dict[str, Any]:
        return {"boundingBox": self.bounding_box.as_dict(), "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class CropRegion:
    """Suggested crop for one requested aspect ratio."""

    aspect_ratio: float
    bounding_box: BoundingBox

    def as_dict(self) -> dict[str, Any]:
        return {"aspectRatio": self.aspect_ratio, "boundingBox": self.bounding_box.as_dict()}


@dataclass(frozen=True, slots=True)
class ImageMetadata:
    """Pixel dimensions of the analyzed image."""

    width: int
    height: int

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Structured result coming back from the vision service.

    Every section is optional; ``None`` means the feature was not requested or
    the service returned nothing for it.
    """

    caption: Caption | None = None
    dense_captions: tuple[DenseCaption, ...] | None = None
    objects: tuple[DetectedObject, ...] | None = None
    read: tuple[TextBlock, ...] | None = None
    tags: tuple[Tag, ...] | None = None
    people: tuple[DetectedPerson, ...] | None = None
    smart_crops: tuple[CropRegion, ...] | None = None
    metadata: ImageMetadata | None = None
    model_version: str | None = field(default=None)

    def sections(self) -> list[str]:
        """Return the names of the sections present in this result."""
        present = [
            ("Caption", self.caption),
            ("DenseCaptions", self.dense_captions),
            ("Objects", self.objects),
            ("Read", self.read),
            ("Tags", self.tags),
            ("People", self.people),
            ("SmartCrops", self.smart_crops),
            ("Metadata", self.metadata),
        ]
        return [name for name, value in present if value is not None]

    def as_dict(self) -> dict[str, Any]:
        """Serialize to camelCase JSON primitives, omitting absent sections."""
        payload: dict[str, Any] = {}
        if self.model_version is not None:
            payload["modelVersion"] = self.model_version
        if self.metadata is not None:
            payload["metadata"] = self.metadata.as_dict()
        if self.caption is not None:
            payload["caption"] = self.caption.as_dict()
        if self.dense_captions is not None:
            payload["denseCaptions"] = [item.as_dict() for item in self.dense_captions]
        if self.objects is not None:
            payload["objects"] = [item.as_dict() for item in self.objects]
        if self.read is not None:
            payload["read"] = {"blocks": [block.as_dict() for block in self.read]}
        if self.tags is not None:
            payload["tags"] = [item.as_dict() for item in self.tags]
        if self.people is not None:
            payload["people"] = [item.as_dict() for item in self.people]
        if self.smart_crops is not None:
            payload["smartCrops"] = [item.as_dict() for item in self.smart_crops]
        return payload


class ImageValidationError(ValueError):
    """Raised when a required image reference or payload is missing or empty."""


class ConfigurationError(RuntimeError):
    """Raised when required credentials or connection settings are absent."""


class ImageAnalyzer(Protocol):
    """Interface that all analyzer implementations must satisfy."""

    def analyze(self, image_url: str) -> AnalysisResult:
        """Analyze the image reachable at ``image_url``."""
