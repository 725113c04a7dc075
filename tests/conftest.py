"""Shared fakes for the image service tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from azure.core.exceptions import ResourceExistsError

from image_service.models.base import (
    AnalysisResult,
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


class StaticAnalyzer:
    """Analyzer double that records URLs and returns a canned result."""

    def __init__(self, result: AnalysisResult | None = None, error: Exception | None = None):
        self.result = result or AnalysisResult()
        self.error = error
        self.calls: list[str] = []

    def analyze(self, image_url: str) -> AnalysisResult:
        self.calls.append(image_url)
        if self.error is not None:
            raise self.error
        return self.result


class FakeBlobClient:
    def __init__(self, container: FakeContainerClient, name: str) -> None:
        self.container = container
        self.name = name
        self.url = f"https://account.blob.core.windows.net/{container.container_name}/{name}"
        self.data: bytes | None = None
        self.content_settings = None
        self.metadata: dict[str, str] = {}
        self.headers = None

    def upload_blob(self, data, content_settings=None):
        self.data = data if isinstance(data, bytes) else data.read()
        self.content_settings = content_settings
        self.container.blobs[self.name] = self

    def get_blob_properties(self):
        return SimpleNamespace(metadata=dict(self.metadata), content_settings=self.content_settings)

    def set_blob_metadata(self, metadata):
        self.metadata = dict(metadata)

    def set_http_headers(self, content_settings=None):
        self.headers = content_settings


class FakeContainerClient:
    """In-memory stand-in for ``azure.storage.blob.ContainerClient``."""

    def __init__(self, container_name: str = "temp-images") -> None:
        self.container_name = container_name
        self.created = False
        self.create_calls: list[str | None] = []
        self.blobs: dict[str, FakeBlobClient] = {}
        self.deleted: list[str] = []

    def create_container(self, public_access=None):
        self.create_calls.append(public_access)
        if self.created:
            raise ResourceExistsError("The specified container already exists.")
        self.created = True

    def get_blob_client(self, name: str) -> FakeBlobClient:
        return FakeBlobClient(self, name)

    def list_blobs(self, include=None):
        return [
            SimpleNamespace(name=name, metadata=dict(blob.metadata))
            for name, blob in list(self.blobs.items())
        ]

    def delete_blob(self, name: str) -> None:
        self.blobs.pop(name)
        self.deleted.append(name)


@pytest.fixture
def make_analyzer() -> type[StaticAnalyzer]:
    return StaticAnalyzer


@pytest.fixture
def container_client() -> FakeContainerClient:
    return FakeContainerClient()


@pytest.fixture
def full_result() -> AnalysisResult:
    box = BoundingBox(x=1, y=2, width=30, height=40)
    polygon = (Point(0, 0), Point(10, 0), Point(10, 5), Point(0, 5))
    return AnalysisResult(
        caption=Caption(text="a taco on a plate", confidence=0.83456),
        dense_captions=(DenseCaption(text="a taco", confidence=0.7, bounding_box=box),),
        objects=(
            DetectedObject(
                bounding_box=box,
                tags=(Tag(name="food", confidence=0.9), Tag(name="taco", confidence=0.5)),
            ),
        ),
        read=(
            TextBlock(
                lines=(
                    TextLine(
                        text="TACO TUESDAY",
                        bounding_polygon=polygon,
                        words=(
                            TextWord(text="TACO", confidence=0.991, bounding_polygon=polygon),
                            TextWord(text="TUESDAY", confidence=0.5, bounding_polygon=polygon),
                        ),
                    ),
                )
            ),
        ),
        tags=(Tag(name="food", confidence=0.99), Tag(name="fast food", confidence=0.81234)),
        people=(DetectedPerson(bounding_box=box, confidence=0.25),),
        smart_crops=(
            CropRegion(aspect_ratio=0.9, bounding_box=box),
            CropRegion(aspect_ratio=1.33, bounding_box=box),
        ),
        metadata=ImageMetadata(width=800, height=600),
        model_version="2023-10-01",
    )
