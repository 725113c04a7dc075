"""Human-readable rendering of analysis results."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from .models.base import AnalysisResult, Point


def _polygon(points: Iterable[Point]) -> str:
    return "[" + " ".join(str(point) for point in points) + "]"


def format_results(result: AnalysisResult) -> list[str]:
    """Render ``result`` as report lines.

    Section headers are always emitted in a fixed order; the lines beneath a
    header only appear when that section is present in the result.
    """
    lines = ["Image analysis results:"]

    lines.append(" Caption:")
    if result.caption is not None:
        lines.append(
            f"   '{result.caption.text}', Confidence {result.caption.confidence:.4f}"
        )

    lines.append(" Dense Captions:")
    if result.dense_captions is not None:
        for caption in result.dense_captions:
            lines.append(
                f"   '{caption.text}', Confidence {caption.confidence:.4f}, "
                f"Bounding box {caption.bounding_box}"
            )

    lines.append(" Objects:")
    if result.objects is not None:
        for detected in result.objects:
            name = detected.tags[0].name if detected.tags else ""
            lines.append(f"   '{name}', Bounding box {detected.bounding_box}")

    lines.append(" Read:")
    if result.read is not None:
        for block in result.read:
            for line in block.lines:
                lines.append(
                    f"   Line: '{line.text}', Bounding Polygon: {_polygon(line.bounding_polygon)}"
                )
                for word in line.words:
                    lines.append(
                        f"     Word: '{word.text}', Confidence {word.confidence:.4f}, "
                        f"Bounding Polygon: {_polygon(word.bounding_polygon)}"
                    )

    lines.append(" Tags:")
    if result.tags is not None:
        for tag in result.tags:
            lines.append(f"   '{tag.name}', Confidence {tag.confidence:.4f}")

    lines.append(" People:")
    if result.people is not None:
        for person in result.people:
            lines.append(
                f"   Person: Bounding box {person.bounding_box}, "
                f"Confidence {person.confidence:.4f}"
            )

    lines.append(" SmartCrops:")
    if result.smart_crops is not None:
        for crop in result.smart_crops:
            lines.append(
                f"   Aspect ratio: {crop.aspect_ratio}, Bounding box: {crop.bounding_box}"
            )

    lines.append(" Metadata:")
    if result.metadata is not None:
        lines.append(f"   Model: {result.model_version}")
        lines.append(f"   Image width: {result.metadata.width}")
        lines.append(f"   Image height: {result.metadata.height}")

    return lines


def print_results(result: AnalysisResult, stream: TextIO | None = None) -> None:
    """Write the report for ``result`` to ``stream`` (stdout by default)."""
    out = stream or sys.stdout
    for line in format_results(result):
        out.write(line + "\n")
