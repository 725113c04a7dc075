"""Tests for the analysis result model."""

from __future__ import annotations

import dataclasses

import pytest

from image_service.models.base import AnalysisResult, AnalyzerOptions, Caption, VisualFeature


def test_sections_are_subset_of_known_names(full_result):
    known = {"Caption", "DenseCaptions", "Objects", "Read", "Tags", "People", "SmartCrops", "Metadata"}
    assert set(full_result.sections()) == known
    assert AnalysisResult().sections() == []
    assert AnalysisResult(tags=()).sections() == ["Tags"]


def test_as_dict_uses_camel_case_and_omits_absent_sections():
    result = AnalysisResult(caption=Caption(text="hi", confidence=0.5), tags=())
    assert result.as_dict() == {"caption": {"text": "hi", "confidence": 0.5}, "tags": []}


def test_as_dict_nests_read_blocks(full_result):
    payload = full_result.as_dict()

    assert payload["modelVersion"] == "2023-10-01"
    assert payload["metadata"] == {"width": 800, "height": 600}
    line = payload["read"]["blocks"][0]["lines"][0]
    assert line["text"] == "TACO TUESDAY"
    assert line["words"][0]["boundingPolygon"][1] == {"x": 10, "y": 0}
    assert payload["smartCrops"][0]["aspectRatio"] == 0.9
    assert payload["objects"][0]["boundingBox"] == {"x": 1, "y": 2, "width": 30, "height": 40}


def test_result_is_immutable(full_result):
    with pytest.raises(dataclasses.FrozenInstanceError):
        full_result.caption = None  # type: ignore[misc]


def test_default_options_match_fixed_configuration():
    options = AnalyzerOptions()
    assert options.language == "en"
    assert options.gender_neutral_caption is True
    assert options.smart_crops_aspect_ratios == (0.9, 1.33)
    assert set(options.features) == set(VisualFeature)
