"""Utility helpers for the image service."""

from .media import (
    content_type_for_extension,
    content_type_for_path,
    extension_for_content_type,
    extension_from_url,
)

__all__ = [
    "content_type_for_extension",
    "content_type_for_path",
    "extension_for_content_type",
    "extension_from_url",
]
