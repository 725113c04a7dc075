"""Temporary blob storage for uploaded images."""

from .uploader import EXPIRY_METADATA_KEY, TemporaryImageUploader

__all__ = ["EXPIRY_METADATA_KEY", "TemporaryImageUploader"]
