"""Content-type and file-extension helpers shared by the uploader and the client."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_EXTENSION = ".bin"

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
}

EXTENSION_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
}


def media_type(content_type: str | None) -> str | None:
    """Strip parameters such as ``charset`` and lowercase a Content-Type value."""
    if not content_type:
        return None
    value = content_type.split(";", 1)[0].strip().lower()
    return value or None


def normalize_extension(extension: str | None) -> str | None:
    """Return ``extension`` with exactly one leading dot, or None when blank."""
    if extension is None:
        return None
    value = extension.strip()
    if not value:
        return None
    return "." + value.lstrip(".")


def extension_for_content_type(content_type: str | None) -> str:
    """Map an image content type to a file extension, ``.bin`` when unknown."""
    return CONTENT_TYPE_EXTENSIONS.get(media_type(content_type) or "", DEFAULT_EXTENSION)


def content_type_for_extension(extension: str | None) -> str | None:
    """Map a file extension to an image content type, None when unknown."""
    normalized = normalize_extension(extension)
    if normalized is None:
        return None
    return EXTENSION_CONTENT_TYPES.get(normalized.lower())


def content_type_for_path(path: Path | str) -> str:
    """Content type to declare when sending a local file."""
    return content_type_for_extension(Path(path).suffix) or DEFAULT_CONTENT_TYPE


def extension_from_url(url: str) -> str | None:
    """Return the extension of the last URL path segment, ignoring query strings."""
    path = unquote(urlparse(url).path)
    suffix = PurePosixPath(path).suffix
    return suffix or None
