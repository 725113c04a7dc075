"""Stage images in Azure Blob Storage so the vision service can fetch them by URL."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

import requests
from azure.core.exceptions import ResourceExistsError
from azure.storage.blob import ContainerClient, ContentSettings

from ..models.base import ImageValidationError
from ..utils.media import (
    DEFAULT_CONTENT_TYPE,
    content_type_for_extension,
    extension_for_content_type,
    extension_from_url,
    media_type,
    normalize_extension,
)

if TYPE_CHECKING:
    from azure.storage.blob import BlobClient

    from ..config import AppConfig

logger = logging.getLogger(__name__)

EXPIRY_METADATA_KEY = "ExpiryTime"
DEFAULT_EXPIRY = timedelta(minutes=5)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TemporaryImageUploader:
    """Upload images to a blob container and mark them as short-lived.

    Expiry is advisory: an ``ExpiryTime`` metadata entry and a ``Cache-Control``
    header are written, but nothing deletes the blob unless
    :meth:`purge_expired` is run.
    """

    def __init__(
        self,
        connection_string: str | None = None,
        container_name: str | None = None,
        *,
        expiry: timedelta = DEFAULT_EXPIRY,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        container_client: ContainerClient | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if container_client is None:
            if not connection_string:
                raise ValueError("Missing blob storage connection string.")
            if not container_name:
                raise ValueError("Missing blob storage container name.")
            container_client = ContainerClient.from_connection_string(
                connection_string, container_name
            )
        self._container = container_client
        self._expiry = expiry
        self._timeout = timeout
        self._session = session or requests.Session()
        self._clock = clock

    @classmethod
    def from_config(cls, config: AppConfig) -> TemporaryImageUploader:
        config.require_blob_storage()
        return cls(
            config.blob_connection_string,
            config.blob_container,
            expiry=timedelta(minutes=config.upload_expiry_minutes),
            timeout=config.http_timeout,
        )

    @property
    def expiry(self) -> timedelta:
        return self._expiry

    # ----- Upload entry points ---------------------------------------------

    def upload(
        self,
        data: bytes | BinaryIO,
        content_type: str,
        extension: str | None = None,
    ) -> str:
        """Upload raw bytes or a binary stream and return the blob URL."""
        if data is None:
            raise ImageValidationError("Image data is required")
        if not content_type or not content_type.strip():
            raise ImageValidationError("Content type is required")
        suffix = normalize_extension(extension) or extension_for_content_type(content_type)
        blob_name = f"{uuid.uuid4()}{suffix}"
        try:
            return self._store(blob_name, data, content_type.strip())
        except Exception:
            logger.exception("Error uploading image to temporary blob storage")
            raise

    def upload_file(
        self,
        filename: str | None,
        data: bytes,
        content_type: str | None = None,
    ) -> str:
        """Upload a file received from a client, deriving its extension when needed."""
        if not data:
            raise ImageValidationError("File is empty")
        suffix = normalize_extension(Path(filename).suffix) if filename else None
        declared = media_type(content_type)
        if declared is None:
            declared = content_type_for_extension(suffix) or DEFAULT_CONTENT_TYPE
        return self.upload(data, declared, suffix)

    def upload_from_url(self, source_url: str) -> str:
        """Download ``source_url`` and stage a copy of it."""
        if not source_url or not source_url.strip():
            raise ImageValidationError("Image URL is required")
        try:
            response = self._session.get(source_url, timeout=self._timeout)
            response.raise_for_status()
        except Exception:
            logger.exception("Error downloading %s for temporary blob storage", source_url)
            raise

        url_extension = extension_from_url(source_url)
        content_type = media_type(response.headers.get("Content-Type"))
        if content_type is None:
            content_type = content_type_for_extension(url_extension) or DEFAULT_CONTENT_TYPE
        extension = url_extension or extension_for_content_type(content_type)
        logger.debug(
            "Downloaded %d bytes from %s as %s (%s)",
            len(response.content),
            source_url,
            content_type,
            extension,
        )
        return self.upload(response.content, content_type, extension)

    # ----- Expiry housekeeping ---------------------------------------------

    def purge_expired(self, now: datetime | None = None) -> list[str]:
        """Delete staged blobs whose ``ExpiryTime`` has passed; return their names."""
        cutoff = now or self._clock()
        removed: list[str] = []
        for blob in self._container.list_blobs(include=["metadata"]):
            expires_at = _read_expiry(blob.metadata or {})
            if expires_at is None or expires_at > cutoff:
                continue
            self._container.delete_blob(blob.name)
            removed.append(blob.name)
        if removed:
            logger.info("Removed %d expired staged upload(s)", len(removed))
        return removed

    # ----- Storage helpers -------------------------------------------------

    def _store(self, blob_name: str, data: bytes | BinaryIO, content_type: str) -> str:
        self._ensure_container()
        blob_client = self._container.get_blob_client(blob_name)
        blob_client.upload_blob(data, content_settings=ContentSettings(content_type=content_type))
        self._set_blob_expiry(blob_client)
        logger.info("Staged upload %s (%s)", blob_name, content_type)
        return blob_client.url

    def _ensure_container(self) -> None:
        try:
            self._container.create_container(public_access="blob")
        except ResourceExistsError:
            return
        logger.info("Created blob container %s", self._container.container_name)

    def _set_blob_expiry(self, blob_client: BlobClient) -> None:
        expires_at = self._clock() + self._expiry
        properties = blob_client.get_blob_properties()
        metadata = dict(properties.metadata or {})
        metadata[EXPIRY_METADATA_KEY] = expires_at.isoformat()
        blob_client.set_blob_metadata(metadata)
        # set_http_headers replaces every header, so the content type is re-sent.
        blob_client.set_http_headers(
            content_settings=ContentSettings(
                content_type=properties.content_settings.content_type,
                cache_control=f"max-age={int(self._expiry.total_seconds())}",
            )
        )


def _read_expiry(metadata: dict[str, str]) -> datetime | None:
    # Metadata keys come back in whatever case the service stored them.
    raw = next(
        (value for key, value in metadata.items() if key.lower() == EXPIRY_METADATA_KEY.lower()),
        None,
    )
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        logger.warning("Ignoring unparseable %s metadata value %r", EXPIRY_METADATA_KEY, raw)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
