"""HTTP client for a running image service."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

import requests
from requests import Response, Session

from .utils.media import content_type_for_path

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/ImageAnalysis/analyze"
UPLOAD_PATH = "/api/ImageAnalysis/upload"


class ImageServiceClient:
    """Calls the analyze and upload endpoints and prints what comes back.

    Transport failures are reported on the output stream rather than raised.
    One ``requests.Session`` is reused for every call.
    """

    def __init__(
        self,
        service_base_url: str,
        *,
        session: Session | None = None,
        timeout: float = 30.0,
        stream: TextIO | None = None,
    ) -> None:
        if not service_base_url or not service_base_url.strip():
            raise ValueError("Service base URL cannot be empty.")
        self._base_url = service_base_url.strip().rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self._stream = stream

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> ImageServiceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ----- Endpoints ---------------------------------------------------------

    def analyze_from_url(self, image_url: str | None) -> Any:
        """Ask the service to analyze ``image_url``; return the parsed body or None."""
        if not image_url or not image_url.strip():
            self._write("Image URL cannot be empty.")
            return None

        request_url = f"{self._base_url}{ANALYZE_PATH}"
        self._write(f"Sending GET request to: {request_url}?imageUrl={image_url}")
        try:
            response = self._session.get(
                request_url,
                params={"imageUrl": image_url},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            self._report_request_error(exc)
            return None
        except Exception as exc:
            self._report_unexpected_error(exc)
            return None
        return self._process_response(response)

    def upload_and_analyze(self, file_path: Path | str) -> Any:
        """Upload a local image for analysis; return the parsed body or None."""
        path = Path(file_path)
        if not path.is_file():
            self._write(f"File not found: {path}")
            return None

        request_url = f"{self._base_url}{UPLOAD_PATH}"
        self._write(f"Sending POST request to: {request_url}")
        try:
            data = path.read_bytes()
            files = {"file": (path.name, data, content_type_for_path(path))}
            response = self._session.post(request_url, files=files, timeout=self._timeout)
        except requests.RequestException as exc:
            self._report_request_error(exc)
            return None
        except OSError as exc:
            self._write(f"File error: {exc}")
            return None
        except Exception as exc:
            self._report_unexpected_error(exc)
            return None
        return self._process_response(response)

    # ----- Output helpers ----------------------------------------------------

    def _process_response(self, response: Response) -> Any:
        if not response.ok:
            self._write(f"Error: {response.status_code} - {response.reason}")
            self._write(f"Error details: {response.text}")
            return None

        body = response.text
        self._write("Request successful. Raw JSON response:")
        try:
            payload = json.loads(body)
        except ValueError as exc:
            self._write(f"Error parsing JSON: {exc}")
            self._write(body)
            return None
        self._write(json.dumps(payload, indent=2))
        return payload

    def _report_request_error(self, exc: requests.RequestException) -> None:
        logger.debug("Request to %s failed", self._base_url, exc_info=exc)
        self._write(f"Request error: {exc}")
        cause = exc.__cause__ or exc.__context__
        if cause is not None:
            self._write(f"Inner Exception: {cause}")
        self._write(f"\nIs your ImageService running at {self._base_url}?")

    def _report_unexpected_error(self, exc: Exception) -> None:
        logger.debug("Unexpected failure calling %s", self._base_url, exc_info=exc)
        self._write(f"An unexpected error occurred: {exc}")

    def _write(self, message: str) -> None:
        out = self._stream or sys.stdout
        out.write(message + "\n")
