"""Analyze-by-URL and upload-then-analyze routes."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ...models.base import ConfigurationError, ImageValidationError
from ...services.analyzer import ImageAnalysisService
from ...storage.uploader import TemporaryImageUploader

logger = logging.getLogger(__name__)

router = APIRouter()


def get_analysis_service(request: Request) -> ImageAnalysisService:
    return request.app.state.analysis_service


def get_uploader(request: Request) -> TemporaryImageUploader | None:
    return request.app.state.uploader


@router.get("/analyze")
async def analyze_image(
    image_url: str | None = Query(default=None, alias="imageUrl"),
    service: ImageAnalysisService = Depends(get_analysis_service),
) -> Response:
    """Analyze an image that is publicly reachable at ``imageUrl``."""
    if not image_url:
        return PlainTextResponse("Image URL is required", status_code=400)

    try:
        result = await service.analyze_image_async(image_url)
    except ImageValidationError as exc:
        return PlainTextResponse(str(exc), status_code=400)
    except Exception as exc:
        return PlainTextResponse(f"Error analyzing image: {exc}", status_code=500)
    return JSONResponse(result.as_dict())


@router.post("/upload")
async def upload_and_analyze(
    file: UploadFile | str | None = File(default=None),
    service: ImageAnalysisService = Depends(get_analysis_service),
    uploader: TemporaryImageUploader | None = Depends(get_uploader),
) -> Response:
    """Stage the uploaded ``file`` in blob storage, then analyze it by URL."""
    # A plain form field named "file" counts as no upload.
    if file is None or isinstance(file, str):
        return PlainTextResponse("No file uploaded", status_code=400)
    data = await file.read()
    if not data:
        return PlainTextResponse("No file uploaded", status_code=400)

    try:
        if uploader is None:
            raise ConfigurationError("Blob storage is not configured for uploads.")
        image_url = await asyncio.to_thread(
            uploader.upload_file, file.filename, data, file.content_type
        )
        result = await service.analyze_image_async(image_url)
    except Exception as exc:
        logger.debug("Upload of %s failed: %s", file.filename, exc)
        return PlainTextResponse(f"Error processing image: {exc}", status_code=500)
    return JSONResponse({"imageUrl": image_url, "analysis": result.as_dict()})
