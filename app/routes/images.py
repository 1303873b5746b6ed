"""Image upload, download, delete and listing endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response

from app.core.errors import ValidationError
from app.deps import get_image_service
from app.schemas.api import ErrorResponse, ImageListResponse, MessageResponse, UploadResponse
from app.services.images import ImageService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/images",
    tags=["images"],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)

MAX_PAGE_SIZE = 1000


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
def upload_image(
    service: ImageService = Depends(get_image_service),
    image: Optional[UploadFile] = File(None),
):
    """Upload an image under a generated ``images/<ts>_<filename>`` key."""
    if image is None or not image.filename:
        raise ValidationError("No image file provided")

    # Whole file in memory; the store receives a sized buffer
    content = image.file.read()
    result = service.upload(image.filename, content, image.content_type)

    return UploadResponse(key=result.key, url=result.url, message="Image uploaded successfully")


@router.get("", response_model=ImageListResponse, response_model_exclude_none=True)
def list_images(
    service: ImageService = Depends(get_image_service),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    cursor: str = Query(""),
):
    """List image keys; pass ``limit`` (and ``cursor``) to page through them."""
    if limit is None:
        keys = service.list_all()
        return ImageListResponse(images=keys, count=len(keys))

    page = service.list_page(limit, cursor)
    return ImageListResponse(
        images=page.keys,
        count=len(page.keys),
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@router.get(
    "/{key:path}",
    response_class=Response,
    responses={
        200: {"content": {"image/*": {}}, "description": "Raw image bytes"},
        404: {"model": ErrorResponse},
    },
)
def download_image(key: str, service: ImageService = Depends(get_image_service)):
    """Return the raw object with a content type inferred from the key."""
    data, content_type = service.download(key)
    return Response(content=data, media_type=content_type)


@router.delete("/{key:path}", response_model=MessageResponse)
def delete_image(key: str, service: ImageService = Depends(get_image_service)):
    service.delete(key)
    return MessageResponse(message="Image deleted successfully")
