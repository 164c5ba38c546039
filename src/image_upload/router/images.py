"""Router – listing of stored images."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.image_upload.config import Settings, get_settings
from src.image_upload.schemas.image import ImageDescriptor
from src.image_upload.schemas.upload import ErrorResponse
from src.image_upload.services.storage_service import list_images

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.get(
    "/images",
    response_model=list[ImageDescriptor],
    responses={500: {"model": ErrorResponse}},
)
def get_images(settings: Settings = Depends(get_settings)) -> list[ImageDescriptor]:
    """Every image currently in the upload directory, unsorted."""
    try:
        return list_images(settings)
    except OSError as exc:
        logger.exception("Error reading images from %s", settings.upload_path)
        raise HTTPException(status_code=500, detail="Failed to read images") from exc
