"""Router – image upload."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from src.image_upload.config import UPLOAD_FIELD_NAME, Settings, get_settings
from src.image_upload.schemas.upload import ErrorResponse, UploadResponse
from src.image_upload.services.storage_service import (
    UploadRejectedError,
    ensure_single_upload,
    save_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    request: Request,
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    """
    Store a single image sent as multipart field ``image``.

    Returns
    -------
    UploadResponse with:
        - message      : confirmation text
        - filename     : generated name on disk
        - originalName : name the client sent
        - size         : file size in bytes
        - url          : public URL of the stored image
    """
    try:
        # The form is already parsed and cached on the request.
        form = await request.form()
        ensure_single_upload(form.getlist(UPLOAD_FIELD_NAME))
        return await save_upload(image, settings)
    except UploadRejectedError as exc:
        logger.warning(
            "Upload rejected (filename=%r, type=%s): %s",
            image.filename if image else None,
            image.content_type if image else None,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OSError as exc:
        logger.exception("Upload error")
        raise HTTPException(status_code=500, detail="Upload failed") from exc
