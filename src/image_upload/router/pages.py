"""Router – browser test page."""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from src.image_upload.config import INDEX_HTML

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
def index() -> FileResponse:
    return FileResponse(INDEX_HTML, media_type="text/html")
