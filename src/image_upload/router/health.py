"""Router – health check."""

from fastapi import APIRouter, Depends

from src.image_upload.config import Settings, get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)) -> dict:
    """Liveness / readiness probe; also reports whether the upload directory is present."""
    storage = "ok" if settings.upload_path.is_dir() else "missing"
    return {"status": "ok", "storage": storage}
