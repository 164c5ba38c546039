"""Image Upload Server – FastAPI application factory."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from src.image_upload.config import Settings
from src.image_upload.router import health, images, pages, upload

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ──────────────────────────────────────────────
# Lifespan: announce endpoints on startup
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("🚀 Server running on %s", settings.base_url)
    logger.info("Upload endpoint: %s/upload", settings.base_url)
    logger.info("Images endpoint: %s/images", settings.base_url)
    logger.info("Storing uploads in %s", settings.upload_path)
    yield
    logger.info("🛑 Shutting down")


# ──────────────────────────────────────────────
# Error bodies: always {"error": "..."}
# ──────────────────────────────────────────────
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    logger.warning("Request validation failed: %s", message)
    return JSONResponse(status_code=400, content={"error": message})


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around *settings* (read from the environment when omitted).

    The upload directory is created here because the static mount requires it
    to exist.
    """
    settings = settings or Settings()
    configure_logging(settings)

    settings.upload_path.mkdir(parents=True, exist_ok=True)

    app = FastAPI(
        title="Image Upload Server",
        description="Upload images to local disk and list what has been stored.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── CORS middleware (configured from environment variables) ──
    app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_methods_list,
        allow_headers=settings.cors_headers_list,
    )
    logger.debug("CORS configured with origins: %s", settings.cors_origins_list)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # ── register routers ──
    app.include_router(pages.router)
    app.include_router(health.router)
    app.include_router(upload.router)
    app.include_router(images.router)

    # ── serve uploaded images statically ──
    app.mount("/uploads", StaticFiles(directory=str(settings.upload_path)), name="uploads")

    return app
