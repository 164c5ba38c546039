"""Service layer – persisting uploads and scanning the storage directory."""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path, PurePath
from urllib.parse import quote

from fastapi import UploadFile

from src.image_upload.config import (
    IMAGE_EXTENSIONS,
    IMAGE_MIME_PREFIX,
    UPLOAD_FIELD_NAME,
    Settings,
)
from src.image_upload.schemas.image import ImageDescriptor
from src.image_upload.schemas.upload import UploadResponse

logger = logging.getLogger(__name__)

# Attempts at finding a free name before giving up on a single upload.
_MAX_NAME_ATTEMPTS = 5


# ══════════════════════════════════════════════
# Errors
# ══════════════════════════════════════════════
class UploadRejectedError(ValueError):
    """The client sent something we refuse to store (maps to HTTP 400)."""


class MissingFileError(UploadRejectedError):
    def __init__(self) -> None:
        super().__init__("No file uploaded")


class InvalidImageTypeError(UploadRejectedError):
    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__("Only image files are allowed!")


class FileTooLargeError(UploadRejectedError):
    def __init__(self, max_size_label: str) -> None:
        self.max_size_label = max_size_label
        super().__init__(f"File too large. Maximum size is {max_size_label}.")


class TooManyFilesError(UploadRejectedError):
    def __init__(self) -> None:
        super().__init__("Unexpected field")


# ══════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════
def generate_filename(field_name: str, original_name: str | None) -> str:
    """
    Build ``<field>-<epoch millis>-<random 0..1e9><ext>``.

    Only the extension of the client supplied name survives; its directory
    part and stem are discarded.
    """
    ext = PurePath(original_name or "").suffix
    timestamp_ms = int(time.time() * 1000)
    suffix = random.randint(0, 1_000_000_000)
    return f"{field_name}-{timestamp_ms}-{suffix}{ext}"


def validate_image_type(content_type: str | None) -> None:
    if not content_type or not content_type.lower().startswith(IMAGE_MIME_PREFIX):
        raise InvalidImageTypeError(content_type)


def is_image_filename(name: str) -> bool:
    return PurePath(name).suffix.lower() in IMAGE_EXTENSIONS


def build_public_url(settings: Settings, filename: str) -> str:
    # Extensions come from the client and may hold "?", "#" or "%".
    return f"{settings.base_url}/uploads/{quote(filename)}"


def ensure_single_upload(parts: list) -> None:
    """Only one part may be sent under the upload field."""
    if len(parts) > 1:
        raise TooManyFilesError()


def _write_new_file(directory: Path, field_name: str, original_name: str | None, data: bytes) -> str:
    """Write *data* under a fresh name, never replacing an existing file."""
    for _ in range(_MAX_NAME_ATTEMPTS):
        filename = generate_filename(field_name, original_name)
        try:
            with open(directory / filename, "xb") as f:
                f.write(data)
        except FileExistsError:
            logger.warning("Generated filename already taken, retrying: %s", filename)
            continue
        return filename
    raise FileExistsError(f"Could not find a free filename in {directory}")


# ══════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════
async def save_upload(upload: UploadFile | None, settings: Settings) -> UploadResponse:
    """
    Validate *upload* and store it in the upload directory.

    Raises
    ------
    MissingFileError, InvalidImageTypeError, FileTooLargeError
        The request is rejected; nothing has been written.
    OSError
        Writing to disk failed.
    """
    if upload is None:
        raise MissingFileError()

    validate_image_type(upload.content_type)

    # Read at most one byte past the limit.
    data = await upload.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise FileTooLargeError(settings.max_upload_size_label)

    filename = _write_new_file(
        settings.upload_path, UPLOAD_FIELD_NAME, upload.filename, data
    )
    logger.info(
        "💾 Stored upload %s (original=%r, type=%s, %d bytes)",
        filename,
        upload.filename,
        upload.content_type,
        len(data),
    )

    return UploadResponse(
        filename=filename,
        original_name=upload.filename or "",
        size=len(data),
        url=build_public_url(settings, filename),
    )


def list_images(settings: Settings) -> list[ImageDescriptor]:
    """
    Describe every image file currently in the upload directory.

    Entries come back in directory enumeration order. Raises ``OSError``
    when the directory cannot be read.
    """
    directory = settings.upload_path
    return [
        ImageDescriptor(
            filename=entry.name,
            url=build_public_url(settings, entry.name),
            path=str(directory / entry.name),
        )
        for entry in directory.iterdir()
        if entry.is_file() and is_image_filename(entry.name)
    ]
