"""Shared fixtures – every test gets its own app and upload directory."""

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from src.image_upload.config import Settings
from src.image_upload.main import create_app


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    return Settings(upload_dir=upload_dir, port=3001, public_base_url=None)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Render a small solid-colour image and return the encoded bytes."""

    def _make(fmt: str = "PNG", color: str = "red", size: tuple[int, int] = (32, 32)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", size, color=color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make
