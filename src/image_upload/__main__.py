"""Run the server with ``python -m src.image_upload``."""

import uvicorn

from src.image_upload.config import Settings
from src.image_upload.main import create_app


def main() -> None:
    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
