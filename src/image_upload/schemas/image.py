from pydantic import BaseModel


class ImageDescriptor(BaseModel):
    """Single entry returned by GET /images."""
    filename: str
    url: str
    path: str
