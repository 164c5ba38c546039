from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Response schema for POST /upload."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = "File uploaded successfully"
    filename: str
    original_name: str = Field(alias="originalName")
    size: int
    url: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""
    error: str
