"""Request models for the dashboard API."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str
    password: str


class ImageFile(BaseModel):
    """An image encoded for upload."""

    name: str
    content_base64: str
    content_type: str | None = None


class ImageUploadRequest(BaseModel):
    files: list[ImageFile] = Field(min_length=1)
