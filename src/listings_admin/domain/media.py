"""Domain models for uploaded media."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadFile:
    """A file selected for upload."""

    name: str
    content: bytes
    content_type: str | None = None
