"""Media attachment service for listing images."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import unquote, urlsplit
from uuid import uuid4

from listings_admin.domain.media import UploadFile

_logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Interface for the backend object storage."""

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str | None
    ) -> None:
        """Store an object at a path in a bucket."""

    def public_url(self, bucket: str, path: str) -> str:
        """Return the public URL for a stored object."""

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete objects; missing paths are ignored."""


def _random_name() -> str:
    return uuid4().hex


def object_path_from_url(bucket: str, url: str) -> str:
    """Return the object path inside a bucket for a public URL."""
    path = unquote(urlsplit(url).path)
    marker = f"/{bucket}/"
    index = path.find(f"/object/public{marker}")
    if index >= 0:
        return path[index + len("/object/public") + len(marker) :]
    index = path.rfind(marker)
    if index < 0:
        raise ValueError(f"URL is not in bucket {bucket}: {url}")
    return path[index + len(marker) :]


@dataclass
class MediaAttachmentService:
    """Uploads listing images and deletes them by URL."""

    storage: ObjectStorage
    name_factory: Callable[[], str] = field(default=_random_name)

    async def upload(self, file: UploadFile, namespace: str, owner_key: str) -> str:
        """Upload a file under the owner's folder and return its public URL."""
        suffix = PurePosixPath(file.name).suffix.lower()
        path = f"{owner_key}/{self.name_factory()}{suffix}"
        await self.storage.upload(namespace, path, file.content, file.content_type)
        _logger.info("Uploaded image: bucket=%s path=%s", namespace, path)
        return self.storage.public_url(namespace, path)

    async def upload_many(
        self, files: Sequence[UploadFile], namespace: str, owner_key: str
    ) -> list[str]:
        """Upload files in parallel; fails if any upload fails."""
        return list(
            await asyncio.gather(
                *(self.upload(file, namespace, owner_key) for file in files)
            )
        )

    def is_stored_under(self, namespace: str, owner_key: str, url: str) -> bool:
        """Return whether a URL is the public URL of a file in the owner's folder."""
        try:
            path = object_path_from_url(namespace, url)
        except ValueError:
            return False
        name = path.removeprefix(f"{owner_key}/")
        if name == path or not name or "/" in name:
            return False
        return self.storage.public_url(namespace, path) == url

    async def remove(self, namespace: str, url: str) -> None:
        """Delete the stored object referenced by a URL."""
        path = object_path_from_url(namespace, url)
        await self.storage.remove(namespace, [path])
        _logger.info("Removed image: bucket=%s path=%s", namespace, path)
