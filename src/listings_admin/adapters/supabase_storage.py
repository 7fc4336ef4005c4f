"""Supabase Storage adapter."""

import asyncio
from dataclasses import dataclass

from supabase import Client

from listings_admin.services.media import ObjectStorage


@dataclass
class SupabaseObjectStorage(ObjectStorage):
    """Object storage backed by Supabase Storage buckets."""

    client: Client

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str | None
    ) -> None:
        """Upload bytes to a bucket path."""
        options = {"content-type": content_type} if content_type else None
        await asyncio.to_thread(
            self.client.storage.from_(bucket).upload, path, content, options
        )

    def public_url(self, bucket: str, path: str) -> str:
        """Return the public URL of an object."""
        return self.client.storage.from_(bucket).get_public_url(path)

    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Delete objects from a bucket."""
        await asyncio.to_thread(self.client.storage.from_(bucket).remove, paths)
