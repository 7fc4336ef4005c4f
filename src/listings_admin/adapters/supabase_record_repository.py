"""Supabase-backed repository for listing records."""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from listings_admin.domain.listings import (
    COMMON_TEXT_FIELDS,
    EntityKind,
    ListingRecord,
)
from listings_admin.services.records import RecordRepository

_RESERVED_COLUMNS = {"id", "images", "created_at", *COMMON_TEXT_FIELDS}


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation for plot and property tables."""

    client: Client

    async def list_records(self, kind: EntityKind) -> list[ListingRecord]:
        """Return all rows ordered by creation time, newest first."""
        query = (
            self.client.table(kind.table).select("*").order("created_at", desc=True)
        )
        response = await asyncio.to_thread(query.execute)
        return [_parse_record(row) for row in response.data or []]

    async def insert_record(self, kind: EntityKind, payload: dict[str, object]) -> None:
        """Insert a row."""
        query = self.client.table(kind.table).insert(payload)
        await asyncio.to_thread(query.execute)

    async def update_record(
        self, kind: EntityKind, record_id: str, payload: dict[str, object]
    ) -> None:
        """Update a row by id."""
        query = self.client.table(kind.table).update(payload).eq("id", record_id)
        await asyncio.to_thread(query.execute)

    async def delete_record(self, kind: EntityKind, record_id: str) -> None:
        """Delete a row by id."""
        query = self.client.table(kind.table).delete().eq("id", record_id)
        await asyncio.to_thread(query.execute)


def _parse_record(row: dict[str, object]) -> ListingRecord:
    created = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created)
        if isinstance(created, str) and created
        else None
    )
    images = row.get("images")
    return ListingRecord(
        id=str(row["id"]),
        builder_name=str(row.get("builder_name") or ""),
        project=str(row.get("project") or ""),
        location=str(row.get("location") or ""),
        images=tuple(images) if isinstance(images, list) else (),
        created_at=created_at,
        attributes={
            key: value for key, value in row.items() if key not in _RESERVED_COLUMNS
        },
    )
