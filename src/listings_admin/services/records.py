"""Record manager for one collection of listings."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from listings_admin.domain.errors import (
    BackendError,
    DeleteNotConfirmedError,
    RecordNotFoundError,
    ValidationError,
)
from listings_admin.domain.listings import EditDraft, EntityKind, ListingRecord
from listings_admin.domain.media import UploadFile
from listings_admin.formatters import format_price
from listings_admin.services.forms import validate_form
from listings_admin.services.media import MediaAttachmentService

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for listing records."""

    async def list_records(self, kind: EntityKind) -> list[ListingRecord]:
        """Return all records, newest first."""

    async def insert_record(self, kind: EntityKind, payload: dict[str, object]) -> None:
        """Insert a record."""

    async def update_record(
        self, kind: EntityKind, record_id: str, payload: dict[str, object]
    ) -> None:
        """Update fields of a record by id."""

    async def delete_record(self, kind: EntityKind, record_id: str) -> None:
        """Delete a record by id."""


class ManagerState(Enum):
    """Screen state of a record manager."""

    LIST = "list"
    CREATING = "creating"
    EDITING = "editing"
    DELETING = "deleting"


@dataclass
class RecordManager:
    """Lists, edits and deletes the records of one entity kind.

    Image uploads and removals are persisted to the record as soon as the
    storage step succeeds. Deleting a record removes its images first, best
    effort, and then the row itself. Nothing is retried; failures are kept in
    ``error`` and raised as ``BackendError``.
    """

    kind: EntityKind
    repository: RecordRepository
    media: MediaAttachmentService
    records: list[ListingRecord] = field(default_factory=list)
    state: ManagerState = ManagerState.LIST
    draft: EditDraft | None = None
    error: str | None = None
    loading: bool = True
    _alive: bool = field(default=True, init=False, repr=False)

    async def refresh(self) -> list[ListingRecord]:
        """Reload the record list from the store."""
        try:
            records = await self.repository.list_records(self.kind)
        except Exception as exc:
            raise self._fail(f"Failed to load {self.kind.title.lower()}", exc) from exc
        finally:
            if self._alive:
                self.loading = False
        if self._alive:
            self.records = records
        return records

    def begin_create(self, images: Sequence[object] = ()) -> EditDraft:
        """Open the form with a blank draft.

        ``images`` re-attaches files already uploaded for the unsaved record.
        Only public URLs in the kind's ``new`` folder are accepted.
        """
        owner_key = self.kind.owner_key(None)
        pending: list[str] = []
        for url in images:
            if not isinstance(url, str) or not self.media.is_stored_under(
                self.kind.bucket, owner_key, url
            ):
                raise ValidationError(
                    {"images": f"must be uploads for a new {self.kind.noun}"}
                )
            if url not in pending:
                pending.append(url)
        self.draft = EditDraft.blank()
        self.draft.images = pending
        self.state = ManagerState.CREATING
        return self.draft

    def begin_edit(self, record_id: str) -> EditDraft:
        """Open the form with a draft of an existing record."""
        record = self.get_record(record_id)
        self.draft = EditDraft.from_record(self.kind, record)
        self.state = ManagerState.EDITING
        return self.draft

    def cancel(self) -> None:
        """Close the form and discard the draft."""
        self.draft = None
        self.state = ManagerState.LIST

    def get_record(self, record_id: str) -> ListingRecord:
        for record in self.records:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    async def submit(self, fields: Mapping[str, object]) -> None:
        """Validate the form and create or update the record."""
        draft = self._require_draft()
        self.error = None
        try:
            payload = validate_form(self.kind, fields)
        except ValidationError as exc:
            self.error = str(exc)
            raise
        payload["images"] = list(draft.images)
        draft.values = dict(payload)
        try:
            if draft.record_id is not None:
                await self.repository.update_record(
                    self.kind, draft.record_id, payload
                )
            else:
                await self.repository.insert_record(self.kind, payload)
        except Exception as exc:
            raise self._fail(f"Failed to save {self.kind.noun}", exc) from exc
        _logger.info(
            "Saved %s: table=%s id=%s",
            self.kind.noun,
            self.kind.table,
            draft.record_id or "new",
        )
        try:
            await self.refresh()
        finally:
            if self._alive:
                self.cancel()

    async def add_images(self, files: Sequence[UploadFile]) -> list[str]:
        """Upload files and attach their URLs to the draft.

        Drafts without an id upload under the temporary owner key; the URLs
        are carried by the draft until the record is created.
        """
        draft = self._require_draft()
        owner_key = self.kind.owner_key(draft.record_id)
        try:
            urls = await self.media.upload_many(files, self.kind.bucket, owner_key)
        except Exception as exc:
            raise self._fail("Failed to upload images", exc) from exc
        if not self._alive:
            return urls
        images = list(draft.images)
        images.extend(url for url in urls if url not in images)
        draft.images = images
        if draft.record_id is not None:
            await self._persist_images(draft)
        return urls

    async def remove_image(self, url: str) -> None:
        """Delete a stored image and drop it from the draft."""
        draft = self._require_draft()
        try:
            await self.media.remove(self.kind.bucket, url)
        except Exception as exc:
            raise self._fail("Failed to delete image", exc) from exc
        if not self._alive:
            return
        draft.images = [image for image in draft.images if image != url]
        if draft.record_id is not None:
            await self._persist_images(draft)

    async def delete(self, record_id: str, confirmed: bool) -> None:
        """Delete a record and, first, every image it owns."""
        if not confirmed:
            raise DeleteNotConfirmedError(
                f"Deleting this {self.kind.noun} requires confirmation"
            )
        record = self.get_record(record_id)
        self.state = ManagerState.DELETING
        self.error = None
        results = await asyncio.gather(
            *(self.media.remove(self.kind.bucket, url) for url in record.images),
            return_exceptions=True,
        )
        for url, result in zip(record.images, results, strict=True):
            if isinstance(result, Exception):
                _logger.warning("Image delete failed: url=%s error=%s", url, result)
        try:
            await self.repository.delete_record(self.kind, record_id)
        except Exception as exc:
            if record.images:
                _logger.error(
                    "Record %s kept after its images were deleted", record_id
                )
            raise self._fail(f"Failed to delete {self.kind.noun}", exc) from exc
        finally:
            if self._alive:
                self.state = ManagerState.LIST
        _logger.info(
            "Deleted %s: table=%s id=%s", self.kind.noun, self.kind.table, record_id
        )
        await self.refresh()

    def rows(self) -> list[dict[str, object]]:
        """Return the table view of the current records."""
        return [
            {
                "id": record.id,
                "project": record.project,
                "builder_name": record.builder_name,
                "location": record.location,
                "price": format_price(_as_number(record.value(self.kind.price_field))),
                "rate": self._format_rate(record),
                "image_count": len(record.images),
            }
            for record in self.records
        ]

    def _format_rate(self, record: ListingRecord) -> str | None:
        if self.kind.rate_field is None:
            return None
        return f"{format_price(_as_number(record.value(self.kind.rate_field)))}/sq.ft"

    def dispose(self) -> None:
        """Stop committing results of in-flight requests."""
        self._alive = False

    async def _persist_images(self, draft: EditDraft) -> None:
        try:
            await self.repository.update_record(
                self.kind, draft.record_id, {"images": list(draft.images)}
            )
        except Exception as exc:
            raise self._fail("Failed to save images", exc) from exc
        await self.refresh()

    def _require_draft(self) -> EditDraft:
        if self.draft is None:
            raise RuntimeError("No form is open")
        return self.draft

    def _fail(self, message: str, exc: Exception) -> BackendError:
        detail = f"{message}: {exc}"
        _logger.error("%s (table=%s)", detail, self.kind.table)
        if self._alive:
            self.error = detail
        return BackendError(detail)


def _as_number(value: object) -> float | None:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value
    return None
