"""Dashboard endpoints for managing plots and properties."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from listings_admin.api.deps import get_manager, require_session
from listings_admin.api.models import ImageFile, ImageUploadRequest
from listings_admin.domain.errors import ValidationError
from listings_admin.domain.listings import NEW_RECORD_KEY, ListingRecord
from listings_admin.domain.media import UploadFile
from listings_admin.services.records import RecordManager

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(require_session)],
)


@router.get("/{kind}")
async def list_records(
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Return the records of a listing type, newest first."""
    await manager.refresh()
    return _listing_payload(manager)


@router.post("/{kind}", status_code=status.HTTP_201_CREATED)
async def create_record(
    fields: dict[str, Any] = Body(...),
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Create a record from form fields.

    An ``images`` list carries the URLs returned by uploads to ``new``.
    """
    images = fields.pop("images", None) or []
    if not isinstance(images, list):
        raise ValidationError({"images": "must be a list of URLs"})
    manager.begin_create(images)
    await manager.submit(fields)
    return _listing_payload(manager)


@router.put("/{kind}/{record_id}")
async def update_record(
    record_id: str,
    fields: dict[str, Any] = Body(...),
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Update a record from form fields."""
    await manager.refresh()
    manager.begin_edit(record_id)
    await manager.submit(fields)
    return _listing_payload(manager)


@router.post("/{kind}/{record_id}/images")
async def upload_images(
    record_id: str,
    payload: ImageUploadRequest,
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Upload images and attach them to a record.

    Uploading to ``new`` stores the files under the temporary folder and
    returns their URLs; send them as ``images`` when creating the record.
    """
    files = [_decode_file(item) for item in payload.files]
    if record_id == NEW_RECORD_KEY:
        manager.begin_create()
    else:
        await manager.refresh()
        manager.begin_edit(record_id)
    uploaded = await manager.add_images(files)
    draft = manager.draft
    return {"uploaded": uploaded, "images": draft.images if draft else uploaded}


@router.delete("/{kind}/{record_id}/images")
async def delete_image(
    record_id: str,
    url: str,
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Delete an image and detach it from a record."""
    await manager.refresh()
    draft = manager.begin_edit(record_id)
    if url not in draft.images:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Image not attached"
        )
    await manager.remove_image(url)
    return {"images": draft.images}


@router.delete("/{kind}/{record_id}")
async def delete_record(
    record_id: str,
    confirm: bool = False,
    manager: RecordManager = Depends(get_manager),
) -> dict[str, object]:
    """Delete a record and its images."""
    await manager.refresh()
    await manager.delete(record_id, confirmed=confirm)
    return _listing_payload(manager)


def _decode_file(item: ImageFile) -> UploadFile:
    try:
        content = base64.b64decode(item.content_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid base64 content for {item.name}",
        ) from exc
    return UploadFile(name=item.name, content=content, content_type=item.content_type)


def _listing_payload(manager: RecordManager) -> dict[str, object]:
    return {
        "kind": manager.kind.key,
        "title": manager.kind.title,
        "fields": list(manager.kind.form_fields),
        "records": [_serialize_record(manager, record) for record in manager.records],
        "rows": manager.rows(),
    }


def _serialize_record(
    manager: RecordManager, record: ListingRecord
) -> dict[str, object]:
    data: dict[str, object] = {"id": record.id}
    for name in manager.kind.form_fields:
        data[name] = record.value(name)
    data["images"] = list(record.images)
    data["created_at"] = record.created_at.isoformat() if record.created_at else None
    return data
