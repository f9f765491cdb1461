"""
Reading list API router.
Tracks the caller's interested / reading / completed volumes.
"""

from fastapi import APIRouter

from boibritto.auth import RegisteredUser
from boibritto.errors import ConflictError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import DataEnvelope, ReadingListCreate, ReadingListItemOut, ReadingListUpdate, dump
from boibritto.providers import DuplicateRecordError, SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.reading import as_utc, check_reading_dates
from boibritto.services.validators import require_data, require_owner

router = APIRouter(prefix="/reading-list", tags=["Reading List"])


def _reading_list(storage: SQLiteStorage, user_id: str, public_only: bool = False) -> dict:
    items = storage.list_reading_items(user_id, public_only=public_only)
    return {"readingList": [dump(ReadingListItemOut, i) for i in items]}


def _get_item_or_404(storage: SQLiteStorage, item_id: str) -> dict:
    item = storage.get_reading_item(item_id)
    if not item:
        raise NotFoundError("Reading list item not found")
    return item


@router.get("/me")
async def get_my_reading_list(user: RegisteredUser):
    storage = get_storage_provider()
    return send_success("Reading list fetched successfully", _reading_list(storage, user["id"]))


@router.get("/{user_id}")
async def get_user_reading_list(user_id: str, user: RegisteredUser):
    """Another user's public reading-list items."""
    storage = get_storage_provider()
    return send_success("Reading list fetched successfully", _reading_list(storage, user_id, public_only=True))


@router.post("")
async def add_to_reading_list(user: RegisteredUser, body: DataEnvelope[ReadingListCreate] | None = None):
    data = require_data(body)
    if not data.volume_id or data.status is None:
        raise ValidationError("volumeId and status are required")

    started_at = as_utc(data.started_at)
    completed_at = as_utc(data.completed_at)
    check_reading_dates(data.status, started_at, completed_at)

    storage = get_storage_provider()
    try:
        item = storage.create_reading_item(
            {
                "user_id": user["id"],
                "volume_id": data.volume_id,
                "status": data.status.value,
                "started_at": started_at,
                "completed_at": completed_at,
                "visibility": data.visibility.value,
            }
        )
    except DuplicateRecordError:
        raise ConflictError("Book already in reading list") from None

    logger.info("Reading list item added", extra={"item_id": item["id"], "volume_id": data.volume_id})
    return send_success("Reading list updated successfully", _reading_list(storage, user["id"]))


@router.patch("/{item_id}")
async def update_reading_list_item(
    item_id: str, user: RegisteredUser, body: DataEnvelope[ReadingListUpdate] | None = None
):
    """Apply the changes, then re-check the date rules against the merged item."""
    data = require_data(body)
    storage = get_storage_provider()
    item = _get_item_or_404(storage, item_id)
    require_owner(item["user_id"], user["id"], "You do not have permission to update this item")

    updates = {}
    if data.status is not None:
        updates["status"] = data.status.value
    if data.started_at is not None:
        updates["started_at"] = as_utc(data.started_at)
    if data.completed_at is not None:
        updates["completed_at"] = as_utc(data.completed_at)
    if data.visibility is not None:
        updates["visibility"] = data.visibility.value

    merged = {**item, **updates}
    check_reading_dates(merged["status"], as_utc(merged["started_at"]), as_utc(merged["completed_at"]))

    storage.update_reading_item(item_id, updates)
    return send_success("Reading list updated successfully", _reading_list(storage, user["id"]))


@router.delete("/{item_id}")
async def delete_reading_list_item(item_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    item = _get_item_or_404(storage, item_id)
    require_owner(item["user_id"], user["id"], "You do not have permission to delete this item")

    storage.delete_reading_item(item_id)
    return send_success("Reading list item deleted successfully", _reading_list(storage, user["id"]))
