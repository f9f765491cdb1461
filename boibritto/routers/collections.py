"""
Collections API router.
A collection is a curated list of Google Books volume ids.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import ForbiddenError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import CollectionCreate, CollectionOut, CollectionUpdate, DataEnvelope, dump
from boibritto.providers import SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.access import can_access, list_scope
from boibritto.services.validators import require_data, require_owner
from boibritto.settings import BOOKS_PAGE_SIZE

router = APIRouter(prefix="/collections", tags=["Collections"])

DESCRIPTION_MAX_LENGTH = 200


def _get_collection_or_404(storage: SQLiteStorage, collection_id: str) -> dict:
    collection = storage.get_collection(collection_id)
    if not collection:
        raise NotFoundError("Collection not found")
    return collection


def _check_description(description: str | None) -> None:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")


def _unique_books(books: list[dict]) -> list[dict]:
    """Drop repeated volume ids, keeping the first occurrence."""
    seen = set()
    unique = []
    for book in books:
        if book["volume_id"] in seen:
            continue
        seen.add(book["volume_id"])
        unique.append(book)
    return unique


@router.get("")
async def list_collections(user: RegisteredUser, owner: str | None = None, page: int = 1):
    """
    List collections newest first.

    Only the all-public listing (no ``owner``) is paginated.
    """
    storage = get_storage_provider()
    scope = list_scope(owner, user["id"])
    paging = {}
    if not owner:
        paging = {"limit": BOOKS_PAGE_SIZE, "offset": (max(page, 1) - 1) * BOOKS_PAGE_SIZE}

    collections, _ = storage.list_collections(owner_id=scope.owner_id, public_only=scope.public_only, **paging)
    return send_success(
        "Collections fetched successfully",
        {"collections": [dump(CollectionOut, c) for c in collections]},
    )


@router.get("/{collection_id}")
async def get_collection(collection_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    collection = _get_collection_or_404(storage, collection_id)
    if not can_access(collection, user["id"]):
        raise ForbiddenError("You do not have access to this collection")
    return send_success("Collection fetched successfully", {"collection": dump(CollectionOut, collection)})


@router.post("")
async def create_collection(user: RegisteredUser, body: DataEnvelope[CollectionCreate] | None = None):
    data = require_data(body)
    if not data.title or not data.title.strip():
        raise ValidationError("Title is required")
    _check_description(data.description)

    now = datetime.now(timezone.utc)
    books = [{"volume_id": b.volume_id, "added_at": (b.added_at or now).isoformat()} for b in data.books]

    storage = get_storage_provider()
    collection = storage.create_collection(
        {
            "user_id": user["id"],
            "title": data.title.strip(),
            "description": data.description or "",
            "books": _unique_books(books),
            "tags": data.tags,
            "visibility": data.visibility.value,
        }
    )
    logger.info("Collection created", extra={"collection_id": collection["id"], "user_id": user["id"]})
    return send_success(
        "Collection created successfully",
        {"collection": dump(CollectionOut, collection)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{collection_id}")
async def update_collection(
    collection_id: str, user: RegisteredUser, body: DataEnvelope[CollectionUpdate] | None = None
):
    """Update fields, add a volume (``addBook``) or remove one (``removeBook``)."""
    data = require_data(body)
    storage = get_storage_provider()
    collection = _get_collection_or_404(storage, collection_id)
    require_owner(collection["user_id"], user["id"], "You do not have permission to update this collection")

    if data.title is not None and not data.title.strip():
        raise ValidationError("Title is required")
    _check_description(data.description)

    updates = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"add_book", "remove_book"})
    if "title" in updates:
        updates["title"] = updates["title"].strip()
    if "visibility" in updates:
        updates["visibility"] = data.visibility.value

    books = collection["books"]
    if data.add_book and not any(b["volume_id"] == data.add_book for b in books):
        books = books + [{"volume_id": data.add_book, "added_at": datetime.now(timezone.utc).isoformat()}]
    if data.remove_book:
        books = [b for b in books if b["volume_id"] != data.remove_book]
    if books != collection["books"]:
        updates["books"] = books

    updated = storage.update_collection(collection_id, updates) if updates else collection
    return send_success("Collection updated successfully", {"collection": dump(CollectionOut, updated)})


@router.delete("/{collection_id}")
async def delete_collection(collection_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    collection = _get_collection_or_404(storage, collection_id)
    require_owner(collection["user_id"], user["id"], "You do not have permission to delete this collection")

    storage.delete_collection(collection_id)
    return send_success("Collection deleted successfully")
