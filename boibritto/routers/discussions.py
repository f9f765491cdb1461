"""
Discussions API router.
"""

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import DataEnvelope, DiscussionCreate, DiscussionOut, DiscussionUpdate, DiscussionVisibility, dump
from boibritto.providers import SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.access import ME
from boibritto.services.validators import require_data, require_owner, validate_genres

router = APIRouter(prefix="/discussions", tags=["Discussions"])

LIST_LIMIT = 20


def _get_discussion_or_404(storage: SQLiteStorage, discussion_id: str) -> dict:
    discussion = storage.get_discussion(discussion_id)
    if not discussion:
        raise NotFoundError("Discussion not found")
    return discussion


@router.get("")
async def list_discussions(user: RegisteredUser, author: str | None = None, search: str | None = None):
    """
    Public discussions, most recently updated first (at most 20).

    ``author`` may be "me" or a user id; either way only public
    discussions are returned.
    """
    storage = get_storage_provider()
    owner_id = None
    if author == ME:
        owner_id = user["id"]
    elif author:
        if not storage.get_user(author):
            raise NotFoundError("User not found")
        owner_id = author

    discussions = storage.list_discussions(user_id=owner_id, search=search, limit=LIST_LIMIT)
    return send_success(
        "Discussions fetched successfully",
        {"discussions": [dump(DiscussionOut, d, exclude={"content"}) for d in discussions]},
    )


@router.get("/{discussion_id}")
async def get_discussion(discussion_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    discussion = storage.get_discussion(discussion_id)
    if not discussion or discussion["visibility"] != DiscussionVisibility.PUBLIC.value:
        raise NotFoundError("Discussion not found or not accessible")

    return send_success("Discussion fetched successfully", {"discussion": dump(DiscussionOut, discussion)})


@router.post("")
async def create_discussion(user: RegisteredUser, body: DataEnvelope[DiscussionCreate] | None = None):
    """Create a discussion. New discussions are always public."""
    data = require_data(body)
    if not data.title or not data.title.strip():
        raise ValidationError("Title is required")
    if not data.content or not data.content.strip():
        raise ValidationError("Content is required")
    if data.spoiler_alert is None:
        raise ValidationError("spoilerAlert is required and must be boolean")
    genres = validate_genres(data.genres)

    storage = get_storage_provider()
    discussion = storage.create_discussion(
        {
            "user_id": user["id"],
            "title": data.title.strip(),
            "content": data.content,
            "topic": data.topic,
            "visibility": DiscussionVisibility.PUBLIC.value,
            "spoiler_alert": data.spoiler_alert,
            "genres": genres,
        }
    )
    logger.info("Discussion created", extra={"discussion_id": discussion["id"], "user_id": user["id"]})
    return send_success(
        "Discussion created successfully",
        {"discussion": dump(DiscussionOut, discussion)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{discussion_id}")
async def update_discussion(
    discussion_id: str, user: RegisteredUser, body: DataEnvelope[DiscussionUpdate] | None = None
):
    data = require_data(body)
    storage = get_storage_provider()
    discussion = _get_discussion_or_404(storage, discussion_id)
    require_owner(discussion["user_id"], user["id"], "You can only update your own discussions")

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise ValidationError("No valid fields provided for update")
    if "title" in updates:
        if not updates["title"].strip():
            raise ValidationError("Title is required")
        updates["title"] = updates["title"].strip()
    if "content" in updates and not updates["content"].strip():
        raise ValidationError("Content is required")
    if "genres" in updates:
        updates["genres"] = validate_genres(updates["genres"])

    updated = storage.update_discussion(discussion_id, updates)
    return send_success("Discussion updated successfully", {"discussion": dump(DiscussionOut, updated)})


@router.delete("/{discussion_id}")
async def delete_discussion(discussion_id: str, user: RegisteredUser):
    """Delete an owned discussion together with all of its comments."""
    storage = get_storage_provider()
    discussion = _get_discussion_or_404(storage, discussion_id)
    require_owner(discussion["user_id"], user["id"], "You can only delete your own discussions")

    comments_deleted = storage.delete_discussion(discussion_id)
    logger.info(
        "Discussion deleted",
        extra={"discussion_id": discussion_id, "comments_deleted": comments_deleted},
    )
    return send_success("Discussion deleted successfully", {"deletedComments": comments_deleted})
