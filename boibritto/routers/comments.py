"""
Comments API router.
Comments are threaded one level deep under public discussions.
"""

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import CommentCreate, CommentOut, CommentThread, CommentUpdate, DataEnvelope, dump
from boibritto.providers import SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.comments import build_comment_tree, validate_reply_parent
from boibritto.services.validators import require_data, require_owner

router = APIRouter(prefix="/comments", tags=["Comments"])

CONTENT_MAX_LENGTH = 500


def _get_public_discussion_or_404(storage: SQLiteStorage, discussion_id: str) -> dict:
    discussion = storage.get_discussion(discussion_id)
    if not discussion or discussion["visibility"] != "public":
        raise NotFoundError("Discussion not found or not accessible")
    return discussion


@router.get("/{discussion_id}")
async def get_comments_by_discussion(discussion_id: str, user: RegisteredUser):
    """Top-level comments with their replies, both oldest first."""
    storage = get_storage_provider()
    _get_public_discussion_or_404(storage, discussion_id)

    tree = build_comment_tree(storage.list_comments(discussion_id))
    return send_success(
        "Comments fetched successfully",
        {"comments": [dump(CommentThread, c) for c in tree]},
    )


@router.post("")
async def create_comment(user: RegisteredUser, body: DataEnvelope[CommentCreate] | None = None):
    data = require_data(body)
    if not data.discussion_id:
        raise ValidationError("Discussion ID is required")
    if not data.content or len(data.content) > CONTENT_MAX_LENGTH:
        raise ValidationError("Content is required and must be <= 500 characters")
    if data.spoiler_alert is None:
        raise ValidationError("spoilerAlert is required and must be boolean")

    storage = get_storage_provider()
    _get_public_discussion_or_404(storage, data.discussion_id)
    if data.parent_comment:
        validate_reply_parent(storage, data.discussion_id, data.parent_comment)

    comment = storage.create_comment(
        {
            "discussion_id": data.discussion_id,
            "user_id": user["id"],
            "content": data.content,
            "spoiler_alert": data.spoiler_alert,
            "parent_comment": data.parent_comment or None,
        }
    )
    logger.info(
        "Comment created",
        extra={"comment_id": comment["id"], "discussion_id": data.discussion_id, "reply": bool(data.parent_comment)},
    )
    return send_success(
        "Comment created successfully",
        {"comment": dump(CommentOut, comment)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{comment_id}")
async def update_comment(comment_id: str, user: RegisteredUser, body: DataEnvelope[CommentUpdate] | None = None):
    data = require_data(body)
    storage = get_storage_provider()
    comment = storage.get_comment(comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    require_owner(comment["user_id"], user["id"], "You can only update your own comments")

    if data.content is not None and len(data.content) > CONTENT_MAX_LENGTH:
        raise ValidationError("Content must be a string and <= 500 characters")

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise ValidationError("No valid fields provided for update")

    updated = storage.update_comment(comment_id, updates)
    return send_success("Comment updated successfully", {"comment": dump(CommentOut, updated)})


@router.delete("/{comment_id}")
async def delete_comment(comment_id: str, user: RegisteredUser):
    """Delete an owned comment. Deleting a top-level comment removes its replies too."""
    storage = get_storage_provider()
    comment = storage.get_comment(comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    require_owner(comment["user_id"], user["id"], "You can only delete your own comments")

    deleted = storage.delete_comment(comment_id)
    logger.info("Comment deleted", extra={"comment_id": comment_id, "deleted_count": deleted})
    if comment.get("parent_comment"):
        return send_success("Comment deleted successfully", {"deletedCount": deleted})
    return send_success("Comment and its replies deleted successfully", {"deletedCount": deleted})
