"""
Blogs API router.
"""

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import ForbiddenError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import BlogCreate, BlogOut, BlogUpdate, DataEnvelope, dump
from boibritto.providers import SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.access import can_access, list_scope
from boibritto.services.validators import require_data, require_owner, validate_genres
from boibritto.settings import BOOKS_PAGE_SIZE

router = APIRouter(prefix="/blogs", tags=["Blogs"])


def _get_blog_or_404(storage: SQLiteStorage, blog_id: str) -> dict:
    blog = storage.get_blog(blog_id)
    if not blog:
        raise NotFoundError("Blog not found")
    return blog


@router.get("")
async def list_blogs(user: RegisteredUser, author: str | None = None, page: int = 1):
    """
    List blogs newest first.

    Only the all-public listing (no ``author``) is paginated.
    """
    storage = get_storage_provider()
    scope = list_scope(author, user["id"])
    paging = {}
    if not author:
        paging = {"limit": BOOKS_PAGE_SIZE, "offset": (max(page, 1) - 1) * BOOKS_PAGE_SIZE}

    blogs, _ = storage.list_blogs(owner_id=scope.owner_id, public_only=scope.public_only, **paging)
    return send_success("Blogs fetched successfully", {"blogs": [dump(BlogOut, b) for b in blogs]})


@router.get("/{blog_id}")
async def get_blog(blog_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    blog = _get_blog_or_404(storage, blog_id)
    if not can_access(blog, user["id"]):
        raise ForbiddenError("You do not have access to this blog")
    return send_success("Blog fetched successfully", {"blog": dump(BlogOut, blog)})


@router.post("")
async def create_blog(user: RegisteredUser, body: DataEnvelope[BlogCreate] | None = None):
    data = require_data(body)
    if not data.title or not data.title.strip():
        raise ValidationError("Title is required")
    if not data.content or not data.content.strip():
        raise ValidationError("Content is required")
    if data.spoiler_alert is None:
        raise ValidationError("spoilerAlert is required and must be boolean")

    storage = get_storage_provider()
    blog = storage.create_blog(
        {
            "user_id": user["id"],
            "title": data.title.strip(),
            "content": data.content,
            "visibility": data.visibility.value,
            "spoiler_alert": data.spoiler_alert,
            "genres": validate_genres(data.genres),
        }
    )
    logger.info("Blog created", extra={"blog_id": blog["id"], "user_id": user["id"]})
    return send_success(
        "Blog created successfully",
        {"blog": dump(BlogOut, blog)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{blog_id}")
async def update_blog(blog_id: str, user: RegisteredUser, body: DataEnvelope[BlogUpdate] | None = None):
    data = require_data(body)
    storage = get_storage_provider()
    blog = _get_blog_or_404(storage, blog_id)
    require_owner(blog["user_id"], user["id"], "You do not have permission to update this blog")

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in updates:
        if not updates["title"].strip():
            raise ValidationError("Title is required")
        updates["title"] = updates["title"].strip()
    if "genres" in updates:
        updates["genres"] = validate_genres(updates["genres"])
    if "visibility" in updates:
        updates["visibility"] = data.visibility.value

    updated = storage.update_blog(blog_id, updates)
    return send_success("Blog updated successfully", {"blog": dump(BlogOut, updated)})


@router.delete("/{blog_id}")
async def delete_blog(blog_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    blog = _get_blog_or_404(storage, blog_id)
    require_owner(blog["user_id"], user["id"], "You do not have permission to delete this blog")

    storage.delete_blog(blog_id)
    return send_success("Blog deleted successfully")
