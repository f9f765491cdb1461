"""
Profile API router.
"""

from fastapi import APIRouter

from boibritto.auth import RegisteredUser
from boibritto.models import BlogOut, CollectionOut, ReadingListItemOut, UserOut, dump
from boibritto.providers import get_storage_provider
from boibritto.responses import send_success

router = APIRouter(prefix="/profile", tags=["Profile"])

PREVIEW_LIMIT = 5


@router.get("/me")
async def get_current_profile(user: RegisteredUser):
    """The caller's profile with previews of their five most recently updated items."""
    storage = get_storage_provider()
    preview = {"owner_id": user["id"], "public_only": False, "order_by": "updated_at", "limit": PREVIEW_LIMIT}

    collections, _ = storage.list_collections(**preview)
    blogs, _ = storage.list_blogs(**preview)
    reading = storage.list_reading_items(user["id"], order_by="updated_at", limit=PREVIEW_LIMIT)

    return send_success(
        "Profile data fetched successfully",
        {
            "profile_data": dump(UserOut, user),
            "collections": [dump(CollectionOut, c, exclude={"books", "tags", "user"}) for c in collections],
            "reading_tracker": [dump(ReadingListItemOut, r) for r in reading],
            "blogs": [dump(BlogOut, b, exclude={"content", "user"}) for b in blogs],
        },
    )
