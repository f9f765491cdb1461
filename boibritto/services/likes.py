"""
Like/unlike toggle for books and chapters.
"""

from boibritto.errors import ForbiddenError, ValidationError
from boibritto.logger import logger
from boibritto.providers import SQLiteStorage


def toggle_like(storage: SQLiteStorage, kind: str, resource: dict, user_id: str) -> dict:
    """
    Flip the caller's like on a public book or chapter they do not own.

    ``kind`` is "book" or "chapter". Returns ``{"liked": bool, "like_count": int}``.
    """
    if resource["visibility"] != "public":
        raise ForbiddenError(f"You can only like public {kind}s")
    if resource["author_id"] == user_id:
        raise ValidationError(f"You cannot like your own {kind}")

    liked, like_count = storage.toggle_like(kind, resource["id"], user_id)
    logger.info(
        "Like toggled",
        extra={"kind": kind, "target_id": resource["id"], "user_id": user_id, "liked": liked},
    )
    return {"liked": liked, "like_count": like_count}
