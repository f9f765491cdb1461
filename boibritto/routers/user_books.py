"""
User books API router.
Handles books written on the platform: listing, CRUD and likes.
"""

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import ForbiddenError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import (
    DataEnvelope,
    UserBookCreate,
    UserBookDetail,
    UserBookListItem,
    UserBookOut,
    UserBookUpdate,
    Visibility,
    dump,
)
from boibritto.providers import SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.access import can_access, list_scope
from boibritto.services.likes import toggle_like
from boibritto.services.validators import require_data, require_owner, validate_genres
from boibritto.services.visibility import check_book_can_complete, check_book_can_go_private
from boibritto.settings import BOOKS_PAGE_SIZE

router = APIRouter(prefix="/user-books", tags=["User Books"])

TITLE_MAX_LENGTH = 500
SYNOPSIS_MAX_LENGTH = 1000


def _get_book_or_404(storage: SQLiteStorage, book_id: str) -> dict:
    book = storage.get_book(book_id)
    if not book:
        raise NotFoundError("User book not found")
    return book


def _check_lengths(title: str | None, synopsis: str | None) -> None:
    if title is not None and len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    if synopsis is not None and len(synopsis) > SYNOPSIS_MAX_LENGTH:
        raise ValidationError(f"Synopsis cannot exceed {SYNOPSIS_MAX_LENGTH} characters")


@router.get("")
async def list_user_books(
    user: RegisteredUser,
    author: str | None = None,
    search: str | None = None,
    genre: str | None = None,
    completed: bool | None = None,
    page: int = 1,
):
    """
    List books, newest first, with chapter count and total word count.

    ``author``: absent for all public books, "me" for all of the caller's
    books, or a user id for that user's public books.
    """
    storage = get_storage_provider()
    scope = list_scope(author, user["id"])
    page = max(page, 1)

    books, _ = storage.list_books(
        author_id=scope.owner_id,
        public_only=scope.public_only,
        search=search,
        genre=genre,
        completed=completed,
        limit=BOOKS_PAGE_SIZE,
        offset=(page - 1) * BOOKS_PAGE_SIZE,
    )
    return send_success(
        "User books fetched successfully",
        {"books": [dump(UserBookListItem, b) for b in books]},
    )


@router.get("/{book_id}")
async def get_user_book(book_id: str, user: RegisteredUser):
    """Book detail with the chapters the caller may see (content excluded)."""
    storage = get_storage_provider()
    book = _get_book_or_404(storage, book_id)

    if not can_access(book, user["id"], owner_field="author_id"):
        raise ForbiddenError("You do not have access to this book")

    is_author = book["author_id"] == user["id"]
    chapters = storage.list_chapters(book_id, visibility=None if is_author else Visibility.PUBLIC.value)
    book["chapters"] = chapters

    return send_success("User book fetched successfully", {"book": dump(UserBookDetail, book)})


@router.post("")
async def create_user_book(user: RegisteredUser, body: DataEnvelope[UserBookCreate] | None = None):
    data = require_data(body)
    if not data.title or not data.title.strip():
        raise ValidationError("Title is required")
    _check_lengths(data.title.strip(), data.synopsis)
    genres = validate_genres(data.genres)

    storage = get_storage_provider()
    book = storage.create_book(
        {
            "author_id": user["id"],
            "title": data.title.strip(),
            "synopsis": data.synopsis,
            "genres": genres,
            "visibility": data.visibility.value,
            "cover_image": data.cover_image,
            "is_completed": False,
        }
    )
    logger.info("Book created", extra={"book_id": book["id"], "author_id": user["id"]})
    return send_success(
        "User book created successfully",
        {"book": dump(UserBookOut, book)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{book_id}")
async def update_user_book(book_id: str, user: RegisteredUser, body: DataEnvelope[UserBookUpdate] | None = None):
    """
    Update an owned book.

    A book cannot go private while it has public chapters, and cannot be
    marked completed without chapters.
    """
    data = require_data(body)
    storage = get_storage_provider()
    book = _get_book_or_404(storage, book_id)
    require_owner(book["author_id"], user["id"], "You can only update your own books")

    if data.title is not None and not data.title.strip():
        raise ValidationError("Title is required")
    _check_lengths(data.title, data.synopsis)

    if data.visibility == Visibility.PRIVATE:
        check_book_can_go_private(storage, book_id)
    if data.is_completed is True:
        check_book_can_complete(storage, book_id)

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in updates:
        updates["title"] = updates["title"].strip()
    if "genres" in updates:
        updates["genres"] = validate_genres(updates["genres"])
    if "visibility" in updates:
        updates["visibility"] = Visibility(updates["visibility"]).value

    updated = storage.update_book(book_id, updates)
    logger.info("Book updated", extra={"book_id": book_id, "fields": sorted(updates)})
    return send_success("User book updated successfully", {"book": dump(UserBookOut, updated)})


@router.delete("/{book_id}")
async def delete_user_book(book_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    book = _get_book_or_404(storage, book_id)
    require_owner(book["author_id"], user["id"], "You can only delete your own books")

    chapters_deleted = storage.delete_book(book_id)
    return send_success(
        "User book and all chapters deleted successfully",
        {"deletedChapters": chapters_deleted},
    )


@router.post("/{book_id}/like")
async def like_user_book(book_id: str, user: RegisteredUser):
    """Toggle the caller's like on a public book."""
    storage = get_storage_provider()
    book = _get_book_or_404(storage, book_id)

    result = toggle_like(storage, "book", book, user["id"])
    message = "Book liked successfully" if result["liked"] else "Book unliked successfully"
    return send_success(message, {"liked": result["liked"], "likeCount": result["like_count"]})
