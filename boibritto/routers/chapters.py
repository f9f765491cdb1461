"""
Chapters API router.
Chapters belong to a user book; visibility follows the book's.
"""

from fastapi import APIRouter, status

from boibritto.auth import RegisteredUser
from boibritto.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import ChapterCreate, ChapterDetail, ChapterOut, ChapterUpdate, DataEnvelope, Visibility, dump
from boibritto.providers import DuplicateRecordError, SQLiteStorage, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.access import can_access
from boibritto.services.likes import toggle_like
from boibritto.services.validators import require_data, require_owner
from boibritto.services.visibility import check_chapter_visibility, count_words

router = APIRouter(prefix="/chapters", tags=["Chapters"])

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 50_000


def _get_chapter_or_404(storage: SQLiteStorage, chapter_id: str) -> dict:
    chapter = storage.get_chapter(chapter_id)
    if not chapter:
        raise NotFoundError("Chapter not found")
    return chapter


def _check_lengths(title: str | None, content: str | None) -> None:
    if title is not None and len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    if content is not None and len(content) > CONTENT_MAX_LENGTH:
        raise ValidationError("Content cannot exceed 50,000 characters")


@router.get("/book/{book_id}")
async def list_chapters_for_book(book_id: str, user: RegisteredUser, published: bool | None = None):
    """
    List a book's chapters by number, without content.

    Non-authors only ever see public chapters; ``published`` narrows further.
    """
    storage = get_storage_provider()
    book = storage.get_book(book_id)
    if not book:
        raise NotFoundError("Book not found")

    is_author = book["author_id"] == user["id"]
    wanted = None if published is None else (Visibility.PUBLIC if published else Visibility.PRIVATE)

    if not is_author and wanted == Visibility.PRIVATE:
        chapters = []
    elif not is_author:
        chapters = storage.list_chapters(book_id, visibility=Visibility.PUBLIC.value)
    else:
        chapters = storage.list_chapters(book_id, visibility=wanted.value if wanted else None)

    return send_success(
        "Chapters fetched successfully",
        {"chapters": [dump(ChapterOut, c, exclude={"content"}) for c in chapters]},
    )


@router.get("/{chapter_id}")
async def get_chapter(chapter_id: str, user: RegisteredUser):
    """Chapter detail including content and a summary of its book."""
    storage = get_storage_provider()
    chapter = _get_chapter_or_404(storage, chapter_id)

    if not can_access(chapter, user["id"], owner_field="author_id"):
        raise ForbiddenError("You do not have access to this chapter")

    return send_success("Chapter fetched successfully", {"chapter": dump(ChapterDetail, chapter)})


@router.post("")
async def create_chapter(user: RegisteredUser, body: DataEnvelope[ChapterCreate] | None = None):
    data = require_data(body)
    if not data.book_id or not data.title or not data.content or data.chapter_number is None:
        raise ValidationError("BookId, title, content, and chapterNumber are required")
    _check_lengths(data.title, data.content)
    if data.chapter_number < 1:
        raise ValidationError("Chapter number must be at least 1")

    storage = get_storage_provider()
    book = storage.get_book(data.book_id)
    if not book:
        raise NotFoundError("Book not found")
    require_owner(book["author_id"], user["id"], "You can only create chapters for your own books")
    check_chapter_visibility(book, data.visibility)

    if storage.get_chapter_by_number(data.book_id, data.chapter_number):
        raise ConflictError("Chapter number already exists for this book")

    try:
        chapter = storage.create_chapter(
            {
                "book_id": data.book_id,
                "author_id": user["id"],
                "title": data.title,
                "content": data.content,
                "chapter_number": data.chapter_number,
                "visibility": data.visibility.value,
                "word_count": count_words(data.content),
            }
        )
    except DuplicateRecordError:
        raise ConflictError("Chapter number already exists for this book") from None

    logger.info(
        "Chapter created",
        extra={"chapter_id": chapter["id"], "book_id": data.book_id, "chapter_number": data.chapter_number},
    )
    return send_success(
        "Chapter created successfully",
        {"chapter": dump(ChapterOut, chapter)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{chapter_id}")
async def update_chapter(chapter_id: str, user: RegisteredUser, body: DataEnvelope[ChapterUpdate] | None = None):
    data = require_data(body)
    storage = get_storage_provider()
    chapter = _get_chapter_or_404(storage, chapter_id)
    require_owner(chapter["author_id"], user["id"], "You can only update your own chapters")

    if data.title is not None and not data.title.strip():
        raise ValidationError("Title is required")
    _check_lengths(data.title, data.content)
    if data.visibility is not None:
        check_chapter_visibility(storage.get_book(chapter["book_id"]), data.visibility)

    updates = {}
    if data.title is not None:
        updates["title"] = data.title
    if data.content is not None:
        updates["content"] = data.content
        updates["word_count"] = count_words(data.content)
    if data.visibility is not None:
        updates["visibility"] = data.visibility.value

    updated = storage.update_chapter(chapter_id, updates)
    return send_success("Chapter updated successfully", {"chapter": dump(ChapterOut, updated)})


@router.delete("/{chapter_id}")
async def delete_chapter(chapter_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    chapter = _get_chapter_or_404(storage, chapter_id)
    require_owner(chapter["author_id"], user["id"], "You can only delete your own chapters")

    storage.delete_chapter(chapter_id)
    logger.info("Chapter deleted", extra={"chapter_id": chapter_id, "book_id": chapter["book_id"]})
    return send_success("Chapter deleted successfully")


@router.post("/{chapter_id}/like")
async def like_chapter(chapter_id: str, user: RegisteredUser):
    storage = get_storage_provider()
    chapter = _get_chapter_or_404(storage, chapter_id)

    result = toggle_like(storage, "chapter", chapter, user["id"])
    message = "Chapter liked successfully" if result["liked"] else "Chapter unliked successfully"
    return send_success(message, {"liked": result["liked"], "likeCount": result["like_count"]})
