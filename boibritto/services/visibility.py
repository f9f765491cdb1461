"""
Visibility cascade between books and chapters, and the completion rule.

These run before every persistence call that can change a chapter's
visibility, a book's visibility or a book's completion flag.
"""

from boibritto.errors import ValidationError
from boibritto.models import Visibility
from boibritto.providers import SQLiteStorage


def count_words(content: str | None) -> int:
    """Whitespace-delimited tokens in the trimmed content."""
    if not content:
        return 0
    return len(content.split())


def check_chapter_visibility(book: dict, visibility: Visibility | str | None) -> None:
    """A chapter may only be public while its book is public."""
    if visibility is None:
        return
    if Visibility(visibility) == Visibility.PUBLIC and book["visibility"] == Visibility.PRIVATE.value:
        raise ValidationError("Chapter cannot be public when the book is private")


def check_book_can_go_private(storage: SQLiteStorage, book_id: str) -> None:
    if storage.count_chapters(book_id, visibility=Visibility.PUBLIC.value) > 0:
        raise ValidationError("Cannot make book private while it has public chapters")


def check_book_can_complete(storage: SQLiteStorage, book_id: str) -> None:
    if storage.count_chapters(book_id) == 0:
        raise ValidationError("Cannot mark book as completed without any chapters")
