"""
Chapter model: ordered, individually published parts of a UserBook.
"""

from pydantic import Field, StrictInt

from .common import AuthorSummary, CamelModel, TimestampedOut, Visibility


class ChapterCreate(CamelModel):
    book_id: str | None = None
    title: str | None = None
    content: str | None = None
    chapter_number: StrictInt | None = None
    visibility: Visibility = Visibility.PRIVATE


class ChapterUpdate(CamelModel):
    """Word count is derived from content and cannot be set directly."""

    title: str | None = None
    content: str | None = None
    visibility: Visibility | None = None


class BookSummary(CamelModel):
    id: str
    title: str
    author_id: str
    author: AuthorSummary | None = None


class ChapterOut(TimestampedOut):
    book_id: str
    author_id: str
    author: AuthorSummary | None = None
    title: str
    content: str | None = None
    chapter_number: int
    visibility: Visibility
    word_count: int = 0
    likes: list[str] = Field(default_factory=list)
    like_count: int = 0


class ChapterDetail(ChapterOut):
    book: BookSummary | None = None
