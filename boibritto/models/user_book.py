"""
UserBook model: books written on the platform by its users.
"""

from datetime import datetime

from pydantic import Field, StrictBool

from .common import AuthorSummary, CamelModel, TimestampedOut, Visibility


class UserBookCreate(CamelModel):
    title: str | None = None
    synopsis: str | None = None
    genres: list[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE
    cover_image: str | None = None


class UserBookUpdate(CamelModel):
    title: str | None = None
    synopsis: str | None = None
    genres: list[str] | None = None
    visibility: Visibility | None = None
    cover_image: str | None = None
    is_completed: StrictBool | None = None


class ChapterSummary(CamelModel):
    """Chapter row embedded in a book detail (content excluded)."""

    id: str
    title: str
    chapter_number: int
    visibility: Visibility
    word_count: int = 0
    created_at: datetime


class UserBookOut(TimestampedOut):
    author_id: str
    author: AuthorSummary | None = None
    title: str
    synopsis: str | None = None
    genres: list[str] = Field(default_factory=list)
    visibility: Visibility
    cover_image: str | None = None
    likes: list[str] = Field(default_factory=list)
    like_count: int = 0
    is_completed: bool = False


class UserBookListItem(UserBookOut):
    chapter_count: int = 0
    total_word_count: int = 0


class UserBookDetail(UserBookOut):
    chapters: list[ChapterSummary] = Field(default_factory=list)
