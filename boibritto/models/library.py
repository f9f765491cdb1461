"""
Reader-side content: blogs, book collections and the reading-list tracker.
Books are referenced by their Google Books volume id.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, StrictBool

from .common import AuthorSummary, CamelModel, SharingVisibility, TimestampedOut

# ===== Blogs =====


class BlogCreate(CamelModel):
    title: str | None = None
    content: str | None = None
    visibility: SharingVisibility = SharingVisibility.PUBLIC
    spoiler_alert: StrictBool | None = None
    genres: list[str] = Field(default_factory=list)


class BlogUpdate(CamelModel):
    title: str | None = None
    content: str | None = None
    visibility: SharingVisibility | None = None
    spoiler_alert: StrictBool | None = None
    genres: list[str] | None = None


class BlogOut(TimestampedOut):
    user_id: str
    user: AuthorSummary | None = None
    title: str
    content: str | None = None
    visibility: SharingVisibility
    spoiler_alert: bool
    genres: list[str] = Field(default_factory=list)


# ===== Collections =====


class CollectionBook(CamelModel):
    volume_id: str = Field(..., min_length=1, max_length=100)
    added_at: datetime | None = None


class CollectionCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    books: list[CollectionBook] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    visibility: SharingVisibility = SharingVisibility.PUBLIC


class CollectionUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    visibility: SharingVisibility | None = None
    tags: list[str] | None = None
    add_book: str | None = Field(None, max_length=100)
    remove_book: str | None = None


class CollectionOut(TimestampedOut):
    user_id: str
    user: AuthorSummary | None = None
    title: str
    description: str | None = None
    books: list[CollectionBook] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    visibility: SharingVisibility


# ===== Reading list =====


class ReadingStatus(str, Enum):
    INTERESTED = "interested"
    READING = "reading"
    COMPLETED = "completed"


class ReadingListCreate(CamelModel):
    volume_id: str | None = None
    status: ReadingStatus | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    visibility: SharingVisibility = SharingVisibility.PUBLIC


class ReadingListUpdate(CamelModel):
    status: ReadingStatus | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    visibility: SharingVisibility | None = None


class ReadingListItemOut(TimestampedOut):
    user_id: str
    volume_id: str
    status: ReadingStatus
    started_at: datetime | None = None
    completed_at: datetime | None = None
    visibility: SharingVisibility
