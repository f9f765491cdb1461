"""
Discussion and Comment models.
"""

from datetime import datetime

from pydantic import Field, StrictBool

from .common import AuthorSummary, CamelModel, DiscussionVisibility, TimestampedOut


class DiscussionCreate(CamelModel):
    title: str | None = None
    content: str | None = None
    topic: str | None = None
    spoiler_alert: StrictBool | None = None
    genres: list[str] = Field(default_factory=list)


class DiscussionUpdate(CamelModel):
    title: str | None = None
    content: str | None = None
    topic: str | None = None
    spoiler_alert: StrictBool | None = None
    genres: list[str] | None = None


class DiscussionOut(TimestampedOut):
    user_id: str
    user: AuthorSummary | None = None
    title: str
    content: str | None = None
    topic: str | None = None
    visibility: DiscussionVisibility
    spoiler_alert: bool
    genres: list[str] = Field(default_factory=list)


class CommentCreate(CamelModel):
    discussion_id: str | None = None
    content: str | None = None
    spoiler_alert: StrictBool | None = None
    parent_comment: str | None = None


class CommentUpdate(CamelModel):
    content: str | None = None
    spoiler_alert: StrictBool | None = None


class CommentOut(CamelModel):
    id: str
    discussion_id: str
    user_id: str
    user: AuthorSummary | None = None
    content: str
    spoiler_alert: bool
    parent_comment: str | None = None
    created_at: datetime
    updated_at: datetime


class CommentThread(CommentOut):
    """Top-level comment with its (single level of) replies."""

    replies: list[CommentOut] = Field(default_factory=list)
