"""
Shared enums, genre allow-list and base schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

GENRES = (
    "fiction",
    "non-fiction",
    "fantasy",
    "sci-fi",
    "mystery",
    "romance",
    "thriller",
    "history",
    "historical",
    "biography",
    "poetry",
    "self-help",
    "horror",
    "drama",
    "dystopian",
    "adventure",
    "comedy",
    "spirituality",
    "literary",
    "literature",
    "reading",
    "lifestyle",
    "contemporary",
    "diversity",
    "philosophy",
    "science",
    "timeless",
    "psychology",
    "modern",
    "young-adult",
    "children",
    "classic",
    "graphic-novel",
    "memoir",
    "education",
    "community",
    "others",
)


class Visibility(str, Enum):
    """Visibility of user-authored books and chapters."""

    PRIVATE = "private"  # Only visible to the author
    PUBLIC = "public"


class SharingVisibility(str, Enum):
    """Visibility of blogs, collections and reading-list items."""

    PRIVATE = "private"
    FRIENDS = "friends"
    PUBLIC = "public"


class DiscussionVisibility(str, Enum):
    FRIENDS = "friends"
    PUBLIC = "public"


class CamelModel(BaseModel):
    """Base schema exchanging camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorSummary(CamelModel):
    """Denormalized owner info attached to listed content."""

    id: str
    username: str | None = None
    display_name: str | None = None
    avatar: str | None = None


class TimestampedOut(CamelModel):
    id: str
    created_at: datetime
    updated_at: datetime


T = TypeVar("T")


class DataEnvelope(BaseModel, Generic[T]):
    """Request body wrapper: ``{"data": {...}}``."""

    data: T | None = None


def dump(model_cls: type[CamelModel], row: dict, **kwargs) -> dict:
    """Validate a storage row against an output schema and dump it camelCased."""
    return model_cls.model_validate(row).model_dump(by_alias=True, **kwargs)
