"""
Small request-validation helpers shared by the routers.
"""

from typing import TypeVar

from boibritto.errors import ForbiddenError, ValidationError
from boibritto.models import GENRES, DataEnvelope

T = TypeVar("T")


def require_data(body: DataEnvelope[T] | None) -> T:
    """Unwrap a ``{"data": {...}}`` body, rejecting a missing envelope."""
    if body is None or body.data is None:
        raise ValidationError("Request data is required")
    return body.data


def validate_genres(genres: list[str] | None) -> list[str]:
    genres = genres or []
    invalid = [g for g in genres if g not in GENRES]
    if invalid:
        raise ValidationError(f"Invalid genres: {', '.join(invalid)}")
    return genres


def require_owner(owner_id: str, requester_id: str, message: str) -> None:
    if owner_id != requester_id:
        raise ForbiddenError(message)
