"""
Reading-tracker date rules.
"""

from datetime import datetime, timezone

from boibritto.errors import ValidationError
from boibritto.models import ReadingStatus


def as_utc(value: datetime | str | None) -> datetime | None:
    """Parse stored ISO strings and treat naive datetimes as UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def check_reading_dates(
    status: ReadingStatus | str,
    started_at: datetime | None,
    completed_at: datetime | None,
) -> None:
    """
    Reading and completed items need a start date, completed items an end
    date, and a book cannot be finished before it was started.
    """
    status = ReadingStatus(status)
    if status in (ReadingStatus.READING, ReadingStatus.COMPLETED) and not started_at:
        raise ValidationError("startedAt is required for status 'reading' or 'completed'")
    if status == ReadingStatus.COMPLETED and not completed_at:
        raise ValidationError("completedAt is required for status 'completed'")
    if started_at and completed_at and as_utc(completed_at) < as_utc(started_at):
        raise ValidationError("completedAt cannot be before startedAt")
