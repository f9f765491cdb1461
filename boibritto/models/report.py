"""
Report model for content moderation.
"""

from datetime import datetime
from enum import Enum

from .common import CamelModel


class ReportType(str, Enum):
    """Kinds of content a report can target."""

    COLLECTION = "collection"
    BLOG = "blog"
    DISCUSSION = "discussion"
    COMMENT = "comment"
    USERBOOK = "userbook"
    USER = "user"


class ReportReason(str, Enum):
    SPAM = "spam"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    VIOLENCE = "violence"
    ADULT_CONTENT = "adult_content"
    COPYRIGHT_VIOLATION = "copyright_violation"
    MISINFORMATION = "misinformation"
    SELF_HARM = "self_harm"
    BULLYING = "bullying"
    IMPERSONATION = "impersonation"
    OTHER = "other"


class ReportStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    ACTION_TAKEN = "action_taken"
    DISMISSED = "dismissed"


class ReportCreate(CamelModel):
    """
    Body of POST /reports (not wrapped in a data envelope).

    Fields are loosely typed so that the intake can report missing and
    out-of-range values in a fixed order with its own messages.
    """

    report_type: str | None = None
    target_id: str | None = None
    reason: str | None = None
    description: str | None = None


class ReportOut(CamelModel):
    id: str
    report_type: ReportType
    target_id: str
    reason: ReportReason
    description: str | None = None
    status: ReportStatus
    created_at: datetime
    updated_at: datetime


class ReportSubmitted(CamelModel):
    report_id: str
    report_type: ReportType
    target_id: str
    reason: ReportReason
    description: str | None = None
    reported_by: str
    status: ReportStatus
    created_at: datetime


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_reports: int
    has_next_page: bool
    has_prev_page: bool
