"""
Report intake and the reporter's own report history.
"""

import math
from dataclasses import dataclass

from boibritto.errors import ConflictError, NotFoundError, ValidationError
from boibritto.logger import logger
from boibritto.models import ReportCreate, ReportReason, ReportStatus, ReportType
from boibritto.providers import DuplicateRecordError, SQLiteStorage

DESCRIPTION_MAX_LENGTH = 200
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class ReportTarget:
    """The reported entity: its kind and id."""

    report_type: ReportType
    target_id: str


def resolve_target(storage: SQLiteStorage, target: ReportTarget) -> dict | None:
    """Load the reported entity, one branch per report type."""
    report_type = target.report_type
    if report_type is ReportType.COLLECTION:
        return storage.get_collection(target.target_id)
    elif report_type is ReportType.BLOG:
        return storage.get_blog(target.target_id)
    elif report_type is ReportType.DISCUSSION:
        return storage.get_discussion(target.target_id)
    elif report_type is ReportType.COMMENT:
        return storage.get_comment(target.target_id)
    elif report_type is ReportType.USERBOOK:
        return storage.get_book(target.target_id)
    elif report_type is ReportType.USER:
        return storage.get_user(target.target_id)
    raise ValueError(f"Unhandled report type: {report_type}")


def submit_report(storage: SQLiteStorage, reporter_id: str, body: ReportCreate) -> dict:
    """
    Validate and persist a report with status ``pending``.

    Checks run in order and the first failure wins: required fields,
    report type, reason, description length, target existence, and
    finally uniqueness of (reporter, target, type).
    """
    if not body.report_type or not body.target_id or not body.reason:
        raise ValidationError("Report type, target ID, and reason are required")

    try:
        report_type = ReportType(body.report_type)
    except ValueError:
        raise ValidationError("Invalid report type") from None

    try:
        reason = ReportReason(body.reason)
    except ValueError:
        raise ValidationError("Invalid reason") from None

    description = body.description.strip() if body.description else None
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less")

    target = ReportTarget(report_type=report_type, target_id=body.target_id)
    if resolve_target(storage, target) is None:
        raise NotFoundError("Target content not found")

    if storage.find_report(reporter_id, target.target_id, report_type.value):
        raise ConflictError("You have already reported this content")

    try:
        report = storage.create_report(
            {
                "reporter_id": reporter_id,
                "report_type": report_type.value,
                "target_id": target.target_id,
                "reason": reason.value,
                "description": description or None,
                "status": ReportStatus.PENDING.value,
            }
        )
    except DuplicateRecordError:
        raise ConflictError("You have already reported this content") from None

    logger.info(
        "Report submitted",
        extra={"report_id": report["id"], "report_type": report_type.value, "target_id": target.target_id},
    )
    return {
        "report_id": report["id"],
        "report_type": report["report_type"],
        "target_id": report["target_id"],
        "reason": report["reason"],
        "description": report["description"],
        "reported_by": reporter_id,
        "status": report["status"],
        "created_at": report["created_at"],
    }


def list_my_reports(
    storage: SQLiteStorage,
    reporter_id: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    status: str | None = None,
    report_type: str | None = None,
) -> tuple[list[dict], dict]:
    """Returns (reports, pagination) for the reporter, newest first."""
    if status and status not in {s.value for s in ReportStatus}:
        raise ValidationError("Invalid status filter")
    if report_type and report_type not in {t.value for t in ReportType}:
        raise ValidationError("Invalid report type filter")

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)

    reports, total = storage.list_reports(
        reporter_id,
        status=status,
        report_type=report_type,
        limit=limit,
        offset=(page - 1) * limit,
    )
    total_pages = math.ceil(total / limit)
    pagination = {
        "current_page": page,
        "total_pages": total_pages,
        "total_reports": total,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }
    return reports, pagination
