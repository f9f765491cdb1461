"""
Reports API router.
Content reports are submitted by users and reviewed by moderators.
"""

from fastapi import APIRouter, Query, status

from boibritto.auth import RegisteredUser
from boibritto.models import Pagination, ReportCreate, ReportOut, ReportSubmitted, dump
from boibritto.providers import get_storage_provider
from boibritto.responses import send_success
from boibritto.services.reports import DEFAULT_PAGE_SIZE, list_my_reports, submit_report

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("")
async def create_report(user: RegisteredUser, request: ReportCreate):
    """Submit a report. The body is not wrapped in a data envelope."""
    report = submit_report(get_storage_provider(), user["id"], request)
    return send_success(
        "Report submitted successfully",
        dump(ReportSubmitted, report),
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my-reports")
async def get_my_reports(
    user: RegisteredUser,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    status_filter: str | None = Query(None, alias="status"),
    report_type: str | None = Query(None, alias="reportType"),
):
    reports, pagination = list_my_reports(
        get_storage_provider(),
        user["id"],
        page=page,
        limit=limit,
        status=status_filter,
        report_type=report_type,
    )
    return send_success(
        "Reports retrieved successfully",
        {
            "reports": [dump(ReportOut, r) for r in reports],
            "pagination": dump(Pagination, pagination),
        },
    )
