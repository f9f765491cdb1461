"""
Tests for report intake and report history.
"""

import pytest

from boibritto.errors import ConflictError, NotFoundError, ValidationError
from boibritto.models import ReportCreate, ReportType
from boibritto.services.reports import ReportTarget, list_my_reports, resolve_target, submit_report


def _report(**fields) -> ReportCreate:
    return ReportCreate(**fields)


@pytest.fixture
def targets(storage, alice):
    """One entity of every reportable type, keyed by report type."""
    book = storage.create_book({"author_id": alice["id"], "title": "B"})
    discussion = storage.create_discussion(
        {"user_id": alice["id"], "title": "D", "content": "c", "visibility": "public", "spoiler_alert": False}
    )
    comment = storage.create_comment(
        {"discussion_id": discussion["id"], "user_id": alice["id"], "content": "x", "spoiler_alert": False}
    )
    blog = storage.create_blog(
        {"user_id": alice["id"], "title": "Blog", "content": "c", "visibility": "public", "spoiler_alert": False}
    )
    collection = storage.create_collection({"user_id": alice["id"], "title": "Col", "visibility": "public"})
    return {
        ReportType.COLLECTION: collection["id"],
        ReportType.BLOG: blog["id"],
        ReportType.DISCUSSION: discussion["id"],
        ReportType.COMMENT: comment["id"],
        ReportType.USERBOOK: book["id"],
        ReportType.USER: alice["id"],
    }


def test_resolve_target_covers_every_type(storage, targets):
    for report_type in ReportType:
        assert resolve_target(storage, ReportTarget(report_type, targets[report_type])) is not None
        assert resolve_target(storage, ReportTarget(report_type, "missing")) is None


@pytest.mark.parametrize(
    "fields, message",
    [
        ({"target_id": "x", "reason": "spam"}, "Report type, target ID, and reason are required"),
        ({"report_type": "user", "reason": "spam"}, "Report type, target ID, and reason are required"),
        ({"report_type": "user", "target_id": "x"}, "Report type, target ID, and reason are required"),
        ({"report_type": "poem", "target_id": "x", "reason": "spam"}, "Invalid report type"),
        ({"report_type": "user", "target_id": "x", "reason": "boring"}, "Invalid reason"),
        (
            {"report_type": "user", "target_id": "x", "reason": "spam", "description": "d" * 201},
            "Description must be 200 characters or less",
        ),
    ],
)
def test_submit_report_validation_order(storage, bob, fields, message):
    with pytest.raises(ValidationError, match=message):
        submit_report(storage, bob["id"], _report(**fields))


def test_submit_report_unknown_target(storage, bob):
    with pytest.raises(NotFoundError, match="Target content not found"):
        submit_report(storage, bob["id"], _report(report_type="blog", target_id="missing", reason="spam"))


def test_submit_report_once_per_target(storage, alice, bob):
    """Test that a second report of the same target and type conflicts."""
    body = _report(report_type="user", target_id=alice["id"], reason="harassment", description="  rude  ")

    report = submit_report(storage, bob["id"], body)
    assert report["status"] == "pending"
    assert report["description"] == "rude"
    assert report["reported_by"] == bob["id"]

    with pytest.raises(ConflictError, match="You have already reported this content"):
        submit_report(storage, bob["id"], body)

    _, total = storage.list_reports(bob["id"])
    assert total == 1


def test_list_my_reports_paginates(storage, bob, targets):
    for report_type, target_id in targets.items():
        submit_report(storage, bob["id"], _report(report_type=report_type.value, target_id=target_id, reason="spam"))

    reports, pagination = list_my_reports(storage, bob["id"], page=2, limit=4)
    assert len(reports) == 2
    assert pagination == {
        "current_page": 2,
        "total_pages": 2,
        "total_reports": 6,
        "has_next_page": False,
        "has_prev_page": True,
    }

    blogs, pagination = list_my_reports(storage, bob["id"], report_type="blog")
    assert [r["report_type"] for r in blogs] == ["blog"]
    assert pagination["total_pages"] == 1


def test_list_my_reports_clamps_paging(storage, bob):
    _, pagination = list_my_reports(storage, bob["id"], page=0, limit=500)
    assert pagination["current_page"] == 1
    assert pagination["total_pages"] == 0
    assert not pagination["has_next_page"]


def test_list_my_reports_rejects_bad_filters(storage, bob):
    with pytest.raises(ValidationError, match="Invalid status filter"):
        list_my_reports(storage, bob["id"], status="closed")
    with pytest.raises(ValidationError, match="Invalid report type filter"):
        list_my_reports(storage, bob["id"], report_type="poem")
