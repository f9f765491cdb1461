"""
Tests for the structured logging helpers.
"""

import structlog

from boibritto.logger import bind_request_context, clear_request_context, flatten_extra


def test_flatten_extra_merges_into_event():
    event = flatten_extra(None, "info", {"event": "Book created", "extra": {"book_id": "b1"}})
    assert event == {"event": "Book created", "book_id": "b1"}


def test_flatten_extra_ignores_non_dict():
    assert flatten_extra(None, "info", {"event": "x", "extra": "oops"}) == {"event": "x"}


def test_request_context_binds_and_clears():
    clear_request_context()
    bind_request_context(request_id="r1", path="/api/health")
    bind_request_context(user_id="u1")

    assert structlog.contextvars.get_contextvars() == {"request_id": "r1", "path": "/api/health", "user_id": "u1"}

    clear_request_context()
    assert structlog.contextvars.get_contextvars() == {}
