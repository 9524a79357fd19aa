"""Error Hierarchy — status codes, codes and the REST envelope."""

import pytest

from lawconnect.core.errors import (
    AggregateRecomputeFailed,
    AuthenticationError,
    DatabaseError,
    DuplicateBidError,
    DuplicateConstraintError,
    ForbiddenError,
    NoCompletedEngagementError,
    ResourceNotFoundError,
    ValidationFailedError,
)


@pytest.mark.parametrize("error,status", [
    (ValidationFailedError("bad", "field"), 400),
    (AuthenticationError(), 401),
    (ForbiddenError(), 403),
    (NoCompletedEngagementError(), 403),
    (ResourceNotFoundError("CasePost", "x"), 404),
    (DuplicateBidError(), 409),
    (DatabaseError("boom", "insert"), 500),
])
def test_http_status_per_error(error, status):
    assert error.http_status == status


def test_subclasses_keep_family():
    assert isinstance(NoCompletedEngagementError(), ForbiddenError)
    assert isinstance(DuplicateBidError(), DuplicateConstraintError)


def test_response_envelope_has_top_level_message():
    body = ResourceNotFoundError("CasePost", "abc").to_response()
    assert body["message"] == "CasePost not found"
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["category"] == "resource_not_found"
    assert body["error"]["context"] == {"resource_type": "CasePost", "resource_id": "abc"}


def test_recompute_failure_carries_aggregate_and_target():
    error = AggregateRecomputeFailed("case_bid_stats", "abc", "connection lost")
    assert error.code == "AGGREGATE_RECOMPUTE_FAILED"
    assert error.aggregate == "case_bid_stats"
    assert error.context.resource_id == "abc"
    assert "connection lost" in error.message
