"""Case Post Schemas — field constraints and patch semantics."""

import pytest
from pydantic import ValidationError

from lawconnect.schemas.case_post import CaseCreate, CaseUpdate

VALID = {
    "title": "Custody dispute",
    "description": "Need help with a custody arrangement.",
    "category": "Family Law",
    "budget": 1500,
}


def test_valid_case():
    case = CaseCreate(**VALID)
    assert case.is_remote is False
    assert case.to_columns()["category"] == "Family Law"


def test_title_is_stripped():
    assert CaseCreate(**{**VALID, "title": "  Custody  "}).title == "Custody"


@pytest.mark.parametrize("override", [
    {"title": ""},
    {"title": "   "},
    {"title": "x" * 101},
    {"description": "x" * 2001},
    {"category": "Maritime Law"},
    {"budget": -1},
])
def test_invalid_case_rejected(override):
    with pytest.raises(ValidationError):
        CaseCreate(**{**VALID, **override})


def test_derived_fields_are_not_accepted():
    case = CaseCreate(**VALID, average_bid=999, bid_count=7)
    columns = case.to_columns()
    assert "average_bid" not in columns
    assert "bid_count" not in columns


def test_update_keeps_only_sent_fields():
    patch = CaseUpdate(status="in-progress").to_patch()
    assert patch == {"status": "in-progress"}


def test_update_rejects_null_required_field():
    with pytest.raises(ValidationError):
        CaseUpdate(title=None)


def test_update_allows_clearing_optional_field():
    assert CaseUpdate(location=None).to_patch() == {"location": None}


def test_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        CaseUpdate(status="archived")
