"""Bid Schemas — amount, message and estimated time."""

import pytest
from pydantic import ValidationError

from lawconnect.schemas.bid import BidCreate, BidUpdate

VALID = {
    "amount": 250,
    "message": "I can take this on next week.",
    "estimated_time": {"value": 2, "unit": "weeks"},
}


def test_valid_bid():
    bid = BidCreate(**VALID)
    assert bid.estimated_time.unit.value == "weeks"


@pytest.mark.parametrize("override", [
    {"amount": -5},
    {"message": ""},
    {"message": "x" * 1001},
    {"estimated_time": {"value": 0, "unit": "days"}},
    {"estimated_time": {"value": 3, "unit": "years"}},
])
def test_invalid_bid_rejected(override):
    with pytest.raises(ValidationError):
        BidCreate(**{**VALID, **override})


def test_update_flattens_estimated_time():
    patch = BidUpdate(estimated_time={"value": 5, "unit": "days"}).to_patch()
    assert patch == {"estimated_time_value": 5, "estimated_time_unit": "days"}


def test_update_status_is_plain_string():
    assert BidUpdate(status="withdrawn").to_patch() == {"status": "withdrawn"}


def test_update_rejects_null_amount():
    with pytest.raises(ValidationError):
        BidUpdate(amount=None)
