"""Lawyer Profile Schemas — nested sub-documents and response-only fields."""

import pytest
from pydantic import ValidationError

from lawconnect.schemas.lawyer_profile import ProfileCreate, ProfileUpdate


def test_minimal_profile_fills_list_columns():
    patch = ProfileCreate().to_patch()
    assert patch["specializations"] == []
    assert patch["education"] == []
    assert patch["languages"] == []
    assert patch["payment_methods"] == []


def test_education_dates_stored_as_iso_strings():
    profile = ProfileCreate(education=[{
        "degree": "JD",
        "institution": "State University",
        "field_of_study": "Law",
        "from_date": "2010-09-01",
    }])
    stored = profile.to_patch()["education"][0]
    assert stored["from_date"] == "2010-09-01"
    assert stored["current"] is False


def test_language_proficiency_defaults_to_basic():
    profile = ProfileCreate(languages=[{"language": "Spanish"}])
    assert profile.to_patch()["languages"] == [
        {"language": "Spanish", "proficiency": "Basic"},
    ]


@pytest.mark.parametrize("payload", [
    {"specializations": ["Space Law"]},
    {"experience": -1},
    {"hourly_rate": -10},
    {"bio": "x" * 2001},
    {"payment_methods": ["cash"]},
    {"availability": {"time_slots": [{"day": "monday", "start_time": "9am", "end_time": "17:00"}]}},
    {"languages": [{"language": "French", "proficiency": "Expert"}]},
])
def test_invalid_profile_rejected(payload):
    with pytest.raises(ValidationError):
        ProfileCreate(**payload)


def test_derived_fields_not_accepted():
    patch = ProfileUpdate(ratings_average=5, completed_cases=99).to_patch()
    assert patch == {}


def test_update_clearing_specializations_is_kept():
    assert ProfileUpdate(specializations=[]).to_patch() == {"specializations": []}


def test_update_rejects_null_list():
    with pytest.raises(ValidationError):
        ProfileUpdate(specializations=None)
