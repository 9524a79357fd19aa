"""Lawyer Profile Schemas — nested profile sub-documents and the public profile view.

Invariants:
    - bio <= 2000 chars; experience, hourly_rate, consultation_fee >= 0
    - specializations are CaseCategory values; payment_methods are PaymentMethod values
    - time slots use 24h "HH:MM"
    - ratings_average / ratings_quantity / completed_cases / is_profile_complete are
      response-only; no request model declares them
    - is_verified is accepted on update but only an admin may set it (service check)

Design Decisions:
    - Sub-documents are pydantic models dumped to plain dicts (mode="json") before they
      reach the JSON columns, so dates become ISO strings in storage
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lawconnect.core.domain_types import (
    CaseCategory, PaymentMethod, Proficiency, Weekday,
)
from lawconnect.schemas._validators import reject_explicit_nulls

_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class Education(BaseModel):
    degree: str = Field(min_length=1, max_length=200)
    institution: str = Field(min_length=1, max_length=200)
    field_of_study: str = Field(min_length=1, max_length=200)
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = Field(None, max_length=1000)


class License(BaseModel):
    number: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    verified: bool = False


class Language(BaseModel):
    language: str = Field(min_length=1, max_length=50)
    proficiency: Proficiency = Proficiency.BASIC


class Location(BaseModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None


class TimeSlot(BaseModel):
    day: Weekday
    start_time: str = Field(pattern=_HHMM)
    end_time: str = Field(pattern=_HHMM)


class Availability(BaseModel):
    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False
    time_slots: list[TimeSlot] = Field(default_factory=list)


class Social(BaseModel):
    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    instagram: str | None = None


class _ProfileFields(BaseModel):
    bio: str | None = Field(None, max_length=2000)
    specializations: list[CaseCategory] | None = None
    experience: float | None = Field(None, ge=0)
    education: list[Education] | None = None
    license: License | None = None
    languages: list[Language] | None = None
    hourly_rate: float | None = Field(None, ge=0)
    consultation_fee: float | None = Field(None, ge=0)
    location: Location | None = None
    availability: Availability | None = None
    social: Social | None = None
    payment_methods: list[PaymentMethod] | None = None
    is_available: bool | None = None
    response_time: int | None = Field(None, ge=0)

    def to_patch(self) -> dict:
        """Explicitly-set fields as JSON-ready column values (nested defaults kept)."""
        return self.model_dump(mode="json", include=self.model_fields_set)


class ProfileCreate(_ProfileFields):
    """Profile creation. user_id defaults to the actor (admins may name a lawyer)."""
    user_id: UUID | None = None

    def to_patch(self) -> dict:
        patch = self.model_dump(
            mode="json", include=self.model_fields_set - {"user_id"},
        )
        # list-valued columns are non-nullable
        for name in ("specializations", "education", "languages", "payment_methods"):
            if patch.get(name) is None:
                patch[name] = []
        return {k: v for k, v in patch.items() if v is not None}


class ProfileUpdate(_ProfileFields):
    is_verified: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def no_null_lists(cls, data):
        return reject_explicit_nulls(
            data,
            ("specializations", "education", "languages", "payment_methods",
             "is_available", "response_time", "is_verified"),
        )


class ProfileResponse(BaseModel):
    """Public profile including derived statistics."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    bio: str | None = None
    specializations: list[CaseCategory]
    experience: float | None = None
    education: list[Education]
    license: License | None = None
    languages: list[Language]
    hourly_rate: float | None = None
    consultation_fee: float | None = None
    location: Location | None = None
    availability: Availability | None = None
    social: Social | None = None
    payment_methods: list[PaymentMethod]
    is_verified: bool
    is_available: bool
    response_time: int
    ratings_average: float
    ratings_quantity: int
    completed_cases: int
    is_profile_complete: bool
    created_at: datetime
    updated_at: datetime
