"""Case Post Schemas — create/update payloads and the public case view.

Invariants:
    - title 1-100, description 1-2000 chars (stripped); budget >= 0
    - category and status constrained to their enums
    - average_bid / bid_count / accepted_bid_id / client_id appear ONLY in CaseResponse;
      request models do not declare them, so they are dropped if sent
    - CaseUpdate may omit any field but may not null a required one

Design Decisions:
    - Status transitions (completed needs an accepted bid) are a rule, not a schema
      concern: they need the stored row
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lawconnect.core.domain_types import CaseCategory, CaseStatus
from lawconnect.schemas._validators import reject_explicit_nulls, strip_required


class CaseCreate(BaseModel):
    """Case creation — validates text lengths, category and budget."""
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    category: CaseCategory
    budget: float = Field(ge=0)
    deadline: datetime | None = None
    location: str | None = Field(None, max_length=200)
    is_remote: bool = False

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str, info) -> str:
        return strip_required(v, info.field_name)

    def to_columns(self) -> dict:
        data = self.model_dump()
        data["category"] = self.category.value
        return data


class CaseUpdate(BaseModel):
    """Partial case update — owner or admin only (checked in the service)."""
    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=2000)
    category: CaseCategory | None = None
    budget: float | None = Field(None, ge=0)
    status: CaseStatus | None = None
    deadline: datetime | None = None
    location: str | None = Field(None, max_length=200)
    is_remote: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def no_null_required(cls, data):
        return reject_explicit_nulls(
            data, ("title", "description", "category", "budget", "status", "is_remote"),
        )

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str | None, info) -> str | None:
        return strip_required(v, info.field_name)

    def to_patch(self) -> dict:
        """Explicitly-set fields, enums as their stored strings."""
        return {
            k: (v.value if isinstance(v, Enum) else v)
            for k, v in self.model_dump(exclude_unset=True).items()
        }


class AcceptBidRequest(BaseModel):
    bid_id: UUID


class CaseResponse(BaseModel):
    """Case view including derived bid statistics."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: CaseCategory
    budget: float
    status: CaseStatus
    client_id: UUID
    accepted_bid_id: UUID | None = None
    deadline: datetime | None = None
    location: str | None = None
    is_remote: bool
    average_bid: int
    bid_count: int
    created_at: datetime
    updated_at: datetime
