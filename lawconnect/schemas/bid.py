"""Bid Schemas — bid payloads and the public bid view.

Invariants:
    - amount >= 0; message 1-1000 chars; estimated_time.value > 0
    - status in BidUpdate is parsed as a BidStatus; the rule layer only lets
      a lawyer set "withdrawn" (ValidationFailed otherwise)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from lawconnect.core.domain_types import BidStatus, TimeUnit
from lawconnect.schemas._validators import reject_explicit_nulls, strip_required


class EstimatedTime(BaseModel):
    value: int = Field(gt=0)
    unit: TimeUnit


class BidCreate(BaseModel):
    amount: float = Field(ge=0)
    message: str = Field(min_length=1, max_length=1000)
    estimated_time: EstimatedTime

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        return strip_required(v, "message")


class BidUpdate(BaseModel):
    amount: float | None = Field(None, ge=0)
    message: str | None = Field(None, min_length=1, max_length=1000)
    estimated_time: EstimatedTime | None = None
    status: BidStatus | None = None

    @model_validator(mode="before")
    @classmethod
    def no_null_required(cls, data):
        return reject_explicit_nulls(
            data, ("amount", "message", "estimated_time", "status"),
        )

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str | None) -> str | None:
        return strip_required(v, "message")

    def to_patch(self) -> dict:
        """Flatten estimated_time into the two stored columns."""
        patch = self.model_dump(exclude_unset=True, exclude={"estimated_time"})
        if self.estimated_time is not None:
            patch["estimated_time_value"] = self.estimated_time.value
            patch["estimated_time_unit"] = self.estimated_time.unit.value
        if self.status is not None:
            patch["status"] = self.status.value
        return patch


class BidResponse(BaseModel):
    id: UUID
    amount: float
    message: str
    status: BidStatus
    lawyer_id: UUID
    case_post_id: UUID
    estimated_time: EstimatedTime
    is_read: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, bid) -> "BidResponse":
        return cls(
            id=bid.id,
            amount=bid.amount,
            message=bid.message,
            status=bid.status,
            lawyer_id=bid.lawyer_id,
            case_post_id=bid.case_post_id,
            estimated_time=EstimatedTime(
                value=bid.estimated_time_value, unit=bid.estimated_time_unit,
            ),
            is_read=bid.is_read,
            created_at=bid.created_at,
            updated_at=bid.updated_at,
        )
