"""Review Schemas — review payloads and the public review view.

Invariants:
    - rating is an integer 1-5; title 1-100, comment 1-1000 chars
    - ReviewResponse.user_id is None when the reviewer is hidden from the reader
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from lawconnect.core.domain_types import MAX_RATING, MIN_RATING
from lawconnect.schemas._validators import reject_explicit_nulls, strip_required


class ReviewCreate(BaseModel):
    lawyer_id: UUID
    case_post_id: UUID
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    title: str = Field(min_length=1, max_length=100)
    comment: str = Field(min_length=1, max_length=1000)
    is_anonymous: bool = False

    @field_validator("title", "comment")
    @classmethod
    def strip_text(cls, v: str, info) -> str:
        return strip_required(v, info.field_name)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(None, ge=MIN_RATING, le=MAX_RATING)
    title: str | None = Field(None, min_length=1, max_length=100)
    comment: str | None = Field(None, min_length=1, max_length=1000)
    is_anonymous: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def no_null_required(cls, data):
        return reject_explicit_nulls(data, ("rating", "title", "comment", "is_anonymous"))

    @field_validator("title", "comment")
    @classmethod
    def strip_text(cls, v: str | None, info) -> str | None:
        return strip_required(v, info.field_name)


class ReviewResponse(BaseModel):
    id: UUID
    rating: int
    title: str
    comment: str
    user_id: UUID | None
    lawyer_id: UUID
    case_post_id: UUID
    is_anonymous: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, review, reveal_reviewer: bool = True) -> "ReviewResponse":
        return cls(
            id=review.id,
            rating=review.rating,
            title=review.title,
            comment=review.comment,
            user_id=review.user_id if reveal_reviewer else None,
            lawyer_id=review.lawyer_id,
            case_post_id=review.case_post_id,
            is_anonymous=review.is_anonymous,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )
