"""LawyerProfile ORM — public profile of a role=lawyer user.

Invariants:
    - One profile per user (user_id unique)
    - ratings_average, ratings_quantity, completed_cases are derived: written only
      by the recompute engine
    - is_profile_complete is recomputed on every profile write

Design Decisions:
    - JSON for nested sub-documents (education, license, languages, location,
      availability, social, payment_methods): they are read and written whole,
      never queried field by field
    - specializations is JSON too; the specialization filter matches in Python
      after the equality-filtered store read
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Text, Float, Integer, Boolean, DateTime, JSON, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from lawconnect.db.base import Base


class LawyerProfile(Base):
    """Lawyer profile entity."""
    __tablename__ = "lawyer_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
        unique=True, index=True,
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    specializations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[float | None] = mapped_column(Float, nullable=True)
    education: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    license: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    languages: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    hourly_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    consultation_fee: Mapped[float | None] = mapped_column(
        Float, nullable=True, default=0.0,
    )
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    availability: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    social: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    payment_methods: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    response_time: Mapped[int] = mapped_column(Integer, nullable=False, default=24)

    # Derived (recompute engine only)
    ratings_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    ratings_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_cases: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_profile_complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
