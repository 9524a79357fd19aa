"""Bid ORM — a lawyer's offer on a case.

Invariants:
    - At most one bid per (lawyer_id, case_post_id) (unique constraint)
    - lawyer_id always references a role=lawyer user (checked before insert)
    - status transitions: pending -> accepted/rejected (case owner) or withdrawn (lawyer)

Design Decisions:
    - Estimated duration stored as two flat columns (value, unit) rather than JSON:
      both are filterable and validated independently
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Float, Integer, Boolean, DateTime, ForeignKey, Index,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from lawconnect.db.base import Base


class Bid(Base):
    """Bid entity — offer from a lawyer on a case."""
    __tablename__ = "bids"
    __table_args__ = (
        UniqueConstraint("lawyer_id", "case_post_id", name="uq_bids_lawyer_case"),
        Index("ix_bids_case_status", "case_post_id", "status"),
        Index("ix_bids_lawyer_status", "lawyer_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    lawyer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    case_post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("cases.id", ondelete="CASCADE"),
        nullable=False,
    )
    estimated_time_value: Mapped[int] = mapped_column(Integer, nullable=False)
    estimated_time_unit: Mapped[str] = mapped_column(String(10), nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
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

    case_post: Mapped["CasePost"] = relationship(
        "CasePost", back_populates="bids",
    )
