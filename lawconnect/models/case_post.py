"""CasePost ORM — a legal case posted by a client for lawyers to bid on.

Invariants:
    - Always owned by a client (client_id FK)
    - status transitions: open -> in-progress -> completed, or -> cancelled
    - average_bid and bid_count are derived: written only by the recompute engine
    - accepted_bid_id is set only by accept-bid and points at one of this case's bids

Design Decisions:
    - accepted_bid_id is a plain UUID column, not a FK: bids already reference
      cases, a second FK in the other direction would make the pair circular
    - bids/reviews cascade on delete: removing a case removes its dependents
    - bids/reviews load lazily (default); only case deletion walks them, and it
      asks for them with selectinload
    - (client_id, status) and (status, category) indexes back the scoped list queries
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Float, Integer, Boolean, DateTime, ForeignKey, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from lawconnect.db.base import Base


class CasePost(Base):
    """Case entity — client's request for legal help."""
    __tablename__ = "cases"
    __table_args__ = (
        Index("ix_cases_client_status", "client_id", "status"),
        Index("ix_cases_status_category", "status", "category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="open",
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    accepted_bid_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_remote: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Derived (recompute engine only)
    average_bid: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bid_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

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

    # Relationships
    bids: Mapped[list["Bid"]] = relationship(
        "Bid", back_populates="case_post",
        cascade="all, delete-orphan",
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="case_post",
        cascade="all, delete-orphan",
    )
