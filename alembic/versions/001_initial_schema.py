"""Initial schema — users, cases, bids, reviews, lawyer_profiles.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(10), nullable=False, server_default="client"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "cases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("budget", sa.Float, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("client_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("accepted_bid_id", UUID(as_uuid=True), nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("is_remote", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("average_bid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("bid_count", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_cases_client_status", "cases", ["client_id", "status"])
    op.create_index("ix_cases_status_category", "cases", ["status", "category"])

    op.create_table(
        "bids",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("lawyer_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "case_post_id", UUID(as_uuid=True),
            sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("estimated_time_value", sa.Integer, nullable=False),
        sa.Column("estimated_time_unit", sa.String(10), nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint("lawyer_id", "case_post_id", name="uq_bids_lawyer_case"),
    )
    op.create_index("ix_bids_case_status", "bids", ["case_post_id", "status"])
    op.create_index("ix_bids_lawyer_status", "bids", ["lawyer_id", "status"])

    op.create_table(
        "reviews",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("comment", sa.Text, nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("lawyer_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "case_post_id", UUID(as_uuid=True),
            sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("is_anonymous", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_id", "lawyer_id", "case_post_id", name="uq_reviews_user_lawyer_case",
        ),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_lawyer", "reviews", ["lawyer_id"])

    op.create_table(
        "lawyer_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("specializations", sa.JSON, nullable=False),
        sa.Column("experience", sa.Float, nullable=True),
        sa.Column("education", sa.JSON, nullable=False),
        sa.Column("license", sa.JSON, nullable=True),
        sa.Column("languages", sa.JSON, nullable=False),
        sa.Column("hourly_rate", sa.Float, nullable=True),
        sa.Column("consultation_fee", sa.Float, nullable=True, server_default="0"),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column("availability", sa.JSON, nullable=True),
        sa.Column("social", sa.JSON, nullable=True),
        sa.Column("payment_methods", sa.JSON, nullable=False),
        sa.Column("is_verified", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("response_time", sa.Integer, nullable=False, server_default="24"),
        sa.Column("ratings_average", sa.Float, nullable=False, server_default="0"),
        sa.Column("ratings_quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed_cases", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_profile_complete", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )
    op.create_index("ix_lawyer_profiles_user_id", "lawyer_profiles", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_table("lawyer_profiles")
    op.drop_table("reviews")
    op.drop_table("bids")
    op.drop_table("cases")
    op.drop_table("users")
