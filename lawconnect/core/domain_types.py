"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CaseId, BidId, ReviewId, ProfileId wrap UUIDs
    - Rating is an integer bounded 1–5; BidAmount and Budget are >= 0
    - All valid states encoded as Enums — no raw string matching
    - Actor is immutable: role never changes for the lifetime of a request

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to stored column strings
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CaseId = NewType("CaseId", UUID)
BidId = NewType("BidId", UUID)
ReviewId = NewType("ReviewId", UUID)
ProfileId = NewType("ProfileId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", int)             # 1–5
BidAmount = NewType("BidAmount", float)     # >= 0
Budget = NewType("Budget", float)           # >= 0

MIN_RATING = 1
MAX_RATING = 5


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account role — fixed at registration."""
    CLIENT = "client"
    LAWYER = "lawyer"
    ADMIN = "admin"


class CaseStatus(str, Enum):
    """CasePost lifecycle states — maps to DB `status` column."""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BidStatus(str, Enum):
    """Bid lifecycle states."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class CaseCategory(str, Enum):
    """Practice areas — shared by CasePost.category and LawyerProfile.specializations."""
    FAMILY = "Family Law"
    CRIMINAL = "Criminal Law"
    CORPORATE = "Corporate Law"
    INTELLECTUAL_PROPERTY = "Intellectual Property"
    REAL_ESTATE = "Real Estate"
    IMMIGRATION = "Immigration"
    EMPLOYMENT = "Employment"
    TAX = "Tax"
    BANKRUPTCY = "Bankruptcy"
    OTHER = "Other"


class TimeUnit(str, Enum):
    """Unit for a bid's estimated duration."""
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class Proficiency(str, Enum):
    BASIC = "Basic"
    CONVERSATIONAL = "Conversational"
    FLUENT = "Fluent"
    NATIVE = "Native"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"
    CRYPTO = "crypto"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class EntityKind(str, Enum):
    """Entity kinds for role-scoped read filters (core/access_scope.py)."""
    USER = "user"
    CASE_POST = "case_post"
    BID = "bid"
    REVIEW = "review"
    LAWYER_PROFILE = "lawyer_profile"


# ─── Actor ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing a request."""
    id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT

    @property
    def is_lawyer(self) -> bool:
        return self.role == Role.LAWYER
