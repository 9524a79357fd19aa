"""Review Enforcement — reviewer role, completed-engagement proof, uniqueness.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error instance on violation, None on success
    - Order: role -> engagement -> duplicate (first error wins)
    - An engagement counts only when ALL hold: case.client == reviewer,
      case.status == completed, case.accepted_bid set, accepted bid's lawyer == target lawyer

Design Decisions:
    - Engagement is a flat snapshot built by the shell (case row + its accepted bid's
      lawyer), so the rule never needs to follow references itself
    - Anonymity is a read concern: should_reveal_reviewer decides per reader
"""

from dataclasses import dataclass
from uuid import UUID

from lawconnect.core.domain_types import Actor, CaseStatus, Role
from lawconnect.core.errors import (
    DuplicateReviewError,
    ForbiddenError,
    NoCompletedEngagementError,
    OnlyClientsCanReviewError,
)


@dataclass(frozen=True)
class Engagement:
    """What the review rule needs to know about the referenced case."""
    client_id: UUID
    status: str
    accepted_bid_id: UUID | None
    accepted_lawyer_id: UUID | None


def check_reviewer_role(actor: Actor) -> OnlyClientsCanReviewError | None:
    if actor.role != Role.CLIENT:
        return OnlyClientsCanReviewError()
    return None


def is_completed_engagement(
    engagement: Engagement | None, reviewer_id: UUID, lawyer_id: UUID,
) -> bool:
    if engagement is None:
        return False
    return (
        engagement.client_id == reviewer_id
        and engagement.status == CaseStatus.COMPLETED
        and engagement.accepted_bid_id is not None
        and engagement.accepted_lawyer_id == lawyer_id
    )


def check_completed_engagement(
    actor: Actor, lawyer_id: UUID, engagement: Engagement | None,
) -> NoCompletedEngagementError | None:
    if not is_completed_engagement(engagement, actor.id, lawyer_id):
        return NoCompletedEngagementError()
    return None


def check_no_duplicate_review(existing_review: object | None) -> DuplicateReviewError | None:
    if existing_review is not None:
        return DuplicateReviewError()
    return None


def validate_review_creation(
    actor: Actor,
    lawyer_id: UUID,
    engagement: Engagement | None,
    existing_review: object | None,
) -> ForbiddenError | DuplicateReviewError | None:
    """Chain all review creation checks. Returns first error or None."""
    return (
        check_reviewer_role(actor)
        or check_completed_engagement(actor, lawyer_id, engagement)
        or check_no_duplicate_review(existing_review)
    )


def check_can_modify_review(
    actor: Actor, author_id: UUID, allow_admin: bool = False,
) -> ForbiddenError | None:
    if allow_admin and actor.role == Role.ADMIN:
        return None
    if actor.id != author_id:
        return ForbiddenError("Not authorized to modify this review")
    return None


def should_reveal_reviewer(actor: Actor, author_id: UUID, is_anonymous: bool) -> bool:
    """Anonymous reviews hide the author from everyone but the author and admins."""
    return not is_anonymous or actor.role == Role.ADMIN or actor.id == author_id
