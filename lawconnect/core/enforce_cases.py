"""Case Post Enforcement — validates who may create/modify a case and how it moves.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error instance on violation, None on success
    - Existence is checked by the caller BEFORE any check here (NotFound precedes Forbidden)
    - A case owner is always a client; only the owner or an admin mutates a case

Design Decisions:
    - Return errors (not raise): checks chain with `or`, first error wins,
      and the service layer decides when to raise
    - Status rules limited to what the marketplace needs: a case cannot be
      completed without an accepted bid, and only open cases accept bids
    - Acceptance is once per case: a case reopened after accepting a bid keeps
      that bid as its single accepted bid and refuses a second acceptance
"""

from uuid import UUID

from lawconnect.core.domain_types import Actor, BidStatus, CaseStatus, Role
from lawconnect.core.errors import ForbiddenError, ValidationFailedError


def check_can_create_case(actor: Actor) -> ForbiddenError | None:
    """Only clients post cases."""
    if actor.role != Role.CLIENT:
        return ForbiddenError("Only clients can create cases", "ONLY_CLIENTS_CAN_POST")
    return None


def check_can_modify_case(actor: Actor, owner_id: UUID) -> ForbiddenError | None:
    """Owner or admin may update/delete."""
    if actor.role != Role.ADMIN and actor.id != owner_id:
        return ForbiddenError("Not authorized to modify this case")
    return None


def check_status_change(
    new_status: str | None, accepted_bid_id: UUID | None,
) -> ValidationFailedError | None:
    """A case reaches `completed` only through an accepted bid."""
    if new_status == CaseStatus.COMPLETED and accepted_bid_id is None:
        return ValidationFailedError(
            "A case can only be completed once a bid has been accepted",
            "status",
        )
    return None


def validate_case_update(
    actor: Actor, owner_id: UUID,
    new_status: str | None, accepted_bid_id: UUID | None,
) -> ForbiddenError | ValidationFailedError | None:
    """Chain permission then status checks for PATCH /cases/{id}."""
    return (
        check_can_modify_case(actor, owner_id)
        or check_status_change(new_status, accepted_bid_id)
    )


def check_bid_acceptable(
    case_status: str, bid_status: str, accepted_bid_id: UUID | None = None,
) -> ValidationFailedError | None:
    """Only a pending bid on an open case without an accepted bid can be accepted."""
    if accepted_bid_id is not None:
        return ValidationFailedError(
            "This case has already accepted a bid", "bid_id",
        )
    if case_status != CaseStatus.OPEN:
        return ValidationFailedError(
            f"Only open cases can accept a bid (case is {case_status})", "status",
        )
    if bid_status != BidStatus.PENDING:
        return ValidationFailedError(
            f"Only pending bids can be accepted (bid is {bid_status})", "bid_id",
        )
    return None


def validate_bid_acceptance(
    actor: Actor, owner_id: UUID, case_status: str, bid_status: str,
    accepted_bid_id: UUID | None = None,
) -> ForbiddenError | ValidationFailedError | None:
    return (
        check_can_modify_case(actor, owner_id)
        or check_bid_acceptable(case_status, bid_status, accepted_bid_id)
    )
