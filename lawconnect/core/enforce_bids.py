"""Bid Enforcement — validates bid creation, edits, withdrawal and deletion.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return error instance on violation, None on success
    - Only role=lawyer creates bids; at most one bid per (lawyer, case)
    - A bid is editable only while pending; the only status a lawyer sets is withdrawn
    - An accepted bid is never deleted (the case's accepted_bid_id would dangle)

Design Decisions:
    - validate_bid_creation checks role BEFORE duplicate, so a non-lawyer always
      sees OnlyLawyersCanBid regardless of existing rows
"""

from uuid import UUID

from lawconnect.core.domain_types import Actor, BidStatus, Role
from lawconnect.core.errors import (
    DuplicateBidError,
    ForbiddenError,
    OnlyLawyersCanBidError,
    ValidationFailedError,
)


def check_bidder_role(actor: Actor) -> OnlyLawyersCanBidError | None:
    if actor.role != Role.LAWYER:
        return OnlyLawyersCanBidError()
    return None


def check_no_duplicate_bid(existing_bid: object | None) -> DuplicateBidError | None:
    if existing_bid is not None:
        return DuplicateBidError()
    return None


def validate_bid_creation(
    actor: Actor, existing_bid: object | None,
) -> OnlyLawyersCanBidError | DuplicateBidError | None:
    """Chain creation checks. Returns first error or None."""
    return check_bidder_role(actor) or check_no_duplicate_bid(existing_bid)


def check_can_modify_bid(
    actor: Actor, bid_lawyer_id: UUID, allow_admin: bool = False,
) -> ForbiddenError | None:
    """The bidding lawyer (and, for deletion, an admin) may touch a bid."""
    if allow_admin and actor.role == Role.ADMIN:
        return None
    if actor.id != bid_lawyer_id:
        return ForbiddenError("Not authorized to modify this bid")
    return None


def check_bid_editable(bid_status: str) -> ValidationFailedError | None:
    if bid_status != BidStatus.PENDING:
        return ValidationFailedError(
            f"Only pending bids can be changed (bid is {bid_status})", "status",
        )
    return None


def check_bid_status_change(new_status: str | None) -> ValidationFailedError | None:
    """Lawyers may only withdraw; accept/reject belong to the case owner."""
    if new_status is not None and new_status != BidStatus.WITHDRAWN:
        return ValidationFailedError(
            "A bid can only be withdrawn by its lawyer", "status",
        )
    return None


def validate_bid_update(
    actor: Actor, bid_lawyer_id: UUID, bid_status: str, new_status: str | None,
) -> ForbiddenError | ValidationFailedError | None:
    return (
        check_can_modify_bid(actor, bid_lawyer_id)
        or check_bid_editable(bid_status)
        or check_bid_status_change(new_status)
    )


def check_bid_deletable(bid_status: str) -> ValidationFailedError | None:
    if bid_status == BidStatus.ACCEPTED:
        return ValidationFailedError("An accepted bid cannot be deleted", "status")
    return None


def validate_bid_deletion(
    actor: Actor, bid_lawyer_id: UUID, bid_status: str,
) -> ForbiddenError | ValidationFailedError | None:
    return (
        check_can_modify_bid(actor, bid_lawyer_id, allow_admin=True)
        or check_bid_deletable(bid_status)
    )
