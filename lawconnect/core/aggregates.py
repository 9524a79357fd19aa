"""Aggregate Math — pure computation of denormalized statistics from full collections.

Invariants:
    - All functions are PURE: input is the FULL dependent collection, never a delta
    - Empty collection -> zero count and zero average (never None, never NaN)
    - average_bid = ceil(mean(amount)), an integer
    - ratings_average = mean(rating) rounded half-up to 1 decimal (4.25 -> 4.3)
    - completed_cases counts distinct completed cases whose accepted bid is the lawyer's

Design Decisions:
    - Decimal arithmetic: float mean + round() would apply banker's rounding and
      drift on values like 4.25; Decimal keeps the half-up contract exact
    - Full re-scan over incremental counters: idempotent, so concurrent recomputes
      converge on the same value (known cost: O(n) per write, no batching)
"""

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Iterable
from uuid import UUID

from lawconnect.core.domain_types import CaseStatus

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class BidStats:
    bid_count: int
    average_bid: int


@dataclass(frozen=True)
class RatingStats:
    ratings_quantity: int
    ratings_average: float


def compute_bid_stats(amounts: Iterable[float]) -> BidStats:
    """bid_count and ceil(mean(amount)) for one case's bids."""
    values = [Decimal(str(a)) for a in amounts]
    if not values:
        return BidStats(bid_count=0, average_bid=0)
    mean = sum(values, Decimal(0)) / len(values)
    return BidStats(
        bid_count=len(values),
        average_bid=int(mean.to_integral_value(rounding=ROUND_CEILING)),
    )


def compute_rating_stats(ratings: Iterable[int]) -> RatingStats:
    """ratings_quantity and half-up mean (1 decimal) for one lawyer's reviews."""
    values = [Decimal(int(r)) for r in ratings]
    if not values:
        return RatingStats(ratings_quantity=0, ratings_average=0.0)
    mean = sum(values, Decimal(0)) / len(values)
    return RatingStats(
        ratings_quantity=len(values),
        ratings_average=float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)),
    )


def compute_completed_cases(
    cases: Iterable[tuple[str, UUID | None]], accepted_bid_ids: set[UUID],
) -> int:
    """Count (status, accepted_bid_id) pairs that are completed with one of the lawyer's bids."""
    return sum(
        1 for status, accepted_bid_id in cases
        if status == CaseStatus.COMPLETED and accepted_bid_id in accepted_bid_ids
    )
