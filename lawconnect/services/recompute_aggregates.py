"""Aggregate Recompute — refreshes derived statistics after a committed write.

Invariants:
    - Runs AFTER the triggering write committed; never part of its transaction
    - Always a full re-scan of the dependent collection (core/aggregates.py does the math)
    - Never raises: any failure is rolled back and logged as AggregateRecomputeFailed
    - A missing target (case deleted, lawyer without profile yet) is a no-op, not a failure

Design Decisions:
    - Plain async functions over a class: no state besides the session
    - Returns True on success so callers know whether the session was rolled back
      (a rollback expires loaded rows; callers refresh what they return)
    - Concurrent recomputes on the same target converge because each is idempotent;
      no locking
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.aggregates import (
    compute_bid_stats,
    compute_completed_cases,
    compute_rating_stats,
)
from lawconnect.core.domain_types import BidStatus, CaseStatus
from lawconnect.core.errors import AggregateRecomputeFailed
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.bid import Bid
from lawconnect.models.case_post import CasePost
from lawconnect.models.lawyer_profile import LawyerProfile
from lawconnect.models.review import Review

logger = logging.getLogger(__name__)


async def recompute_case_bid_stats(db: AsyncSession, case_id: UUID) -> bool:
    """bid_count / average_bid of one case from all of its bids."""
    try:
        cases = SqlEntityStore(db, CasePost)
        if await cases.find_by_id(case_id) is None:
            return True
        bids = await SqlEntityStore(db, Bid).find_many({"case_post_id": case_id})
        stats = compute_bid_stats(b.amount for b in bids)
        await cases.update(case_id, {
            "bid_count": stats.bid_count,
            "average_bid": stats.average_bid,
        })
    except Exception as e:
        await _report_failure(db, "case_bid_stats", case_id, e)
        return False
    logger.debug(
        f"Case {case_id} bid stats: count={stats.bid_count} avg={stats.average_bid}",
        extra={"aggregate": "case_bid_stats", "resource_id": str(case_id)},
    )
    return True


async def recompute_lawyer_ratings(db: AsyncSession, lawyer_id: UUID) -> bool:
    """ratings_quantity / ratings_average of one lawyer's profile from all reviews."""
    try:
        profiles = SqlEntityStore(db, LawyerProfile)
        profile = await profiles.find_one({"user_id": lawyer_id})
        if profile is None:
            return True
        reviews = await SqlEntityStore(db, Review).find_many({"lawyer_id": lawyer_id})
        stats = compute_rating_stats(r.rating for r in reviews)
        await profiles.update(profile.id, {
            "ratings_quantity": stats.ratings_quantity,
            "ratings_average": stats.ratings_average,
        })
    except Exception as e:
        await _report_failure(db, "lawyer_ratings", lawyer_id, e)
        return False
    logger.debug(
        f"Lawyer {lawyer_id} ratings: n={stats.ratings_quantity} "
        f"avg={stats.ratings_average}",
        extra={"aggregate": "lawyer_ratings", "resource_id": str(lawyer_id)},
    )
    return True


async def recompute_completed_cases(db: AsyncSession, lawyer_id: UUID) -> bool:
    """completed_cases of one lawyer's profile: completed cases won by their bids."""
    try:
        profiles = SqlEntityStore(db, LawyerProfile)
        profile = await profiles.find_one({"user_id": lawyer_id})
        if profile is None:
            return True
        accepted = await SqlEntityStore(db, Bid).find_many({
            "lawyer_id": lawyer_id, "status": BidStatus.ACCEPTED.value,
        })
        completed = await SqlEntityStore(db, CasePost).find_many({
            "status": CaseStatus.COMPLETED.value,
        })
        count = compute_completed_cases(
            ((c.status, c.accepted_bid_id) for c in completed),
            {b.id for b in accepted},
        )
        await profiles.update(profile.id, {"completed_cases": count})
    except Exception as e:
        await _report_failure(db, "completed_cases", lawyer_id, e)
        return False
    logger.debug(
        f"Lawyer {lawyer_id} completed cases: {count}",
        extra={"aggregate": "completed_cases", "resource_id": str(lawyer_id)},
    )
    return True


async def recompute_lawyer_stats(db: AsyncSession, lawyer_id: UUID) -> bool:
    """Every profile-level aggregate of one lawyer."""
    ratings_ok = await recompute_lawyer_ratings(db, lawyer_id)
    completed_ok = await recompute_completed_cases(db, lawyer_id)
    return ratings_ok and completed_ok


async def _report_failure(
    db: AsyncSession, aggregate: str, target_id: UUID, cause: Exception,
) -> None:
    try:
        await db.rollback()
    except Exception as rollback_error:
        logger.error(f"Rollback after failed recompute also failed: {rollback_error}")
    error = AggregateRecomputeFailed(aggregate, str(target_id), str(cause))
    logger.error(
        error.message,
        exc_info=cause,
        extra={
            "error_code": error.code,
            "aggregate": aggregate,
            "resource_id": str(target_id),
        },
    )
