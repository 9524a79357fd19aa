"""Case Handlers — case CRUD, scoped reads and bid acceptance.

Invariants:
    - Reads go through access_scope: out-of-scope cases are NotFound, never Forbidden
    - Writes check existence (unscoped) BEFORE permission, then the pure rule
    - Status changes touching "completed" refresh the accepted lawyer's completed_cases
    - Deleting a case removes its bids and reviews (ORM cascade), then refreshes the
      statistics of every lawyer those rows counted for
    - Recompute runs after the write committed and never fails the request

Design Decisions:
    - accept_bid issues one store update per row (bid, case, each rejected bid);
      each is atomic on its own, the accepted bid is written first so a partial
      failure never leaves a case pointing at a non-accepted bid
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lawconnect.core.access_scope import excluded_by_scope, scoped
from lawconnect.core.domain_types import Actor, BidStatus, CaseStatus, EntityKind
from lawconnect.core.enforce_cases import (
    check_can_create_case,
    check_can_modify_case,
    validate_bid_acceptance,
    validate_case_update,
)
from lawconnect.core.errors import ResourceNotFoundError
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.bid import Bid
from lawconnect.models.case_post import CasePost
from lawconnect.schemas.case_post import CaseCreate, CaseUpdate
from lawconnect.services.recompute_aggregates import (
    recompute_case_bid_stats,
    recompute_completed_cases,
    recompute_lawyer_stats,
)

logger = logging.getLogger(__name__)


class CaseHandlers:
    """Client case postings."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.cases = SqlEntityStore(db, CasePost)
        self.bids = SqlEntityStore(db, Bid)

    async def create_case(self, actor: Actor, payload: CaseCreate) -> CasePost:
        error = check_can_create_case(actor)
        if error:
            raise error
        case = CasePost(**payload.to_columns(), client_id=actor.id)
        await self.cases.insert(case)
        logger.info(
            "Case created",
            extra={"actor_id": str(actor.id), "resource_id": str(case.id)},
        )
        return case

    async def list_cases(
        self,
        actor: Actor,
        status: str | None = None,
        category: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[CasePost]:
        filters = {}
        if status is not None:
            filters["status"] = status
        if category is not None:
            filters["category"] = category
        if excluded_by_scope(actor, EntityKind.CASE_POST, filters):
            return []
        return await self.cases.find_many(
            scoped(actor, EntityKind.CASE_POST, filters),
            order_by="created_at", descending=True,
            limit=limit, offset=offset,
        )

    async def get_case(self, actor: Actor, case_id: UUID) -> CasePost:
        """Single read under the actor's scope."""
        rows = await self.cases.find_many(
            scoped(actor, EntityKind.CASE_POST, {"id": case_id}), limit=1,
        )
        if not rows:
            raise ResourceNotFoundError("CasePost", str(case_id))
        return rows[0]

    async def update_case(
        self, actor: Actor, case_id: UUID, payload: CaseUpdate,
    ) -> CasePost:
        case = await self.cases.get_or_404(case_id)
        patch = payload.to_patch()
        error = validate_case_update(
            actor, case.client_id, patch.get("status"), case.accepted_bid_id,
        )
        if error:
            raise error

        old_status = case.status
        case = await self.cases.update(case_id, patch)
        new_status = case.status
        completion_changed = old_status != new_status and CaseStatus.COMPLETED in (
            old_status, new_status,
        )
        if completion_changed and case.accepted_bid_id is not None:
            accepted = await self.bids.find_by_id(case.accepted_bid_id)
            if accepted is not None:
                await recompute_completed_cases(self.db, accepted.lawyer_id)
                await self.db.refresh(case)
        return case

    async def delete_case(self, actor: Actor, case_id: UUID) -> None:
        case = await self.cases.get_or_404(
            case_id,
            options=(selectinload(CasePost.bids), selectinload(CasePost.reviews)),
        )
        error = check_can_modify_case(actor, case.client_id)
        if error:
            raise error

        affected = {r.lawyer_id for r in case.reviews}
        affected.update(b.lawyer_id for b in case.bids if b.id == case.accepted_bid_id)
        await self.cases.delete(case_id)
        logger.info(
            "Case deleted",
            extra={"actor_id": str(actor.id), "resource_id": str(case_id)},
        )
        for lawyer_id in affected:
            await recompute_lawyer_stats(self.db, lawyer_id)

    async def accept_bid(self, actor: Actor, case_id: UUID, bid_id: UUID) -> CasePost:
        """Accept one pending bid; the other pending bids on the case are rejected."""
        case = await self.cases.get_or_404(case_id)
        bid = await self.bids.find_by_id(bid_id)
        if bid is None or bid.case_post_id != case.id:
            raise ResourceNotFoundError("Bid", str(bid_id))
        error = validate_bid_acceptance(
            actor, case.client_id, case.status, bid.status, case.accepted_bid_id,
        )
        if error:
            raise error

        await self.bids.update(bid.id, {"status": BidStatus.ACCEPTED.value})
        case = await self.cases.update(case.id, {
            "accepted_bid_id": bid.id,
            "status": CaseStatus.IN_PROGRESS.value,
        })
        others = await self.bids.find_many({
            "case_post_id": case.id, "status": BidStatus.PENDING.value,
        })
        for other in others:
            await self.bids.update(other.id, {"status": BidStatus.REJECTED.value})
        logger.info(
            f"Bid {bid.id} accepted, {len(others)} rejected",
            extra={"actor_id": str(actor.id), "resource_id": str(case.id)},
        )

        await recompute_case_bid_stats(self.db, case.id)
        await self.db.refresh(case)
        return case
