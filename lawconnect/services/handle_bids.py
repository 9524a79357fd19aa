"""Bid Handlers — placing, reading, editing and removing bids.

Invariants:
    - Role check runs first: a non-lawyer always gets OnlyLawyersCanBid, and no row is written
    - A bid targets a case visible to the lawyer (open); otherwise NotFound
    - Reading a bid requires its case to be visible under the case scope; lawyers
      additionally see only their own bids
    - Every committed bid insert/amount change/delete is followed by the case's
      bid-statistics recompute

Design Decisions:
    - The case owner reading a bid marks it read (is_read), other readers never do
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.access_scope import scoped
from lawconnect.core.domain_types import Actor, EntityKind
from lawconnect.core.enforce_bids import (
    check_bidder_role,
    validate_bid_creation,
    validate_bid_deletion,
    validate_bid_update,
)
from lawconnect.core.errors import ResourceNotFoundError
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.bid import Bid
from lawconnect.schemas.bid import BidCreate, BidUpdate
from lawconnect.services.handle_cases import CaseHandlers
from lawconnect.services.recompute_aggregates import recompute_case_bid_stats

logger = logging.getLogger(__name__)


class BidHandlers:
    """Lawyer bids on cases."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.bids = SqlEntityStore(db, Bid)
        self.case_handlers = CaseHandlers(db)

    async def create_bid(self, actor: Actor, case_id: UUID, payload: BidCreate) -> Bid:
        error = check_bidder_role(actor)
        if error:
            raise error
        case = await self.case_handlers.get_case(actor, case_id)
        existing = await self.bids.find_one({
            "lawyer_id": actor.id, "case_post_id": case.id,
        })
        error = validate_bid_creation(actor, existing)
        if error:
            raise error

        bid = Bid(
            amount=payload.amount,
            message=payload.message,
            lawyer_id=actor.id,
            case_post_id=case.id,
            estimated_time_value=payload.estimated_time.value,
            estimated_time_unit=payload.estimated_time.unit.value,
        )
        await self.bids.insert(bid)
        logger.info(
            "Bid placed",
            extra={"actor_id": str(actor.id), "resource_id": str(bid.id)},
        )

        await recompute_case_bid_stats(self.db, case.id)
        await self.db.refresh(bid)
        return bid

    async def list_case_bids(self, actor: Actor, case_id: UUID) -> list[Bid]:
        case = await self.case_handlers.get_case(actor, case_id)
        bids = await self.bids.find_many(
            scoped(actor, EntityKind.BID, {"case_post_id": case.id}),
            order_by="created_at",
        )
        if actor.id == case.client_id:
            bids = [await self._mark_read(b) for b in bids]
        return bids

    async def list_my_bids(self, actor: Actor) -> list[Bid]:
        error = check_bidder_role(actor)
        if error:
            raise error
        return await self.bids.find_many(
            scoped(actor, EntityKind.BID), order_by="created_at", descending=True,
        )

    async def get_bid(self, actor: Actor, bid_id: UUID) -> Bid:
        rows = await self.bids.find_many(
            scoped(actor, EntityKind.BID, {"id": bid_id}), limit=1,
        )
        if not rows:
            raise ResourceNotFoundError("Bid", str(bid_id))
        bid = rows[0]
        case = await self.case_handlers.get_case(actor, bid.case_post_id)
        if actor.id == case.client_id:
            bid = await self._mark_read(bid)
        return bid

    async def update_bid(self, actor: Actor, bid_id: UUID, payload: BidUpdate) -> Bid:
        bid = await self.bids.get_or_404(bid_id)
        patch = payload.to_patch()
        error = validate_bid_update(actor, bid.lawyer_id, bid.status, patch.get("status"))
        if error:
            raise error

        old_amount = bid.amount
        bid = await self.bids.update(bid_id, patch)
        if bid.amount != old_amount:
            await recompute_case_bid_stats(self.db, bid.case_post_id)
            await self.db.refresh(bid)
        return bid

    async def delete_bid(self, actor: Actor, bid_id: UUID) -> None:
        bid = await self.bids.get_or_404(bid_id)
        error = validate_bid_deletion(actor, bid.lawyer_id, bid.status)
        if error:
            raise error

        case_id = bid.case_post_id
        await self.bids.delete(bid_id)
        logger.info(
            "Bid deleted",
            extra={"actor_id": str(actor.id), "resource_id": str(bid_id)},
        )
        await recompute_case_bid_stats(self.db, case_id)

    async def _mark_read(self, bid: Bid) -> Bid:
        if bid.is_read:
            return bid
        return await self.bids.update(bid.id, {"is_read": True})
