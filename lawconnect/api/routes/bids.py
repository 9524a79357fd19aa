"""Bid Routes — single-bid reads/edits and the lawyer's own bids."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_actor
from lawconnect.core.domain_types import Actor
from lawconnect.infrastructure.database import get_db
from lawconnect.schemas.bid import BidResponse, BidUpdate
from lawconnect.services.handle_bids import BidHandlers

router = APIRouter(prefix="/api/v1/bids", tags=["bids"])


# Declared before /{bid_id} so "mine" is not parsed as an id
@router.get("/mine", response_model=list[BidResponse])
async def list_my_bids(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    bids = await BidHandlers(db).list_my_bids(actor)
    return [BidResponse.from_model(b) for b in bids]


@router.get("/{bid_id}", response_model=BidResponse)
async def get_bid(
    bid_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    bid = await BidHandlers(db).get_bid(actor, bid_id)
    return BidResponse.from_model(bid)


@router.patch("/{bid_id}", response_model=BidResponse)
async def update_bid(
    bid_id: UUID,
    body: BidUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    bid = await BidHandlers(db).update_bid(actor, bid_id, body)
    return BidResponse.from_model(bid)


@router.delete("/{bid_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bid(
    bid_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    await BidHandlers(db).delete_bid(actor, bid_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
