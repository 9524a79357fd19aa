"""Case Routes — case CRUD, bid acceptance and the per-case bid collection.

Invariants:
    - Every route requires an authenticated actor
    - Reads are role-scoped in the service; out-of-scope rows surface as 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_actor
from lawconnect.core.domain_types import Actor, CaseCategory, CaseStatus
from lawconnect.infrastructure.database import get_db
from lawconnect.schemas.bid import BidCreate, BidResponse
from lawconnect.schemas.case_post import (
    AcceptBidRequest, CaseCreate, CaseResponse, CaseUpdate,
)
from lawconnect.services.handle_bids import BidHandlers
from lawconnect.services.handle_cases import CaseHandlers

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])


@router.get("", response_model=list[CaseResponse])
async def list_cases(
    status_filter: CaseStatus | None = Query(None, alias="status"),
    category: CaseCategory | None = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Cases visible to the actor, newest first."""
    cases = await CaseHandlers(db).list_cases(
        actor,
        status=status_filter.value if status_filter else None,
        category=category.value if category else None,
        limit=limit, offset=offset,
    )
    return [CaseResponse.model_validate(c) for c in cases]


@router.post(
    "", response_model=CaseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_case(
    body: CaseCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    case = await CaseHandlers(db).create_case(actor, body)
    return CaseResponse.model_validate(case)


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    case = await CaseHandlers(db).get_case(actor, case_id)
    return CaseResponse.model_validate(case)


@router.patch("/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: UUID,
    body: CaseUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    case = await CaseHandlers(db).update_case(actor, case_id, body)
    return CaseResponse.model_validate(case)


@router.delete("/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    await CaseHandlers(db).delete_case(actor, case_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{case_id}/accept-bid", response_model=CaseResponse)
async def accept_bid(
    case_id: UUID,
    body: AcceptBidRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    case = await CaseHandlers(db).accept_bid(actor, case_id, body.bid_id)
    return CaseResponse.model_validate(case)


@router.get("/{case_id}/bids", response_model=list[BidResponse])
async def list_case_bids(
    case_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    bids = await BidHandlers(db).list_case_bids(actor, case_id)
    return [BidResponse.from_model(b) for b in bids]


@router.post(
    "/{case_id}/bids", response_model=BidResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_bid(
    case_id: UUID,
    body: BidCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    bid = await BidHandlers(db).create_bid(actor, case_id, body)
    return BidResponse.from_model(bid)
