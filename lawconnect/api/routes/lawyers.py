"""Lawyer Routes — directory, profiles and per-lawyer reviews.

Invariants:
    - Profile reads are open to any authenticated actor; writes are self or admin
    - Reviews listed here hide anonymous authors (services/handle_reviews.py)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_actor
from lawconnect.core.domain_types import MAX_RATING, Actor, CaseCategory
from lawconnect.infrastructure.database import get_db
from lawconnect.schemas.lawyer_profile import (
    ProfileCreate, ProfileResponse, ProfileUpdate,
)
from lawconnect.schemas.review import ReviewResponse
from lawconnect.services.handle_profiles import ProfileHandlers
from lawconnect.services.handle_reviews import ReviewHandlers

router = APIRouter(prefix="/api/v1/lawyers", tags=["lawyers"])


@router.get("", response_model=list[ProfileResponse])
async def list_lawyers(
    specialization: CaseCategory | None = None,
    available: bool | None = None,
    verified: bool | None = None,
    min_rating: float | None = Query(None, ge=0, le=MAX_RATING),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Lawyer directory, best rated first."""
    profiles = await ProfileHandlers(db).list_profiles(
        specialization=specialization.value if specialization else None,
        available=available,
        verified=verified,
        min_rating=min_rating,
        limit=limit, offset=offset,
    )
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.post(
    "/profile", response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_profile(
    body: ProfileCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileHandlers(db).create_profile(actor, body)
    return ProfileResponse.model_validate(profile)


@router.get("/{user_id}/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileHandlers(db).get_profile(user_id)
    return ProfileResponse.model_validate(profile)


@router.patch("/{user_id}/profile", response_model=ProfileResponse)
async def update_profile(
    user_id: UUID,
    body: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileHandlers(db).update_profile(actor, user_id, body)
    return ProfileResponse.model_validate(profile)


@router.get("/{user_id}/reviews", response_model=list[ReviewResponse])
async def list_lawyer_reviews(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    reviews = await ReviewHandlers(db).list_lawyer_reviews(actor, user_id)
    return [
        ReviewResponse.from_model(r, reveal_reviewer=reveal)
        for r, reveal in reviews
    ]
