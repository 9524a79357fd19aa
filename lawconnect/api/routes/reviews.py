"""Review Routes — create, read, edit and delete reviews."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_actor
from lawconnect.core.domain_types import Actor
from lawconnect.infrastructure.database import get_db
from lawconnect.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from lawconnect.services.handle_reviews import ReviewHandlers

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


@router.post(
    "", response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    body: ReviewCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Review a lawyer for a completed case they won."""
    review = await ReviewHandlers(db).create_review(actor, body)
    return ReviewResponse.from_model(review)


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    review, reveal = await ReviewHandlers(db).get_review(actor, review_id)
    return ReviewResponse.from_model(review, reveal_reviewer=reveal)


@router.patch("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: UUID,
    body: ReviewUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    review = await ReviewHandlers(db).update_review(actor, review_id, body)
    return ReviewResponse.from_model(review)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    await ReviewHandlers(db).delete_review(actor, review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
