"""Review Handlers — review creation behind the completed-engagement proof.

Invariants:
    - Creation order: role -> completed engagement -> duplicate (core/enforce_reviews.py)
    - Every committed insert/rating change/delete is followed by the lawyer's
      rating recompute
    - Anonymous reviews hide user_id from every reader except the author and admins
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.domain_types import Actor
from lawconnect.core.enforce_reviews import (
    Engagement,
    check_can_modify_review,
    should_reveal_reviewer,
    validate_review_creation,
)
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.bid import Bid
from lawconnect.models.case_post import CasePost
from lawconnect.models.review import Review
from lawconnect.schemas.review import ReviewCreate, ReviewUpdate
from lawconnect.services.recompute_aggregates import recompute_lawyer_ratings

logger = logging.getLogger(__name__)


class ReviewHandlers:
    """Client reviews of lawyers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.reviews = SqlEntityStore(db, Review)
        self.cases = SqlEntityStore(db, CasePost)
        self.bids = SqlEntityStore(db, Bid)

    async def create_review(self, actor: Actor, payload: ReviewCreate) -> Review:
        engagement = await self._engagement(payload.case_post_id)
        existing = await self.reviews.find_one({
            "user_id": actor.id,
            "lawyer_id": payload.lawyer_id,
            "case_post_id": payload.case_post_id,
        })
        error = validate_review_creation(actor, payload.lawyer_id, engagement, existing)
        if error:
            raise error

        review = Review(
            rating=payload.rating,
            title=payload.title,
            comment=payload.comment,
            user_id=actor.id,
            lawyer_id=payload.lawyer_id,
            case_post_id=payload.case_post_id,
            is_anonymous=payload.is_anonymous,
        )
        await self.reviews.insert(review)
        logger.info(
            "Review created",
            extra={"actor_id": str(actor.id), "resource_id": str(review.id)},
        )

        await recompute_lawyer_ratings(self.db, payload.lawyer_id)
        await self.db.refresh(review)
        return review

    async def get_review(self, actor: Actor, review_id: UUID) -> tuple[Review, bool]:
        """Returns the review and whether the reader may see its author."""
        review = await self.reviews.get_or_404(review_id)
        return review, should_reveal_reviewer(actor, review.user_id, review.is_anonymous)

    async def list_lawyer_reviews(
        self, actor: Actor, lawyer_id: UUID,
    ) -> list[tuple[Review, bool]]:
        reviews = await self.reviews.find_many(
            {"lawyer_id": lawyer_id}, order_by="created_at", descending=True,
        )
        return [
            (r, should_reveal_reviewer(actor, r.user_id, r.is_anonymous))
            for r in reviews
        ]

    async def update_review(
        self, actor: Actor, review_id: UUID, payload: ReviewUpdate,
    ) -> Review:
        review = await self.reviews.get_or_404(review_id)
        error = check_can_modify_review(actor, review.user_id)
        if error:
            raise error

        old_rating = review.rating
        review = await self.reviews.update(review_id, payload.model_dump(exclude_unset=True))
        if review.rating != old_rating:
            await recompute_lawyer_ratings(self.db, review.lawyer_id)
            await self.db.refresh(review)
        return review

    async def delete_review(self, actor: Actor, review_id: UUID) -> None:
        review = await self.reviews.get_or_404(review_id)
        error = check_can_modify_review(actor, review.user_id, allow_admin=True)
        if error:
            raise error

        lawyer_id = review.lawyer_id
        await self.reviews.delete(review_id)
        logger.info(
            "Review deleted",
            extra={"actor_id": str(actor.id), "resource_id": str(review_id)},
        )
        await recompute_lawyer_ratings(self.db, lawyer_id)

    async def _engagement(self, case_id: UUID) -> Engagement | None:
        """Snapshot of the referenced case and the lawyer of its accepted bid."""
        case = await self.cases.find_by_id(case_id)
        if case is None:
            return None
        accepted_lawyer_id = None
        if case.accepted_bid_id is not None:
            accepted = await self.bids.find_by_id(case.accepted_bid_id)
            if accepted is not None:
                accepted_lawyer_id = accepted.lawyer_id
        return Engagement(
            client_id=case.client_id,
            status=case.status,
            accepted_bid_id=case.accepted_bid_id,
            accepted_lawyer_id=accepted_lawyer_id,
        )
