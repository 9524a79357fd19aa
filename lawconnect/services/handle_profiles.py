"""Profile Handlers — lawyer profile create/update/read and the lawyer directory.

Invariants:
    - The profile's user must be role=lawyer on create AND on update
    - is_profile_complete recomputed from the merged row on every write
    - Derived statistics are refreshed after every profile write (a new profile
      immediately reflects reviews and completed cases that already exist)

Design Decisions:
    - Directory filters: is_available/is_verified go to the store as equality filters;
      specialization (JSON list membership) and min_rating are applied in Python
      on that result, then sorted by rating, then quantity
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.domain_types import Actor
from lawconnect.core.enforce_profiles import (
    compute_profile_complete,
    validate_profile_creation,
    validate_profile_update,
)
from lawconnect.core.errors import ResourceNotFoundError
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.models.lawyer_profile import LawyerProfile
from lawconnect.models.user import User
from lawconnect.schemas.lawyer_profile import ProfileCreate, ProfileUpdate
from lawconnect.services.recompute_aggregates import recompute_lawyer_stats

logger = logging.getLogger(__name__)

_COMPLETENESS_FIELDS = ("bio", "specializations", "experience", "education", "languages")


class ProfileHandlers:
    """Lawyer profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.profiles = SqlEntityStore(db, LawyerProfile)
        self.users = SqlEntityStore(db, User)

    async def create_profile(self, actor: Actor, payload: ProfileCreate) -> LawyerProfile:
        user_id = payload.user_id or actor.id
        target = await self.users.get_or_404(user_id)
        existing = await self.profiles.find_one({"user_id": user_id})
        error = validate_profile_creation(actor, user_id, target.role, existing)
        if error:
            raise error

        columns = payload.to_patch()
        profile = LawyerProfile(
            user_id=user_id,
            is_profile_complete=compute_profile_complete(
                *(columns.get(name) for name in _COMPLETENESS_FIELDS),
            ),
            **columns,
        )
        await self.profiles.insert(profile)
        logger.info(
            "Lawyer profile created",
            extra={"actor_id": str(actor.id), "resource_id": str(profile.id)},
        )

        await recompute_lawyer_stats(self.db, user_id)
        await self.db.refresh(profile)
        return profile

    async def get_profile(self, user_id: UUID) -> LawyerProfile:
        profile = await self.profiles.find_one({"user_id": user_id})
        if profile is None:
            raise ResourceNotFoundError("LawyerProfile", str(user_id))
        return profile

    async def update_profile(
        self, actor: Actor, user_id: UUID, payload: ProfileUpdate,
    ) -> LawyerProfile:
        profile = await self.get_profile(user_id)
        target = await self.users.find_by_id(user_id)
        patch = payload.to_patch()
        error = validate_profile_update(
            actor, user_id, target.role if target else None,
            sets_verified="is_verified" in patch,
        )
        if error:
            raise error

        merged = {name: patch.get(name, getattr(profile, name)) for name in _COMPLETENESS_FIELDS}
        patch["is_profile_complete"] = compute_profile_complete(**merged)
        profile = await self.profiles.update(profile.id, patch)

        await recompute_lawyer_stats(self.db, user_id)
        await self.db.refresh(profile)
        return profile

    async def list_profiles(
        self,
        specialization: str | None = None,
        available: bool | None = None,
        verified: bool | None = None,
        min_rating: float | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[LawyerProfile]:
        filters = {}
        if available is not None:
            filters["is_available"] = available
        if verified is not None:
            filters["is_verified"] = verified
        rows = await self.profiles.find_many(filters)
        if specialization is not None:
            rows = [p for p in rows if specialization in (p.specializations or [])]
        if min_rating is not None:
            rows = [p for p in rows if p.ratings_average >= min_rating]
        rows.sort(key=lambda p: (p.ratings_average, p.ratings_quantity), reverse=True)
        return rows[offset:offset + limit]
