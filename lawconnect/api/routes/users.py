"""User Routes — account lookup for authenticated callers."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_actor
from lawconnect.core.domain_types import Actor
from lawconnect.infrastructure.database import get_db
from lawconnect.schemas.user import UserResponse
from lawconnect.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    user = await UserHandlers(db).get_user(user_id)
    return UserResponse.model_validate(user)
