"""Auth Routes — registration, login and the current account."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.api.dependencies import get_current_user
from lawconnect.infrastructure.database import get_db
from lawconnect.models.user import User
from lawconnect.schemas.user import TokenResponse, UserLogin, UserRegister, UserResponse
from lawconnect.services.handle_users import UserHandlers

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: UserRegister, db: AsyncSession = Depends(get_db)):
    """Create a client or lawyer account."""
    user = await UserHandlers(db).register(body)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(body: UserLogin, db: AsyncSession = Depends(get_db)):
    user, token = await UserHandlers(db).authenticate(body)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
