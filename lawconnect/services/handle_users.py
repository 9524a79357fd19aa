"""User Handlers — registration, login, account lookup and admin bootstrap.

Invariants:
    - Emails are normalized (strip + lowercase) before every lookup and insert
    - Registration rule runs before the insert; the unique index backs it up
    - Login failures never reveal whether the email exists

Design Decisions:
    - Token carries only the user id; role is read back from the row per request
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.domain_types import Role
from lawconnect.core.enforce_users import normalize_email, validate_registration
from lawconnect.core.errors import AuthenticationError
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from lawconnect.models.user import User
from lawconnect.schemas.user import UserLogin, UserRegister

logger = logging.getLogger(__name__)


class UserHandlers:
    """Accounts and credentials."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = SqlEntityStore(db, User)

    async def register(self, payload: UserRegister) -> User:
        email = normalize_email(payload.email)
        existing = await self.users.find_one({"email": email})
        error = validate_registration(payload.role, existing)
        if error:
            raise error

        user = User(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role.value,
        )
        await self.users.insert(user)
        logger.info(
            f"Registered {user.role} account",
            extra={"actor_id": str(user.id), "resource_type": "User"},
        )
        return user

    async def authenticate(self, payload: UserLogin) -> tuple[User, str]:
        """Check credentials. Returns the user and a fresh access token."""
        user = await self.users.find_one({"email": normalize_email(payload.email)})
        if user is None or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        return user, create_access_token(str(user.id))

    async def get_user(self, user_id: UUID) -> User:
        return await self.users.get_or_404(user_id)

    async def ensure_admin(self, email: str, password: str, name: str) -> User:
        """Create the bootstrap admin unless an account with that email exists."""
        email = normalize_email(email)
        existing = await self.users.find_one({"email": email})
        if existing is not None:
            return existing
        admin = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.ADMIN.value,
        )
        await self.users.insert(admin)
        logger.info("Bootstrap admin created", extra={"actor_id": str(admin.id)})
        return admin
