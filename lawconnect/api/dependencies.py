"""API Dependencies — bearer-token authentication resolved to an Actor.

Invariants:
    - Missing, malformed, forged or expired token → AuthenticationError (401)
    - A valid token for a user that no longer exists → AuthenticationError (401)
    - The Actor's role always comes from the stored user row, never from the token
"""

from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from lawconnect.core.domain_types import Actor, Role
from lawconnect.core.errors import AuthenticationError
from lawconnect.infrastructure.database import get_db
from lawconnect.infrastructure.entity_store import SqlEntityStore
from lawconnect.infrastructure.security import decode_access_token
from lawconnect.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError()
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")
    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise AuthenticationError("Invalid or expired token")
    user = await SqlEntityStore(db, User).find_by_id(user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


async def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return Actor(id=user.id, role=Role(user.role))
