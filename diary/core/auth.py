import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.config import Settings
from diary.core.db import get_db
from diary.core.errors import AuthenticationError
from diary.core.security import verify_token
from diary.db.repositories.user_repository import UserRepository
from diary.domains.identity.entities import User

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with"""
    return request.app.state.settings


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the authenticated user from the bearer token"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(credentials.credentials, settings)
    if not payload or not payload.get("sub"):
        raise AuthenticationError()

    try:
        user_uuid = uuid.UUID(payload["sub"])
    except ValueError:
        raise AuthenticationError()

    user = await UserRepository(db).get_by_uuid(user_uuid)
    if user is None or not user.is_active:
        raise AuthenticationError()

    return user
