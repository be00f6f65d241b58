from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from diary.core.auth import get_current_user, get_settings
from diary.core.config import Settings
from diary.core.db import get_db
from diary.core.errors import AuthenticationError
from diary.domains.entries.schemas import MessageResponse
from diary.domains.identity.entities import User
from diary.domains.identity.schemas import (
    UserCreate, UserLogin, PasswordChange, UserResponse, UserEnvelope, Token
)
from diary.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Register a new account"""
    user = await IdentityService(db, settings).register_user(user_data)
    return UserEnvelope(user=UserResponse.from_entity(user))


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Exchange credentials for a bearer token"""
    result = await IdentityService(db, settings).login_user(login_data)

    if not result:
        raise AuthenticationError("Incorrect email or password")

    token, user = result
    return Token(access_token=token, user=UserResponse.from_entity(user))


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: User = Depends(get_current_user)):
    return UserEnvelope(user=UserResponse.from_entity(current_user))


@router.put("/password", response_model=MessageResponse)
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Change the password of the current account"""
    await IdentityService(db, settings).change_user_password(
        current_user,
        password_data.current_password,
        password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")
