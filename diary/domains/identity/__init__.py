from diary.domains.identity.entities import User
from diary.domains.identity.schemas import (
    UserCreate, UserLogin, PasswordChange, UserResponse, UserEnvelope, Token
)
from diary.domains.identity.services import IdentityService

__all__ = [
    "User",
    "UserCreate", "UserLogin", "PasswordChange", "UserResponse", "UserEnvelope", "Token",
    "IdentityService"
]
