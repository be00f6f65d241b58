import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(CamelModel):
    email: EmailStr
    name: Optional[str] = Field(None, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        return v.strip() or None


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class PasswordChange(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=128)


class UserResponse(CamelModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user) -> "UserResponse":
        return cls(id=user.uuid, email=user.email, name=user.name, created_at=user.created_at)


class UserEnvelope(CamelModel):
    user: UserResponse


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
