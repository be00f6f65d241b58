from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from diary.db.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    entries = relationship("Entry", back_populates="owner", cascade="all, delete-orphan")
