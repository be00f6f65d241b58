from sqlalchemy import Column, String, Text, ForeignKey, UUID, Index
from sqlalchemy.orm import relationship

from diary.db.models.base import BaseModel

TITLE_MAX_LENGTH = 200


class Entry(BaseModel):
    __tablename__ = "entries"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    tags = Column(String(500), nullable=True)
    mood = Column(String(32), nullable=True)
    passcode_hash = Column(String(255), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="entries")

    __table_args__ = (
        Index("ix_entries_owner_created", "owner_id", "created_at"),
    )
