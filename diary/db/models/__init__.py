from diary.db.models.base import BaseModel
from diary.db.models.user import User
from diary.db.models.entry import Entry

__all__ = [
    "BaseModel",
    "User",
    "Entry",
]
