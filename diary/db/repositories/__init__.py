from diary.db.repositories.user_repository import UserRepository
from diary.db.repositories.entry_repository import EntryRepository, EntryFilters

__all__ = [
    "UserRepository",
    "EntryRepository",
    "EntryFilters",
]
