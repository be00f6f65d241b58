from diary.domains.entries.entities import Entry, EntryAccess, AccessDecision
from diary.domains.entries.services import EntryService

__all__ = [
    "Entry", "EntryAccess", "AccessDecision",
    "EntryService"
]
