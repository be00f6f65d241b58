import enum
import uuid
from datetime import datetime
from typing import Optional

from diary.core.security import get_secret_hash, verify_secret


class Entry:
    """A single diary entry owned by one user"""

    def __init__(
        self,
        uuid: uuid.UUID,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        tags: Optional[str] = None,
        mood: Optional[str] = None,
        passcode_hash: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_id = owner_id
        self.title = title
        self.content = content
        self.tags = tags
        self.mood = mood
        self.passcode_hash = passcode_hash
        now = datetime.utcnow()
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at

    @property
    def has_passcode(self) -> bool:
        return bool(self.passcode_hash)

    def tag_list(self) -> list:
        """Tags split on commas, blanks dropped"""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def set_passcode(self, passcode: Optional[str]) -> None:
        """Set, replace or (with an empty value) remove the passcode"""
        self.passcode_hash = get_secret_hash(passcode) if passcode else None

    def apply_changes(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tags: Optional[str] = None,
        mood: Optional[str] = None,
        clear_tags: bool = False,
        clear_mood: bool = False
    ) -> None:
        """Apply an update and bump updated_at"""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if tags is not None or clear_tags:
            self.tags = tags
        if mood is not None or clear_mood:
            self.mood = mood
        self.touch()

    def touch(self) -> None:
        self.updated_at = max(datetime.utcnow(), self.created_at)

    @classmethod
    def create_entry(
        cls,
        owner_id: uuid.UUID,
        title: str,
        content: str,
        tags: Optional[str] = None,
        mood: Optional[str] = None,
        passcode: Optional[str] = None
    ) -> "Entry":
        now = datetime.utcnow()
        entry = cls(
            uuid=uuid.uuid4(),
            owner_id=owner_id,
            title=title,
            content=content,
            tags=tags,
            mood=mood,
            created_at=now,
            updated_at=now
        )
        entry.set_passcode(passcode)
        return entry

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entry):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Entry(uuid={self.uuid}, title={self.title!r})"


class AccessDecision(enum.Enum):
    GRANTED = "granted"
    PASSCODE_REQUIRED = "passcode_required"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class EntryAccess:
    """Decides whether a caller may read an entry's content.

    Ownership is checked first: a caller that does not own the entry gets
    NOT_FOUND, the same answer as for a missing entry. Only the owner reaches
    the passcode check. The decision is pure; the entry has already been
    fetched by the caller.
    """

    def __init__(self, entry: Optional[Entry]):
        self.entry = entry

    def is_owner(self, user_id: uuid.UUID) -> bool:
        return self.entry is not None and self.entry.owner_id == user_id

    def decide(self, user_id: uuid.UUID, passcode: Optional[str] = None) -> AccessDecision:
        if not self.is_owner(user_id):
            return AccessDecision.NOT_FOUND

        if not self.entry.has_passcode:
            return AccessDecision.GRANTED

        if passcode is None or passcode == "":
            return AccessDecision.PASSCODE_REQUIRED

        if verify_secret(passcode, self.entry.passcode_hash):
            return AccessDecision.GRANTED

        return AccessDecision.FORBIDDEN
