import uuid
from datetime import datetime
from typing import Optional

from diary.core.security import get_secret_hash, verify_secret


class User:
    """Authenticated diary owner"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        password_hash: str,
        name: Optional[str] = None,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.name = name
        self.password_hash = password_hash
        self.is_active = is_active
        now = datetime.utcnow()
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    def authenticate(self, password: str) -> bool:
        """Check the account password"""
        return verify_secret(password, self.password_hash)

    def change_password(self, new_password: str) -> None:
        self.password_hash = get_secret_hash(new_password)
        self.updated_at = datetime.utcnow()

    @classmethod
    def create_user(cls, email: str, password: str, name: Optional[str] = None) -> "User":
        """Create a new user with a hashed password"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            name=name,
            password_hash=get_secret_hash(password)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email})"
