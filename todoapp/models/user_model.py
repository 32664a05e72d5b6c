from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    username: str
    password_hash: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            password_hash=doc["password_hash"],
            created_at=doc["created_at"],
        )


@dataclass(frozen=True)
class SessionIdentity:
    """The signed-in user, handed explicitly to every service call."""

    user_id: str
    username: str

    @classmethod
    def from_session(cls, session):
        user_id = session.get("user_id")
        username = session.get("username")
        if not user_id or not username:
            return None
        return cls(user_id=user_id, username=username)

    def to_session(self):
        return {"user_id": self.user_id, "username": self.username}
