from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    DELETED = "deleted"  # soft delete, never listed

    @classmethod
    def parse(cls, value):
        """Return the member for ``value``; raise ValueError for anything else."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"{value!r} is not a valid {cls.__name__}")
        return cls(value)


class TaskFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value):
        # Unknown or missing filters fall back to "all".
        try:
            return cls(value)
        except (TypeError, ValueError):
            return cls.ALL


@dataclass
class Task:
    title: str
    user_id: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            description=doc.get("description") or "",
            status=TaskStatus(doc["status"]),
            user_id=doc["user_id"],
            created_at=doc["created_at"],
            updated_at=doc.get("updated_at", doc["created_at"]),
        )

    def to_doc(self):
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
