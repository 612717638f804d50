"""
Domain entities for the task manager.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .value_objects import next_timestamp


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class UserProfile:
    """User as exposed to callers. Carries no password hash."""

    id: str
    username: str
    email: str
    created_at: datetime


@dataclass
class UserRecord:
    """Stored user: identity plus salted password hash."""

    id: str
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )


@dataclass
class Task:
    """Personal task owned by exactly one user."""

    id: str
    user_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def merged(
        self,
        now: datetime,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> "Task":
        """Return a copy with the given fields applied and updated_at refreshed."""
        changes = {}
        if title is not None:
            changes["title"] = title
        if description is not None:
            changes["description"] = description
        if status is not None:
            changes["status"] = TaskStatus(status)
        changes["updated_at"] = next_timestamp(self.updated_at, now)
        return replace(self, **changes)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register/login."""

    profile: UserProfile
    token: str


@dataclass(frozen=True)
class TaskStatistics:
    """Per-status task counts for the current user."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
