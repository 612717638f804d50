"""
Stored document models using Pydantic.

Field aliases match the persisted JSON layout (camelCase keys).
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskflow.domain.entities import Task, TaskStatus, UserProfile, UserRecord

# Storage keys
USERS_KEY = "users"
TASKS_KEY = "tasks"
TOKEN_KEY = "token"
CURRENT_USER_KEY = "current_user"

ALL_KEYS = (USERS_KEY, TASKS_KEY, TOKEN_KEY, CURRENT_USER_KEY)


def _as_utc(value: datetime) -> datetime:
    # Timestamps without an offset are read as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserProfileDocument(BaseModel):
    """Model for the cached current-user profile."""

    id: str = Field(..., description="User identifier")
    username: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email")
    created_at: datetime = Field(..., alias="createdAt", description="Creation time")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @classmethod
    def from_entity(cls, profile: UserProfile) -> "UserProfileDocument":
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            created_at=profile.created_at,
        )

    def to_entity(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class UserDocument(UserProfileDocument):
    """Model for a stored user record (includes the password hash)."""

    password_hash: str = Field(..., alias="passwordHash", description="Salted hash")

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserDocument":
        return cls(
            id=record.id,
            username=record.username,
            email=record.email,
            password_hash=record.password_hash,
            created_at=record.created_at,
        )

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=self.id,
            username=self.username,
            email=self.email,
            password_hash=self.password_hash,
            created_at=self.created_at,
        )


class TaskDocument(BaseModel):
    """Model for a stored task."""

    id: str = Field(..., description="Task identifier")
    user_id: str = Field(..., alias="userId", description="Owning user id")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Free-form details")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    created_at: datetime = Field(..., alias="createdAt", description="Creation time")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update time")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_as_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @classmethod
    def from_entity(cls, task: Task) -> "TaskDocument":
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    def to_entity(self) -> Task:
        return Task(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

