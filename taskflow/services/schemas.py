"""
Input models for partial updates.
"""

from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from taskflow.domain.entities import TaskStatus
from taskflow.domain.errors import InvalidInputError

M = TypeVar("M", bound=BaseModel)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    username: Optional[str] = Field(None, min_length=1, description="New display name")
    email: Optional[str] = Field(None, min_length=1, description="New email")
    password: Optional[str] = Field(None, min_length=1, description="New password")

    model_config = ConfigDict(extra="ignore")


class TaskUpdate(BaseModel):
    """Fields that may be merged over an existing task."""

    title: Optional[str] = Field(None, description="New title")
    description: Optional[str] = Field(None, description="New description")
    status: Optional[TaskStatus] = Field(None, description="New status")

    model_config = ConfigDict(extra="ignore")


def coerce_update(model: Type[M], updates: Union[M, Mapping[str, Any], None]) -> M:
    """Accept a model instance or a plain mapping and return a validated model."""
    if isinstance(updates, model):
        return updates
    try:
        return model.model_validate(dict(updates or {}))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidInputError(f"Invalid update ({fields})") from e
