"""
Repository Ports.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from taskflow.domain.entities import Task, UserProfile, UserRecord


class CredentialStorePort(ABC):
    """Abstract interface for user records and email uniqueness."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Find a user by case- and whitespace-insensitive email."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Find a user by identifier."""
        pass

    @abstractmethod
    def list_users(self) -> List[UserRecord]:
        """Return every stored user."""
        pass

    @abstractmethod
    def save(self, record: UserRecord) -> None:
        """Insert or replace a user by identifier."""
        pass

    @abstractmethod
    def has_users(self) -> bool:
        """True once a user collection exists, even an empty one."""
        pass

    @abstractmethod
    def seed_if_empty(self, record: UserRecord) -> bool:
        """Persist record as the only user if no user collection exists."""
        pass


class SessionStorePort(ABC):
    """Abstract interface for the active session."""

    @abstractmethod
    def set_token(self, token: str) -> None:
        pass

    @abstractmethod
    def get_token(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_current_user(self, profile: UserProfile) -> None:
        pass

    @abstractmethod
    def get_current_user(self) -> Optional[UserProfile]:
        pass

    @abstractmethod
    def clear_auth(self) -> None:
        """Drop both token and cached profile."""
        pass


class TaskRepositoryPort(ABC):
    """Abstract interface for the task collection."""

    @abstractmethod
    def get_all(self) -> List[Task]:
        """Return the full task collection."""
        pass

    @abstractmethod
    def save_all(self, tasks: List[Task]) -> None:
        """Overwrite the full task collection."""
        pass
