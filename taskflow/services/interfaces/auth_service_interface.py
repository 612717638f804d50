"""
Interface for Auth Service.
Defines the contract that all auth services must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from taskflow.domain.entities import AuthResult, UserProfile
from taskflow.services.schemas import ProfileUpdate


class IAuthService(ABC):
    """Interface for account and session operations."""

    @abstractmethod
    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """
        Create an account and start a session for it.

        Raises:
            ConflictError: If the normalized email is already registered
            InvalidInputError: If any argument is blank
        """
        pass

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResult:
        """
        Start a session for an existing account.

        Raises:
            NotFoundError: If no account uses the email
            InvalidCredentialError: If the password does not match
        """
        pass

    @abstractmethod
    async def logout(self) -> None:
        """End the current session. Never fails."""
        pass

    @abstractmethod
    async def get_profile(self) -> UserProfile:
        """
        Return the cached current-user profile.

        Raises:
            UnauthorizedError: If there is no session
        """
        pass

    @abstractmethod
    async def update_profile(
        self, updates: Union[ProfileUpdate, Mapping[str, Any]]
    ) -> UserProfile:
        """
        Change username, email and/or password of the current user.

        Raises:
            UnauthorizedError: If there is no session
            NotFoundError: If the session user no longer exists
            ConflictError: If the new email belongs to another user
        """
        pass

    @abstractmethod
    async def restore_session(self) -> Optional[UserProfile]:
        """Return the persisted session's profile, or None (clearing stale state)."""
        pass
