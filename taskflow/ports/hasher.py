"""
Password hashing Ports.
"""

from abc import ABC, abstractmethod


class PasswordHasherPort(ABC):
    """Abstract interface for salted password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of password."""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check password against a stored hash. May raise on malformed hashes."""
        pass
