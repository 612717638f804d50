"""
Storage Ports.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStoragePort(ABC):
    """
    Abstract interface for the durable key-value medium.

    Values are opaque strings. Implementations are synchronous: a store
    operation never yields to the event loop.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass
