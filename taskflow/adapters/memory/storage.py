"""
In-memory Storage Adapter.
"""

from typing import Dict, List, Optional

from taskflow.ports.storage import KeyValueStoragePort


class InMemoryStorage(KeyValueStoragePort):
    """Dict-backed storage. Lives as long as the process; used by tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()
