"""
Filesystem Storage Adapter.

Each key is stored as its own file `<root>/<key>.json`, so the four
collections stay independently addressable just like browser-local storage.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional

from taskflow.core.logger import logger
from taskflow.ports.storage import KeyValueStoragePort

_SUFFIX = ".json"
_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage(KeyValueStoragePort):
    """Adapter persisting values under a directory, one file per key."""

    def __init__(self, root: str):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        logger.debug(f"FileStorage initialized at {self.root}")

    def _path(self, key: str) -> Path:
        if not _VALID_KEY.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}{_SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        # Write to a sibling temp file then rename, so readers never see a torn value
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=str(self.root))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def keys(self) -> List[str]:
        return sorted(
            p.name[: -len(_SUFFIX)]
            for p in self.root.glob(f"*{_SUFFIX}")
            if not p.name.startswith(".")
        )

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)
        logger.info(f"Cleared all keys in {self.root}")
