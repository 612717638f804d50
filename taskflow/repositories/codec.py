"""
JSON blob codec over the key-value storage port.

Reads never raise on bad data: a value that fails to decode or validate
comes back as the caller's fallback together with the error, and a warning
is logged. Collections are parsed record by record so one bad record does
not hide the rest.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from taskflow.core.logger import format_exception_short, logger
from taskflow.ports.storage import KeyValueStoragePort

T = TypeVar("T")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Value read from storage plus what happened while reading it."""

    value: T
    found: bool = False
    error: Optional[str] = None
    skipped: Tuple[Any, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def degraded(self) -> bool:
        """True when stored data existed but could not be used in full."""
        return self.found and self.error is not None


class JsonBlobCodec:
    """Reads and writes JSON-encoded values under (optionally prefixed) keys."""

    def __init__(self, storage: KeyValueStoragePort, key_prefix: str = ""):
        self.storage = storage
        self.key_prefix = key_prefix

    def key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    def exists(self, name: str) -> bool:
        return self.storage.get_item(self.key(name)) is not None

    def read(self, name: str, parse: Callable[[Any], T], fallback: T) -> ReadResult[T]:
        """
        Decode and parse the blob stored under name.

        Args:
            name: Unprefixed key
            parse: Converts the decoded JSON value into the wanted type
            fallback: Returned when the key is absent or the data is unusable

        Returns:
            ReadResult carrying the parsed value or the fallback
        """
        raw = self.storage.get_item(self.key(name))
        if raw is None:
            return ReadResult(value=fallback)

        try:
            value = parse(json.loads(raw))
        except (ValueError, TypeError) as e:
            error = format_exception_short(e, f"Unreadable data under '{self.key(name)}'")
            logger.warning(f"{error}; falling back to default")
            return ReadResult(value=fallback, found=True, error=error)

        return ReadResult(value=value, found=True)

    def read_collection(
        self, name: str, parse_item: Callable[[Any], T]
    ) -> ReadResult[List[T]]:
        """
        Decode a JSON array and parse each record on its own.

        Records that fail to parse are left out of the value and returned in
        `skipped` as raw JSON, so a later write can keep them.
        """
        result = self.read(name, _as_list, [])
        if not result.ok:
            return result

        items: List[T] = []
        skipped: List[Any] = []
        for position, raw_item in enumerate(result.value):
            try:
                items.append(parse_item(raw_item))
            except (ValueError, TypeError) as e:
                logger.warning(
                    format_exception_short(
                        e, f"Skipping unreadable record #{position} under '{self.key(name)}'"
                    )
                )
                skipped.append(raw_item)

        error = None
        if skipped:
            error = f"{len(skipped)} unreadable record(s) under '{self.key(name)}'"
        return ReadResult(
            value=items, found=result.found, error=error, skipped=tuple(skipped)
        )

    def write(self, name: str, payload: Any) -> None:
        self.storage.set_item(self.key(name), json.dumps(payload, ensure_ascii=False))

    def write_collection(
        self, name: str, records: Sequence[Any], parse_item: Callable[[Any], Any]
    ) -> None:
        """Write records, appending stored raw records that parse_item rejects."""
        # Re-read so records skipped by an earlier read are never dropped
        skipped = self.read_collection(name, parse_item).skipped
        self.write(name, list(records) + list(skipped))

    def remove(self, name: str) -> None:
        self.storage.remove_item(self.key(name))


def _as_list(data: Any) -> list:
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return data
