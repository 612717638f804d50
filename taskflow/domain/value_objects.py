"""
Domain value objects.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address (the uniqueness key)."""
    return (email or "").strip().lower()


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def next_timestamp(previous: datetime, now: datetime) -> datetime:
    """Return `now`, bumped to be strictly later than `previous` if needed."""
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


@dataclass(frozen=True)
class SessionToken:
    """Opaque bearer token issued on login/registration."""

    value: str

    @classmethod
    def issue(cls, prefix: str = "") -> "SessionToken":
        return cls(f"{prefix}{uuid.uuid4()}")

    def masked(self) -> str:
        """Short form safe to put in logs."""
        return f"{self.value[:12]}..." if len(self.value) > 12 else "***"

    def __str__(self):
        return self.value
