"""
Repositories over the JSON blob codec.
"""

from .codec import JsonBlobCodec, ReadResult
from .credential_store import CredentialStore
from .session_store import SessionStore
from .task_repository import TaskRepository

__all__ = [
    "JsonBlobCodec",
    "ReadResult",
    "CredentialStore",
    "SessionStore",
    "TaskRepository",
]
