"""
Credential store: user records persisted as one JSON collection.
"""

from typing import List, Optional

from taskflow.core.logger import logger
from taskflow.domain.entities import UserRecord
from taskflow.domain.value_objects import normalize_email
from taskflow.ports.repository import CredentialStorePort
from taskflow.repositories.codec import JsonBlobCodec, ReadResult
from taskflow.repositories.models import USERS_KEY, UserDocument


def _parse_user(data) -> UserRecord:
    return UserDocument.model_validate(data).to_record()


class CredentialStore(CredentialStorePort):
    """User records with email uniqueness, read and written as a whole."""

    def __init__(self, codec: JsonBlobCodec):
        self.codec = codec

    def load(self) -> ReadResult[List[UserRecord]]:
        return self.codec.read_collection(USERS_KEY, _parse_user)

    def list_users(self) -> List[UserRecord]:
        return self.load().value

    def _write(self, users: List[UserRecord]) -> None:
        self.codec.write_collection(
            USERS_KEY, [UserDocument.from_record(u).to_dict() for u in users], _parse_user
        )

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        search = normalize_email(email)
        if not search:
            return None
        # Stored emails are normalized too, in case older data was not
        for user in self.list_users():
            if normalize_email(user.email) == search:
                return user
        return None

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def save(self, record: UserRecord) -> None:
        users = self.list_users()
        for index, user in enumerate(users):
            if user.id == record.id:
                users[index] = record
                break
        else:
            users.append(record)
        self._write(users)
        logger.debug(f"Saved user id={record.id} (total users: {len(users)})")

    def has_users(self) -> bool:
        return self.codec.exists(USERS_KEY)

    def seed_if_empty(self, record: UserRecord) -> bool:
        if self.has_users():
            return False
        self._write([record])
        logger.info(f"Seeded demo account: id={record.id}, email={record.email}")
        return True
