"""
Session store: active token and cached current-user profile.
"""

from typing import Optional

from taskflow.domain.entities import UserProfile
from taskflow.ports.repository import SessionStorePort
from taskflow.repositories.codec import JsonBlobCodec
from taskflow.repositories.models import CURRENT_USER_KEY, TOKEN_KEY, UserProfileDocument


def _parse_token(data) -> str:
    if not isinstance(data, str):
        raise TypeError(f"token must be a string, got {type(data).__name__}")
    return data


def _parse_profile(data) -> UserProfile:
    return UserProfileDocument.model_validate(data).to_entity()


class SessionStore(SessionStorePort):
    def __init__(self, codec: JsonBlobCodec):
        self.codec = codec

    def set_token(self, token: str) -> None:
        self.codec.write(TOKEN_KEY, token)

    def get_token(self) -> Optional[str]:
        return self.codec.read(TOKEN_KEY, _parse_token, None).value

    def set_current_user(self, profile: UserProfile) -> None:
        self.codec.write(CURRENT_USER_KEY, UserProfileDocument.from_entity(profile).to_dict())

    def get_current_user(self) -> Optional[UserProfile]:
        return self.codec.read(CURRENT_USER_KEY, _parse_profile, None).value

    def clear_auth(self) -> None:
        self.codec.remove(TOKEN_KEY)
        self.codec.remove(CURRENT_USER_KEY)
