"""
Auth service: registration, login and profile management.
Includes logging and error handling for every operation.
"""

from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from taskflow.core.logger import format_exception_short, logger
from taskflow.domain.entities import AuthResult, UserProfile, UserRecord
from taskflow.domain.errors import (
    ConflictError,
    InvalidCredentialError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from taskflow.domain.value_objects import SessionToken, new_id, normalize_email, utc_now
from taskflow.ports.hasher import PasswordHasherPort
from taskflow.ports.repository import CredentialStorePort, SessionStorePort
from taskflow.services.interfaces import IAuthService
from taskflow.services.latency import simulate_latency
from taskflow.services.schemas import ProfileUpdate, coerce_update


class AuthService(IAuthService):
    """Service for accounts and the active session."""

    def __init__(
        self,
        credentials: CredentialStorePort,
        sessions: SessionStorePort,
        hasher: PasswordHasherPort,
        network_delay: float = 0.6,
        logout_delay: float = 0.2,
        token_prefix: str = "mock-jwt-",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.hasher = hasher
        self.network_delay = network_delay
        self.logout_delay = logout_delay
        self.token_prefix = token_prefix
        self.clock = clock
        logger.debug("AuthService initialized")

    def _start_session(self, record: UserRecord) -> AuthResult:
        profile = record.to_profile()
        token = SessionToken.issue(self.token_prefix)
        self.sessions.set_token(token.value)
        self.sessions.set_current_user(profile)
        logger.debug(f"Session started: user_id={profile.id}, token={token.masked()}")
        return AuthResult(profile=profile, token=token.value)

    def _password_matches(self, password: str, password_hash: str) -> bool:
        try:
            return self.hasher.verify(password, password_hash)
        except Exception as e:
            logger.error(format_exception_short(e, "Password comparison error"))
            return False

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        await simulate_latency(self.network_delay)

        clean_email = normalize_email(email)
        if not (username or "").strip() or not clean_email or not password:
            raise InvalidInputError("Username, email and password are required.")

        if self.credentials.find_by_email(clean_email) is not None:
            logger.warning(f"Registration rejected, email in use: {clean_email}")
            raise ConflictError("User already exists with this email.")

        record = UserRecord(
            id=new_id(),
            username=username,
            email=clean_email,
            password_hash=self.hasher.hash(password),
            created_at=self.clock(),
        )
        self.credentials.save(record)
        logger.info(f"User registered: id={record.id}, email={clean_email}")

        return self._start_session(record)

    async def login(self, email: str, password: str) -> AuthResult:
        await simulate_latency(self.network_delay)

        clean_email = normalize_email(email)
        record = self.credentials.find_by_email(clean_email)
        if record is None:
            logger.info(f"Login failed, unknown email: {clean_email}")
            raise NotFoundError("User not found. Please register first.")

        if not self._password_matches(password or "", record.password_hash):
            logger.info(f"Login failed, bad password: user_id={record.id}")
            raise InvalidCredentialError("Invalid email or password.")

        logger.info(f"User logged in: id={record.id}")
        return self._start_session(record)

    async def logout(self) -> None:
        await simulate_latency(self.logout_delay)
        self.sessions.clear_auth()
        logger.info("User logged out")

    async def get_profile(self) -> UserProfile:
        await simulate_latency(self.network_delay)
        profile = self.sessions.get_current_user()
        if profile is None:
            raise UnauthorizedError("Unauthorized")
        return profile

    async def update_profile(
        self, updates: Union[ProfileUpdate, Mapping[str, Any]]
    ) -> UserProfile:
        await simulate_latency(self.network_delay)

        current = self.sessions.get_current_user()
        if current is None:
            raise UnauthorizedError("Unauthorized")

        changes = coerce_update(ProfileUpdate, updates)

        record = self.credentials.find_by_id(current.id)
        if record is None:
            logger.warning(f"Session user missing from credential store: id={current.id}")
            raise NotFoundError("User not found")

        if changes.username is not None:
            if not changes.username.strip():
                raise InvalidInputError("Username must not be blank.")
            record.username = changes.username

        if changes.email is not None:
            clean_email = normalize_email(changes.email)
            if not clean_email:
                raise InvalidInputError("Email must not be blank.")
            if clean_email != record.email:
                existing = self.credentials.find_by_email(clean_email)
                if existing is not None and existing.id != record.id:
                    raise ConflictError("Email already in use")
                record.email = clean_email

        if changes.password is not None:
            record.password_hash = self.hasher.hash(changes.password)

        self.credentials.save(record)

        profile = record.to_profile()
        self.sessions.set_current_user(profile)
        logger.info(f"Profile updated: id={record.id}")
        return profile

    async def restore_session(self) -> Optional[UserProfile]:
        if self.sessions.get_token() is None:
            return None

        try:
            return await self.get_profile()
        except UnauthorizedError:
            logger.info("Stale session without profile, clearing it")
            self.sessions.clear_auth()
            return None
