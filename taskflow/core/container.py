"""
Dependency Injection Container.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from taskflow.core.config import Settings, get_settings
from taskflow.core.logger import logger

T = TypeVar("T")


class Container:
    """
    Simple Dependency Injection Container.
    """

    _instances: Dict[Type, Any] = {}

    @classmethod
    def register(cls, interface: Type[T], instance: Any) -> None:
        """Register a singleton instance for an interface."""
        cls._instances[interface] = instance

    @classmethod
    def resolve(cls, interface: Type[T]) -> T:
        """Resolve an interface to its implementation."""
        if interface in cls._instances:
            return cls._instances[interface]
        raise KeyError(f"No provider registered for {interface.__name__}")

    @classmethod
    def clear(cls):
        """Clear all registrations (useful for testing)."""
        cls._instances.clear()


def build_storage(settings: Settings):
    """Create the storage adapter selected by STORAGE_BACKEND."""
    from taskflow.adapters.filesystem.storage import FileStorage
    from taskflow.adapters.memory.storage import InMemoryStorage

    if settings.storage_backend == "memory":
        return InMemoryStorage()
    return FileStorage(settings.storage_dir)


def seed_demo_user(settings: Settings) -> bool:
    """Create the demo account if no user collection exists yet."""
    from taskflow.domain.entities import UserRecord
    from taskflow.domain.value_objects import normalize_email, utc_now
    from taskflow.ports.hasher import PasswordHasherPort
    from taskflow.ports.repository import CredentialStorePort

    if not settings.seed_demo_user:
        return False

    credentials = Container.resolve(CredentialStorePort)
    if credentials.has_users():
        return False

    hasher = Container.resolve(PasswordHasherPort)
    demo = UserRecord(
        id=settings.demo_user_id,
        username=settings.demo_user_name,
        email=normalize_email(settings.demo_user_email),
        password_hash=hasher.hash(settings.demo_user_password),
        created_at=utc_now(),
    )
    return credentials.seed_if_empty(demo)


def bootstrap_container(settings: Optional[Settings] = None, storage=None) -> None:
    """
    Initialize the dependency injection container.
    Register all dependencies here, then run one-time seeding.

    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Storage adapter to use instead of the configured one
    """
    from taskflow.adapters.bcrypt.hasher import BcryptPasswordHasher
    from taskflow.ports.hasher import PasswordHasherPort
    from taskflow.ports.repository import (
        CredentialStorePort,
        SessionStorePort,
        TaskRepositoryPort,
    )
    from taskflow.ports.storage import KeyValueStoragePort
    from taskflow.repositories import (
        CredentialStore,
        JsonBlobCodec,
        SessionStore,
        TaskRepository,
    )
    from taskflow.services import AuthService, TaskService
    from taskflow.services.interfaces import IAuthService, ITaskService

    settings = settings or get_settings()
    storage = storage if storage is not None else build_storage(settings)

    codec = JsonBlobCodec(storage, key_prefix=settings.storage_key_prefix)
    hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    credentials = CredentialStore(codec)
    sessions = SessionStore(codec)
    tasks = TaskRepository(codec)

    Container.clear()
    Container.register(Settings, settings)
    Container.register(KeyValueStoragePort, storage)
    Container.register(PasswordHasherPort, hasher)
    Container.register(CredentialStorePort, credentials)
    Container.register(SessionStorePort, sessions)
    Container.register(TaskRepositoryPort, tasks)
    Container.register(
        IAuthService,
        AuthService(
            credentials,
            sessions,
            hasher,
            network_delay=settings.network_delay_seconds,
            logout_delay=settings.logout_delay_seconds,
            token_prefix=settings.token_prefix,
        ),
    )
    Container.register(
        ITaskService,
        TaskService(
            tasks,
            sessions,
            credentials,
            network_delay=settings.network_delay_seconds,
        ),
    )

    seed_demo_user(settings)
    logger.info(
        f"{settings.app_name} {settings.app_version} ready "
        f"(storage={settings.storage_backend}, env={settings.environment})"
    )


def reset_storage() -> None:
    """Wipe every stored key and re-seed the demo account."""
    from taskflow.ports.storage import KeyValueStoragePort

    Container.resolve(KeyValueStoragePort).clear()
    logger.warning("All stored data cleared")
    seed_demo_user(Container.resolve(Settings))
