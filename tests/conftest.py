from datetime import datetime, timedelta, timezone

import pytest

from taskflow.adapters.bcrypt.hasher import BcryptPasswordHasher
from taskflow.adapters.memory.storage import InMemoryStorage
from taskflow.repositories import (
    CredentialStore,
    JsonBlobCodec,
    SessionStore,
    TaskRepository,
)
from taskflow.services import AuthService, TaskService


class FakeClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def codec(storage):
    return JsonBlobCodec(storage)


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def credentials(codec):
    return CredentialStore(codec)


@pytest.fixture
def sessions(codec):
    return SessionStore(codec)


@pytest.fixture
def task_repo(codec):
    return TaskRepository(codec)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_service(credentials, sessions, hasher, clock):
    return AuthService(
        credentials,
        sessions,
        hasher,
        network_delay=0,
        logout_delay=0,
        clock=clock,
    )


@pytest.fixture
def task_service(task_repo, sessions, credentials, clock):
    return TaskService(task_repo, sessions, credentials, network_delay=0, clock=clock)
