"""
Task service: CRUD over the current user's tasks.

Every operation reads the full collection, changes it and writes it back.
Ownership (task.user_id == session user id) is the only access boundary.
"""

from collections import Counter
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Union

from taskflow.core.logger import logger
from taskflow.domain.entities import Task, TaskStatistics, TaskStatus, UserProfile
from taskflow.domain.errors import InvalidInputError, NotFoundError, UnauthorizedError
from taskflow.domain.value_objects import new_id, utc_now
from taskflow.ports.repository import (
    CredentialStorePort,
    SessionStorePort,
    TaskRepositoryPort,
)
from taskflow.services.interfaces import ITaskService
from taskflow.services.latency import simulate_latency
from taskflow.services.schemas import TaskUpdate, coerce_update


def _matches(task: Task, needle: str) -> bool:
    return needle in task.title.lower() or needle in task.description.lower()


class TaskService(ITaskService):
    """Service for the current user's tasks."""

    def __init__(
        self,
        tasks: TaskRepositoryPort,
        sessions: SessionStorePort,
        credentials: CredentialStorePort,
        network_delay: float = 0.6,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.tasks = tasks
        self.sessions = sessions
        self.credentials = credentials
        self.network_delay = network_delay
        self.clock = clock
        logger.debug("TaskService initialized")

    def _current_owner(self) -> UserProfile:
        profile = self.sessions.get_current_user()
        if profile is None:
            raise UnauthorizedError("Unauthorized")
        # Tasks of a user that no longer exists are orphaned and never shown
        if self.credentials.find_by_id(profile.id) is None:
            logger.warning(f"Session user not found in credential store: id={profile.id}")
            raise UnauthorizedError("Unauthorized")
        return profile

    def _owned(self, owner_id: str) -> List[Task]:
        return [t for t in self.tasks.get_all() if t.is_owned_by(owner_id)]

    async def list(
        self,
        search: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
    ) -> List[Task]:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        # Reversed first so that, among equal createdAt, later inserts come first
        result = sorted(
            reversed(self._owned(owner.id)), key=lambda t: t.created_at, reverse=True
        )

        if search:
            needle = search.strip().lower()
            result = [t for t in result if _matches(t, needle)]
        if status is not None:
            try:
                wanted = TaskStatus(status)
            except ValueError as e:
                raise InvalidInputError(f"Unknown task status: {status}") from e
            result = [t for t in result if t.status == wanted]
        if limit is not None:
            result = result[: max(0, limit)]

        return result

    async def get(self, task_id: str) -> Task:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        for task in self._owned(owner.id):
            if task.id == task_id:
                return task
        raise NotFoundError("Task not found")

    async def create(self, title: str, description: str = "") -> Task:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        if not (title or "").strip():
            raise InvalidInputError("Title is required.")

        now = self.clock()
        task = Task(
            id=new_id(),
            user_id=owner.id,
            title=title,
            description=description or "",
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        tasks = self.tasks.get_all()
        tasks.append(task)
        self.tasks.save_all(tasks)

        logger.info(f"Task created: id={task.id}, user_id={owner.id}")
        return task

    async def update(
        self, task_id: str, updates: Union[TaskUpdate, Mapping[str, Any]]
    ) -> Task:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        changes = coerce_update(TaskUpdate, updates)
        if changes.title is not None and not changes.title.strip():
            raise InvalidInputError("Title must not be blank.")

        tasks = self.tasks.get_all()
        for index, task in enumerate(tasks):
            if task.id == task_id and task.is_owned_by(owner.id):
                break
        else:
            logger.info(f"Task not found for update: id={task_id}, user_id={owner.id}")
            raise NotFoundError("Task not found")

        updated = task.merged(
            self.clock(),
            title=changes.title,
            description=changes.description,
            status=changes.status,
        )
        tasks[index] = updated
        self.tasks.save_all(tasks)

        logger.info(f"Task updated: id={task_id}, status={updated.status.value}")
        return updated

    async def delete(self, task_id: str) -> None:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        tasks = self.tasks.get_all()
        remaining = [t for t in tasks if not (t.id == task_id and t.is_owned_by(owner.id))]
        self.tasks.save_all(remaining)

        logger.info(
            f"Task delete: id={task_id}, user_id={owner.id}, removed={len(tasks) - len(remaining)}"
        )

    async def get_statistics(self) -> TaskStatistics:
        await simulate_latency(self.network_delay)
        owner = self._current_owner()

        owned = self._owned(owner.id)
        counts = Counter(t.status for t in owned)
        return TaskStatistics(
            total=len(owned),
            pending=counts[TaskStatus.PENDING],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            completed=counts[TaskStatus.COMPLETED],
        )
