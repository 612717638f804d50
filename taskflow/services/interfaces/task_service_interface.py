"""
Interface for Task Service.
Defines the contract that all task services must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Union

from taskflow.domain.entities import Task, TaskStatistics, TaskStatus
from taskflow.services.schemas import TaskUpdate


class ITaskService(ABC):
    """Interface for task operations scoped to the current user."""

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        limit: Optional[int] = None,
    ) -> List[Task]:
        """
        List the current user's tasks, most recently created first.

        Args:
            search: Case-insensitive substring matched against title and description
            status: Only return tasks in this status
            limit: Maximum number of tasks to return

        Returns:
            List[Task]: Owned tasks
        """
        pass

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get one owned task. Raises NotFoundError otherwise."""
        pass

    @abstractmethod
    async def create(self, title: str, description: str = "") -> Task:
        """Create a PENDING task owned by the current user."""
        pass

    @abstractmethod
    async def update(
        self, task_id: str, updates: Union[TaskUpdate, Mapping[str, Any]]
    ) -> Task:
        """Merge updates over an owned task. Raises NotFoundError otherwise."""
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Remove an owned task. Missing or foreign ids are ignored."""
        pass

    @abstractmethod
    async def get_statistics(self) -> TaskStatistics:
        """Count the current user's tasks by status."""
        pass
