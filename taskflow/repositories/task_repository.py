"""
Task repository: the full task collection as one JSON blob.

There is no partial-update primitive; callers read the whole list, change
it and write it back.
"""

from typing import List

from taskflow.core.logger import logger
from taskflow.domain.entities import Task
from taskflow.ports.repository import TaskRepositoryPort
from taskflow.repositories.codec import JsonBlobCodec, ReadResult
from taskflow.repositories.models import TASKS_KEY, TaskDocument


def _parse_task(data) -> Task:
    return TaskDocument.model_validate(data).to_entity()


class TaskRepository(TaskRepositoryPort):
    """Repository for the task collection."""

    def __init__(self, codec: JsonBlobCodec):
        self.codec = codec

    def load(self) -> ReadResult[List[Task]]:
        return self.codec.read_collection(TASKS_KEY, _parse_task)

    def get_all(self) -> List[Task]:
        return self.load().value

    def save_all(self, tasks: List[Task]) -> None:
        self.codec.write_collection(
            TASKS_KEY, [TaskDocument.from_entity(t).to_dict() for t in tasks], _parse_task
        )
        logger.debug(f"Saved task collection: {len(tasks)} tasks")
