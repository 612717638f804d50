import json
from datetime import datetime, timezone

from taskflow.domain.entities import Task, TaskStatus


def _task(task_id, user_id="u-1"):
    now = datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)
    return Task(
        id=task_id,
        user_id=user_id,
        title=f"Task {task_id}",
        created_at=now,
        updated_at=now,
    )


def test_get_all_empty_when_absent(task_repo):
    assert task_repo.get_all() == []


def test_save_all_overwrites_collection(task_repo):
    task_repo.save_all([_task("a"), _task("b")])
    task_repo.save_all([_task("c")])

    assert [t.id for t in task_repo.get_all()] == ["c"]


def test_roundtrip_preserves_fields(task_repo):
    original = _task("a")
    original.status = TaskStatus.IN_PROGRESS
    original.description = "details"

    task_repo.save_all([original])

    assert task_repo.get_all() == [original]


def test_persisted_layout_uses_camel_case(storage, task_repo):
    task_repo.save_all([_task("a")])

    stored = json.loads(storage.get_item("tasks"))[0]

    assert stored["userId"] == "u-1"
    assert stored["status"] == "PENDING"
    assert {"createdAt", "updatedAt"} <= set(stored)


def test_reads_records_written_by_the_browser_client(storage, task_repo):
    storage.set_item(
        "tasks",
        json.dumps(
            [
                {
                    "id": "t1",
                    "userId": "demo-user-id",
                    "title": "Buy milk",
                    "description": "",
                    "status": "COMPLETED",
                    "createdAt": "2024-02-01T08:00:00.000Z",
                    "updatedAt": "2024-02-02T08:00:00.000Z",
                }
            ]
        ),
    )

    (task,) = task_repo.get_all()
    assert task.status is TaskStatus.COMPLETED
    assert task.updated_at > task.created_at


def test_unparsable_collection_degrades_to_empty(storage, task_repo):
    storage.set_item("tasks", '[{"id": "t1"}]')

    result = task_repo.load()

    assert result.value == []
    assert result.degraded
    assert task_repo.get_all() == []


def test_naive_timestamps_are_read_as_utc(storage, task_repo):
    storage.set_item(
        "tasks",
        json.dumps(
            [
                {
                    "id": "legacy",
                    "userId": "u-1",
                    "title": "Old task",
                    "createdAt": "2023-01-01T00:00:00",
                    "updatedAt": "2023-01-01T00:00:00",
                }
            ]
        ),
    )

    (task,) = task_repo.get_all()

    assert task.created_at == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert task.updated_at.tzinfo is timezone.utc


def test_off_schema_record_is_skipped_and_kept_on_save(storage, task_repo):
    foreign = {
        "id": "t-foreign",
        "userId": "u-1",
        "title": "Archived elsewhere",
        "status": "ARCHIVED",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }
    task_repo.save_all([_task("a")])
    stored = json.loads(storage.get_item("tasks"))
    storage.set_item("tasks", json.dumps(stored + [foreign]))

    result = task_repo.load()
    assert [t.id for t in result.value] == ["a"]
    assert result.degraded
    assert result.skipped == (foreign,)

    task_repo.save_all(result.value + [_task("b")])

    assert [r["id"] for r in json.loads(storage.get_item("tasks"))] == ["a", "b", "t-foreign"]
