import json
from datetime import datetime, timezone

import pytest

from taskflow.domain.entities import TaskStatus
from taskflow.domain.errors import InvalidInputError, NotFoundError, UnauthorizedError
from taskflow.services import TaskService
from taskflow.services.schemas import TaskUpdate


async def _login_as(auth_service, name):
    return await auth_service.register(name, f"{name.lower()}@example.com", "pw")


@pytest.mark.asyncio
async def test_every_operation_requires_session(task_service):
    with pytest.raises(UnauthorizedError):
        await task_service.list()
    with pytest.raises(UnauthorizedError):
        await task_service.create("A")
    with pytest.raises(UnauthorizedError):
        await task_service.update("x", {"status": "COMPLETED"})
    with pytest.raises(UnauthorizedError):
        await task_service.delete("x")
    with pytest.raises(UnauthorizedError):
        await task_service.get("x")
    with pytest.raises(UnauthorizedError):
        await task_service.get_statistics()


@pytest.mark.asyncio
async def test_create_then_list(auth_service, task_service):
    session = await _login_as(auth_service, "Alice")

    created = await task_service.create(title="A", description="")
    tasks = await task_service.list()

    assert len(tasks) == 1
    (task,) = tasks
    assert task == created
    assert task.title == "A"
    assert task.description == ""
    assert task.status is TaskStatus.PENDING
    assert task.created_at == task.updated_at
    assert task.user_id == session.profile.id


@pytest.mark.asyncio
async def test_create_rejects_blank_title(auth_service, task_service, task_repo):
    await _login_as(auth_service, "Alice")

    with pytest.raises(InvalidInputError):
        await task_service.create("   ", "desc")

    assert task_repo.get_all() == []


@pytest.mark.asyncio
async def test_update_status_changes_only_status_and_updated_at(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    before = await task_service.create("Write report", "quarterly")

    after = await task_service.update(before.id, {"status": TaskStatus.COMPLETED})

    assert after.status is TaskStatus.COMPLETED
    assert after.updated_at > before.updated_at
    assert (after.id, after.user_id, after.title, after.description, after.created_at) == (
        before.id,
        before.user_id,
        before.title,
        before.description,
        before.created_at,
    )
    assert (await task_service.get(before.id)) == after


@pytest.mark.asyncio
async def test_update_merges_partial_fields(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    task = await task_service.create("Old", "keep me")

    updated = await task_service.update(task.id, TaskUpdate(title="New"))

    assert updated.title == "New"
    assert updated.description == "keep me"
    assert updated.status is TaskStatus.PENDING


@pytest.mark.asyncio
async def test_update_never_overwrites_identity_fields(auth_service, task_service):
    session = await _login_as(auth_service, "Alice")
    task = await task_service.create("A")

    updated = await task_service.update(
        task.id, {"id": "other", "userId": "someone", "user_id": "someone", "title": "B"}
    )

    assert updated.id == task.id
    assert updated.user_id == session.profile.id


@pytest.mark.asyncio
async def test_update_rejects_unknown_status(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    task = await task_service.create("A")

    with pytest.raises(InvalidInputError):
        await task_service.update(task.id, {"status": "ARCHIVED"})


@pytest.mark.asyncio
async def test_updated_at_strictly_increases_even_with_a_frozen_clock(
    auth_service, task_repo, sessions, credentials
):
    await _login_as(auth_service, "Alice")
    frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
    service = TaskService(task_repo, sessions, credentials, network_delay=0, clock=lambda: frozen)

    task = await service.create("A")
    first = await service.update(task.id, {"status": "IN_PROGRESS"})
    second = await service.update(task.id, {"status": "COMPLETED"})

    assert task.created_at == task.updated_at == frozen
    assert task.updated_at < first.updated_at < second.updated_at


@pytest.mark.asyncio
async def test_update_missing_task(auth_service, task_service):
    await _login_as(auth_service, "Alice")

    with pytest.raises(NotFoundError):
        await task_service.update("nope", {"title": "x"})


@pytest.mark.asyncio
async def test_list_orders_newest_first(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    t1 = await task_service.create("first")
    t2 = await task_service.create("second")
    t3 = await task_service.create("third")

    assert [t.id for t in await task_service.list()] == [t3.id, t2.id, t1.id]


@pytest.mark.asyncio
async def test_list_ties_on_created_at_put_later_inserts_first(
    auth_service, task_repo, sessions, credentials
):
    await _login_as(auth_service, "Alice")
    frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
    service = TaskService(task_repo, sessions, credentials, network_delay=0, clock=lambda: frozen)

    a = await service.create("a")
    b = await service.create("b")

    assert [t.id for t in await service.list()] == [b.id, a.id]


@pytest.mark.asyncio
async def test_list_search_status_and_limit(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    milk = await task_service.create("Buy milk", "")
    await task_service.create("Call mom", "about the MILK delivery")
    await task_service.create("Taxes", "file them")
    await task_service.update(milk.id, {"status": "COMPLETED"})

    assert [t.title for t in await task_service.list(search="milk")] == ["Call mom", "Buy milk"]
    assert [t.title for t in await task_service.list(status=TaskStatus.COMPLETED)] == ["Buy milk"]
    assert [t.title for t in await task_service.list(limit=2)] == ["Taxes", "Call mom"]
    assert await task_service.list(search="milk", status="PENDING", limit=5) == [
        (await task_service.list(search="mom"))[0]
    ]


@pytest.mark.asyncio
async def test_delete_removes_owned_task(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    keep = await task_service.create("keep")
    drop = await task_service.create("drop")

    await task_service.delete(drop.id)

    assert [t.id for t in await task_service.list()] == [keep.id]
    with pytest.raises(NotFoundError):
        await task_service.get(drop.id)


@pytest.mark.asyncio
async def test_delete_missing_or_foreign_id_is_silent(auth_service, task_service, task_repo):
    await _login_as(auth_service, "Bob")
    bobs = await task_service.create("bob's task")
    await auth_service.logout()

    await _login_as(auth_service, "Alice")
    alices = await task_service.create("alice's task")
    before = await task_service.list()

    await task_service.delete("does-not-exist")
    await task_service.delete(bobs.id)

    assert await task_service.list() == before == [alices]
    assert bobs.id in {t.id for t in task_repo.get_all()}


@pytest.mark.asyncio
async def test_cross_user_isolation(auth_service, task_service, task_repo):
    await _login_as(auth_service, "Alice")
    alice_task = await task_service.create("secret plan")
    await auth_service.logout()

    await _login_as(auth_service, "Bob")

    assert await task_service.list() == []
    assert await task_service.list(search="secret") == []
    with pytest.raises(NotFoundError):
        await task_service.get(alice_task.id)
    with pytest.raises(NotFoundError):
        await task_service.update(alice_task.id, {"title": "mine now"})

    assert [t.title for t in task_repo.get_all()] == ["secret plan"]


@pytest.mark.asyncio
async def test_session_for_unknown_user_is_unauthorized(auth_service, task_service, storage):
    await _login_as(auth_service, "Alice")
    await task_service.create("A")
    storage.remove_item("users")

    with pytest.raises(UnauthorizedError):
        await task_service.list()


@pytest.mark.asyncio
async def test_corrupt_task_collection_lists_empty(auth_service, task_service, storage):
    await _login_as(auth_service, "Alice")
    storage.set_item("tasks", "{{{")

    assert await task_service.list() == []

    created = await task_service.create("fresh start")
    assert await task_service.list() == [created]


@pytest.mark.asyncio
async def test_statistics(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    a = await task_service.create("a")
    b = await task_service.create("b")
    await task_service.create("c")
    await task_service.update(a.id, {"status": "COMPLETED"})
    await task_service.update(b.id, {"status": "IN_PROGRESS"})

    stats = await task_service.get_statistics()

    assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (3, 1, 1, 1)


@pytest.mark.asyncio
async def test_list_rejects_unknown_status(auth_service, task_service):
    await _login_as(auth_service, "Alice")
    await task_service.create("A")

    with pytest.raises(InvalidInputError):
        await task_service.list(status="ARCHIVED")


@pytest.mark.asyncio
async def test_tasks_with_naive_timestamps_list_and_update(auth_service, task_service, storage):
    session = await _login_as(auth_service, "Alice")
    fresh = await task_service.create("fresh")
    stored = json.loads(storage.get_item("tasks"))
    stored.append(
        {
            "id": "legacy",
            "userId": session.profile.id,
            "title": "Imported",
            "description": "",
            "status": "PENDING",
            "createdAt": "2023-01-01T00:00:00",
            "updatedAt": "2023-01-01T00:00:00",
        }
    )
    storage.set_item("tasks", json.dumps(stored))

    assert [t.id for t in await task_service.list()] == [fresh.id, "legacy"]

    updated = await task_service.update("legacy", {"status": "COMPLETED"})

    assert updated.status is TaskStatus.COMPLETED
    assert updated.created_at == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert updated.updated_at > updated.created_at


@pytest.mark.asyncio
async def test_unreadable_record_survives_later_writes(auth_service, task_service, storage):
    session = await _login_as(auth_service, "Alice")
    kept = await task_service.create("keep me")
    foreign = {
        "id": "foreign",
        "userId": session.profile.id,
        "title": "From a newer client",
        "status": "ARCHIVED",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }
    storage.set_item("tasks", json.dumps(json.loads(storage.get_item("tasks")) + [foreign]))

    another = await task_service.create("another")

    assert [t.id for t in await task_service.list()] == [another.id, kept.id]
    stored_ids = {r["id"] for r in json.loads(storage.get_item("tasks"))}
    assert stored_ids == {kept.id, another.id, "foreign"}
