# tests/test_task_controller.py

from __future__ import annotations

import asyncio

import pytest

from tasklog.tasks.task_controller import TaskController
from tasklog.tasks.task_models import Task
from tasklog.tasks.task_store import StorageError

from .fakes import FailingTaskRepo, FakeTaskRepo, RecordingObserver


def _view(tasks) -> list[tuple[str, bool]]:
    return [(t.description, t.is_completed) for t in tasks]


@pytest.mark.asyncio
async def test_buy_milk_scenario(controller: TaskController) -> None:
    observer = RecordingObserver()
    controller.subscribe(observer)

    await controller.add_task("Buy milk")
    assert _view(controller.tasks) == [("Buy milk", False)]

    await controller.toggle_task_completion(controller.tasks[0])
    assert _view(controller.tasks) == [("Buy milk", True)]

    await controller.edit_task(controller.tasks[0], "Buy oat milk")
    assert _view(controller.tasks) == [("Buy oat milk", True)]

    await controller.delete_task(controller.tasks[0])
    assert controller.tasks == ()

    # Initial replay + one full list per mutation.
    assert [_view(r) for r in observer.received] == [
        [],
        [("Buy milk", False)],
        [("Buy milk", True)],
        [("Buy oat milk", True)],
        [],
    ]


@pytest.mark.asyncio
async def test_every_mutation_is_followed_by_a_full_reread() -> None:
    repo = FakeTaskRepo()
    controller = TaskController(repo)

    await controller.add_task("a")
    task = controller.tasks[0]
    await controller.toggle_task_completion(task)
    await controller.edit_task(controller.tasks[0], "b")
    await controller.delete_task(controller.tasks[0])
    await controller.delete_all_tasks()

    assert repo.calls == [
        "insert", "list_all",
        "update", "list_all",
        "update", "list_all",
        "delete_one", "list_all",
        "delete_all", "list_all",
    ]


@pytest.mark.asyncio
async def test_toggle_twice_restores_completion(controller: TaskController) -> None:
    await controller.add_task("walk the dog")
    original = controller.tasks[0]

    await controller.toggle_task_completion(controller.tasks[0])
    await controller.toggle_task_completion(controller.tasks[0])

    assert controller.tasks[0] == original


@pytest.mark.asyncio
async def test_empty_description_is_ignored() -> None:
    repo = FakeTaskRepo()
    controller = TaskController(repo)
    observer = RecordingObserver()
    controller.subscribe(observer, replay=False)

    assert await controller.add_task("") is False

    assert repo.calls == []
    assert observer.received == []


@pytest.mark.asyncio
async def test_whitespace_description_is_added_like_the_ui_allows() -> None:
    # Only the empty string is rejected on add; blank text is the UI's business.
    repo = FakeTaskRepo()
    controller = TaskController(repo)

    assert await controller.add_task("   ") is True
    assert _view(controller.tasks) == [("   ", False)]


@pytest.mark.asyncio
async def test_blank_edit_is_ignored_and_completion_is_preserved() -> None:
    repo = FakeTaskRepo()
    controller = TaskController(repo)
    await controller.add_task("read")
    await controller.toggle_task_completion(controller.tasks[0])
    repo.calls.clear()

    assert await controller.edit_task(controller.tasks[0], "  \t") is False
    assert repo.calls == []

    assert await controller.edit_task(controller.tasks[0], "read a book") is True
    assert _view(controller.tasks) == [("read a book", True)]


@pytest.mark.asyncio
async def test_delete_all_tasks_empties_the_list(controller: TaskController) -> None:
    for text in ("one", "two", "three"):
        await controller.add_task(text)

    await controller.delete_all_tasks()

    assert controller.tasks == ()


@pytest.mark.asyncio
async def test_deleting_an_already_deleted_task_is_harmless(controller: TaskController) -> None:
    await controller.add_task("x")
    task = controller.tasks[0]
    await controller.delete_task(task)

    await controller.delete_task(task)

    assert controller.tasks == ()


@pytest.mark.asyncio
async def test_refresh_loads_existing_rows() -> None:
    repo = FakeTaskRepo()
    await repo.insert("already there")
    controller = TaskController(repo)
    assert controller.tasks == ()

    tasks = await controller.refresh()

    assert _view(tasks) == [("already there", False)]
    assert controller.tasks == tasks


@pytest.mark.asyncio
async def test_storage_errors_propagate_without_republishing() -> None:
    repo = FailingTaskRepo()
    controller = TaskController(repo)
    observer = RecordingObserver()
    controller.subscribe(observer, replay=False)
    task = Task(id=1, description="x")

    with pytest.raises(StorageError):
        await controller.add_task("x")
    with pytest.raises(StorageError):
        await controller.toggle_task_completion(task)
    with pytest.raises(StorageError):
        await controller.edit_task(task, "y")
    with pytest.raises(StorageError):
        await controller.delete_task(task)
    with pytest.raises(StorageError):
        await controller.delete_all_tasks()

    assert "list_all" not in repo.calls
    assert observer.received == []


@pytest.mark.asyncio
async def test_editing_a_vanished_task_raises_storage_error(controller: TaskController) -> None:
    await controller.add_task("temp")
    stale = controller.tasks[0]
    await controller.delete_all_tasks()

    with pytest.raises(StorageError):
        await controller.edit_task(stale, "new text")


@pytest.mark.asyncio
async def test_overlapping_mutations_are_serialized() -> None:
    repo = FakeTaskRepo(delay=0.01)
    controller = TaskController(repo)

    await asyncio.gather(
        controller.add_task("a"),
        controller.add_task("b"),
        controller.delete_all_tasks(),
        controller.add_task("c"),
    )

    # Each store call is immediately followed by its own refresh.
    assert repo.calls == [
        "insert", "list_all",
        "insert", "list_all",
        "delete_all", "list_all",
        "insert", "list_all",
    ]
    assert _view(controller.tasks) == [("c", False)]


@pytest.mark.asyncio
async def test_unsubscribed_observer_stops_receiving(controller: TaskController) -> None:
    observer = RecordingObserver()
    unsubscribe = controller.subscribe(observer, replay=False)

    await controller.add_task("first")
    unsubscribe()
    await controller.add_task("second")

    assert len(observer.received) == 1
    assert _view(observer.last) == [("first", False)]
