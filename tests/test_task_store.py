# tests/test_task_store.py

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from task_tracker.tasks.task_store import TaskStore

from .conftest import make_task


def test_add_get_list_delete(store: TaskStore) -> None:
    assert store.add_task(make_task(1, title="Test Task"))
    assert store.add_task(make_task(2, [1]))

    task = store.get_task(1)
    assert task is not None
    assert task.title == "Test Task"
    assert task.is_completed is False
    assert store.count_tasks() == 2
    assert {t.id for t in store.list_tasks()} == {1, 2}

    assert store.delete_task(1)
    assert store.get_task(1) is None
    assert not store.delete_task(1)
    assert store.count_tasks() == 1


def test_duplicate_add_keeps_existing_record(store: TaskStore) -> None:
    assert store.add_task(make_task(1, title="first"))
    assert not store.add_task(make_task(1, title="second"))

    task = store.get_task(1)
    assert task is not None
    assert task.title == "first"


def test_get_missing_returns_none(store: TaskStore) -> None:
    assert store.get_task(42) is None
    assert store.list_tasks() == []


def test_dependencies_are_copied_in(store: TaskStore) -> None:
    deps = [2, 3]
    store.add_task(make_task(1, deps))
    deps.append(4)

    task = store.get_task(1)
    assert task is not None
    assert task.dependencies == (2, 3)


def test_list_is_a_snapshot(store: TaskStore) -> None:
    store.add_task(make_task(1))
    snapshot = store.list_tasks()
    store.add_task(make_task(2))
    store.delete_task(1)

    assert [t.id for t in snapshot] == [1]
    assert [t.id for t in store.list_tasks()] == [2]


def test_update_replaces_fields(store: TaskStore) -> None:
    store.add_task(make_task(1))
    store.add_task(make_task(2))
    before = store.get_task(1)

    updated = store.update_task(1, make_task(1, [2], title="renamed"))
    assert updated is not None
    assert updated.title == "renamed"
    assert updated.dependencies == (2,)
    assert store.get_task(1) == updated
    # Old references stay untouched: records are replaced, not mutated.
    assert before is not None and before.title == "Task 1"


def test_update_missing_returns_none(store: TaskStore) -> None:
    assert store.update_task(7, make_task(7)) is None
    assert store.get_task(7) is None


def test_update_uses_path_id(store: TaskStore) -> None:
    store.add_task(make_task(1))
    updated = store.update_task(1, make_task(99, title="other id"))
    assert updated is not None
    assert updated.id == 1
    assert store.get_task(99) is None


def test_update_never_resets_completion(store: TaskStore) -> None:
    store.add_task(make_task(1))
    assert store.complete_task(1)

    updated = store.update_task(1, make_task(1, completed=False, title="still done"))
    assert updated is not None
    assert updated.is_completed is True
    assert updated.title == "still done"


def test_update_completion_is_gated_by_dependencies(store: TaskStore) -> None:
    store.add_task(make_task(1, [2]))
    store.add_task(make_task(2))

    blocked = store.update_task(1, make_task(1, [2], completed=True))
    assert blocked is not None
    assert blocked.is_completed is False

    store.complete_task(2)
    allowed = store.update_task(1, make_task(1, [2], completed=True))
    assert allowed is not None
    assert allowed.is_completed is True


def test_concurrent_adds_same_id_single_winner() -> None:
    for _ in range(50):
        store = TaskStore(lock_stripes=4)
        n = 8
        barrier = threading.Barrier(n)

        def add(i: int) -> bool:
            barrier.wait()
            return store.add_task(make_task(1, title=f"writer {i}"))

        with ThreadPoolExecutor(max_workers=n) as pool:
            results = list(pool.map(add, range(n)))

        assert results.count(True) == 1
        assert store.count_tasks() == 1


def test_concurrent_update_and_delete_never_resurrects() -> None:
    for _ in range(100):
        store = TaskStore(lock_stripes=4)
        store.add_task(make_task(1))
        barrier = threading.Barrier(2)

        def update():
            barrier.wait()
            return store.update_task(1, make_task(1, title="updated"))

        def delete():
            barrier.wait()
            return store.delete_task(1)

        with ThreadPoolExecutor(max_workers=2) as pool:
            f_update = pool.submit(update)
            f_delete = pool.submit(delete)
            updated, deleted = f_update.result(), f_delete.result()

        assert deleted is True
        # Whatever the interleaving, the delete wins in the end.
        assert store.get_task(1) is None
        if updated is not None:
            assert updated.title == "updated"


def test_unrelated_ids_spread_over_stripes() -> None:
    store = TaskStore(lock_stripes=16)
    n = 200

    def add(i: int) -> bool:
        return store.add_task(make_task(i))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(add, range(n)))

    assert all(results)
    assert store.count_tasks() == n
