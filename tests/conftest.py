# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from task_tracker.api.app import create_app
from task_tracker.core.state import AppState
from task_tracker.tasks.task_models import Task
from task_tracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and create_app.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        host="127.0.0.1",
        port=8000,
        api_prefix="",
        docs_enabled=True,
        max_title_length=100,
        lock_stripes=8,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(lock_stripes=settings.lock_stripes)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def client(state: AppState) -> Iterator[TestClient]:
    with TestClient(create_app(state)) as c:
        yield c


def future(days: int = 5) -> datetime:
    return datetime.now() + timedelta(days=days)


def make_task(task_id: int, deps: list[int] | None = None, *, completed: bool = False, title: str | None = None) -> Task:
    return Task(
        id=task_id,
        title=title if title is not None else f"Task {task_id}",
        due_date=future(),
        is_completed=completed,
        dependencies=list(deps or []),
    )
