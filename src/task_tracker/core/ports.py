# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the transport layer.

HTTP handlers depend on this Protocol instead of the concrete TaskStore,
which keeps the store swappable and makes handler tests easy to fake.
"""

from typing import Protocol

from ..tasks.task_models import CompletionOutcome, DependencyValidationResult, Task


class TaskRepo(Protocol):
    # CRUD
    def add_task(self, task: Task) -> bool: ...
    def get_task(self, task_id: int) -> Task | None: ...
    def list_tasks(self) -> list[Task]: ...
    def update_task(self, task_id: int, task: Task) -> Task | None: ...
    def delete_task(self, task_id: int) -> bool: ...
    def count_tasks(self) -> int: ...

    # Dependency graph
    def validate_dependencies(self, task: Task) -> DependencyValidationResult: ...

    # Completion protocol
    def can_complete(self, task_id: int) -> bool: ...
    def try_complete_task(self, task_id: int) -> CompletionOutcome: ...
    def complete_task(self, task_id: int) -> bool: ...
