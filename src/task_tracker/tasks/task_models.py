# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum


class DependencyValidationResult(StrEnum):
    """Outcome of walking a task's dependency graph."""

    NO_ISSUES = "no_issues"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    MISSING_TASK = "missing_task"


class CompletionOutcome(StrEnum):
    """
    Why a completion attempt did (or did not) mark the task done.

    TaskStore.complete_task() folds this into a bool; transports that want
    to tell "not found" from "blocked" use try_complete_task() instead.
    """

    COMPLETED = "completed"
    NOT_FOUND = "not_found"
    ALREADY_COMPLETED = "already_completed"
    DEPENDENCIES_INCOMPLETE = "dependencies_incomplete"


@dataclass(frozen=True, slots=True)
class Task:
    """
    Immutable task record.

    The store replaces whole records instead of mutating fields, so a reader
    never observes a half-applied update. `dependencies` is always a tuple:
    a caller's list is copied in and later edits to it do not leak into the store.
    """

    id: int
    title: str
    due_date: datetime
    is_completed: bool = False
    dependencies: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(int(d) for d in self.dependencies))

    def depends_on(self, task_id: int) -> bool:
        return task_id in self.dependencies

    def mark_completed(self) -> Task:
        return replace(self, is_completed=True)
