# src/task_tracker/tasks/task_api.py

from __future__ import annotations

from datetime import UTC, datetime

from .task_models import CompletionOutcome, DependencyValidationResult, Task

DEFAULT_MAX_TITLE_LENGTH = 100

DEPENDENCY_MESSAGES: dict[DependencyValidationResult, str] = {
    DependencyValidationResult.CIRCULAR_DEPENDENCY: "Circular dependency detected.",
    DependencyValidationResult.MISSING_TASK: "A dependent task is missing.",
}

COMPLETION_MESSAGES: dict[CompletionOutcome, str] = {
    CompletionOutcome.NOT_FOUND: "Task not found.",
    CompletionOutcome.ALREADY_COMPLETED: "Task is already completed.",
    CompletionOutcome.DEPENDENCIES_INCOMPLETE: "Cannot complete task. Dependencies are incomplete.",
}


def _now_like(value: datetime) -> datetime:
    # Naive timestamps are compared against local time, aware ones against UTC.
    if value.tzinfo is None:
        return datetime.now()
    return datetime.now(UTC)


def check_task_input(
    task: Task,
    *,
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
    now: datetime | None = None,
) -> str | None:
    """
    Shape checks a transport runs before touching the store.

    Returns a human-readable error, or None if the task is acceptable.
    Dependency graph problems are not checked here (see TaskStore.validate_dependencies).
    """
    if task.id < 0:
        return "Invalid Task ID: Task ID must not be negative."

    title = task.title or ""
    if not title.strip():
        return "Invalid Title: title is required."
    if len(title) > max_title_length:
        return f"Invalid Title: title must be at most {max_title_length} characters."

    if now is None:
        now = _now_like(task.due_date)
    if task.due_date < now:
        return "Due date cannot be in the past."

    if task.depends_on(task.id):
        return "Task cannot depend on itself."

    return None


def dependency_error_message(result: DependencyValidationResult) -> str | None:
    """None for NO_ISSUES, otherwise the message to report back."""
    return DEPENDENCY_MESSAGES.get(result)


def completion_error_message(outcome: CompletionOutcome) -> str | None:
    """None for COMPLETED, otherwise the message to report back."""
    return COMPLETION_MESSAGES.get(outcome)
