# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from .task_models import CompletionOutcome, DependencyValidationResult, Task

logger = logging.getLogger(__name__)

DEFAULT_LOCK_STRIPES = 64


class TaskStore:
    """
    In-memory task store.

    Records are immutable Task values kept in a dict keyed by id; every
    mutation swaps in a whole new record.

    Thread-safety:
    - per-id operations (add/update/delete/complete) run under one of N stripe
      locks chosen by id, so unrelated tasks do not serialize on each other
    - structural dict changes and snapshots run under a short map lock
    - at most one stripe lock is held at a time (no lock ordering to get wrong)

    Dependencies are read without their stripe lock. is_completed never goes
    back to False, so such a read can only be stale-negative, never a false positive.
    """

    def __init__(self, *, lock_stripes: int = DEFAULT_LOCK_STRIPES) -> None:
        self._tasks: dict[int, Task] = {}
        self._map_lock = threading.Lock()
        self._stripes = tuple(threading.Lock() for _ in range(max(1, int(lock_stripes))))
        logger.info("TaskStore ready stripes=%s", len(self._stripes))

    # ---- low-level helpers ----

    def _stripe(self, task_id: int) -> threading.Lock:
        return self._stripes[hash(task_id) % len(self._stripes)]

    def _lookup(self, task_id: int) -> Task | None:
        with self._map_lock:
            return self._tasks.get(task_id)

    def _put(self, task: Task) -> None:
        with self._map_lock:
            self._tasks[task.id] = task

    def _dependencies_complete(self, task: Task) -> bool:
        for dep_id in task.dependencies:
            dep = self._lookup(dep_id)
            if dep is None or not dep.is_completed:
                return False
        return True

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._map_lock:
            return len(self._tasks)

    def add_task(self, task: Task) -> bool:
        """Insert `task` unless its id is taken. Returns False on duplicate id."""
        with self._stripe(task.id):
            if self._lookup(task.id) is not None:
                logger.debug("Task add rejected id=%s (duplicate)", task.id)
                return False
            self._put(task)
        logger.debug("Task added id=%s deps=%s", task.id, list(task.dependencies))
        return True

    def get_task(self, task_id: int) -> Task | None:
        return self._lookup(task_id)

    def list_tasks(self) -> list[Task]:
        """Point-in-time snapshot of all tasks, in no particular order."""
        with self._map_lock:
            return list(self._tasks.values())

    def update_task(self, task_id: int, task: Task) -> Task | None:
        """
        Replace the record stored under task_id with the fields of `task`.

        Returns the stored record, or None if no such task exists.

        Completion stays monotonic:
          stored completed -> stays completed
          not completed -> completed only if every new dependency is already complete
        """
        with self._stripe(task_id):
            current = self._lookup(task_id)
            if current is None:
                return None

            is_completed = current.is_completed
            if not is_completed and task.is_completed:
                is_completed = self._dependencies_complete(task)
                if not is_completed:
                    logger.debug("Task update id=%s: completion ignored, dependencies incomplete", task_id)

            updated = replace(task, id=task_id, is_completed=is_completed)
            self._put(updated)
        logger.debug("Task updated id=%s completed=%s", task_id, updated.is_completed)
        return updated

    def delete_task(self, task_id: int) -> bool:
        with self._stripe(task_id):
            with self._map_lock:
                removed = self._tasks.pop(task_id, None)
        if removed is None:
            return False
        logger.debug("Task deleted id=%s", task_id)
        return True

    def validate_dependencies(self, task: Task) -> DependencyValidationResult:
        """
        Depth-first walk of the dependency graph reachable from `task`.

        `task` does not have to be stored yet: whenever the walk reaches
        task.id it uses the candidate's own dependency list, everything else
        comes from the store.

        The first problem met in traversal order wins:
        - an id already on the current path -> CIRCULAR_DEPENDENCY
        - an id with no record -> MISSING_TASK

        Uses an explicit stack (deep chains do not hit the recursion limit).
        Nodes whose subtree was fully explored are not walked again.
        """
        if not task.dependencies:
            return DependencyValidationResult.NO_ISSUES

        on_path: set[int] = set()
        explored: set[int] = set()
        # (task_id, leaving): leaving=True pops task_id off the current path.
        stack: list[tuple[int, bool]] = [(task.id, False)]

        while stack:
            task_id, leaving = stack.pop()
            if leaving:
                on_path.discard(task_id)
                explored.add(task_id)
                continue

            if task_id in on_path:
                logger.debug("Circular dependency via id=%s (validating id=%s)", task_id, task.id)
                return DependencyValidationResult.CIRCULAR_DEPENDENCY
            if task_id in explored:
                continue

            record = task if task_id == task.id else self._lookup(task_id)
            if record is None:
                logger.debug("Missing dependency id=%s (validating id=%s)", task_id, task.id)
                return DependencyValidationResult.MISSING_TASK

            on_path.add(task_id)
            stack.append((task_id, True))
            # Reversed so the first listed dependency is visited first.
            for dep_id in reversed(record.dependencies):
                stack.append((dep_id, False))

        return DependencyValidationResult.NO_ISSUES

    def can_complete(self, task_id: int) -> bool:
        task = self._lookup(task_id)
        if task is None or task.is_completed:
            return False
        return self._dependencies_complete(task)

    def try_complete_task(self, task_id: int) -> CompletionOutcome:
        """
        Atomic check-and-set of is_completed for one task.

        The existence check, the dependency check and the write all happen
        under the task's stripe lock, so a concurrent update/delete of the same
        id cannot slip in between them.
        """
        with self._stripe(task_id):
            task = self._lookup(task_id)
            if task is None:
                outcome = CompletionOutcome.NOT_FOUND
            elif task.is_completed:
                outcome = CompletionOutcome.ALREADY_COMPLETED
            elif not self._dependencies_complete(task):
                outcome = CompletionOutcome.DEPENDENCIES_INCOMPLETE
            else:
                self._put(task.mark_completed())
                outcome = CompletionOutcome.COMPLETED

        logger.debug("Task complete id=%s outcome=%s", task_id, outcome.value)
        return outcome

    def complete_task(self, task_id: int) -> bool:
        return self.try_complete_task(task_id) is CompletionOutcome.COMPLETED
