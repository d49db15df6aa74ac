"""Request/response models for the tasks API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..tasks.task_models import Task


class TaskUpdateRequest(BaseModel):
    """Full replacement of a task's mutable fields (PUT /tasks/{id})."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    due_date: datetime = Field(alias="dueDate")
    is_completed: bool = Field(default=False, alias="isCompleted")
    dependencies: list[int] = Field(default_factory=list)

    def to_task(self, task_id: int) -> Task:
        return Task(
            id=task_id,
            title=self.title,
            due_date=self.due_date,
            is_completed=self.is_completed,
            dependencies=self.dependencies,
        )


class TaskCreateRequest(TaskUpdateRequest):
    """New task (POST /tasks). The id is chosen by the caller."""

    id: int


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    due_date: datetime = Field(alias="dueDate")
    is_completed: bool = Field(alias="isCompleted")
    dependencies: list[int]

    @classmethod
    def from_task(cls, task: Task) -> TaskResponse:
        return cls(
            id=task.id,
            title=task.title,
            due_date=task.due_date,
            is_completed=task.is_completed,
            dependencies=list(task.dependencies),
        )


class HealthResponse(BaseModel):
    status: str
    tasks: int
