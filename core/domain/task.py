from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.domain.enums import DependencyType, TaskPriority, TaskStatus
from core.domain.identifiers import TaskId


@dataclass(frozen=True)
class AssignedUser:
    id: int
    name: str = ""


@dataclass(frozen=True)
class TaskDependency:
    depends_on_task_id: TaskId
    type: DependencyType = DependencyType.BLOCKS

    @property
    def is_blocking(self) -> bool:
        return self.type == DependencyType.BLOCKS


@dataclass(frozen=True)
class Task:
    """
    Read-only task record as seen by the scheduler.

    Instances are produced by the boundary adapter (or the persistence
    mapper) and never mutated afterwards; edits produce a new Task via
    ``dataclasses.replace``.
    """

    id: TaskId
    title: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.NORMAL
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    dependencies: tuple[TaskDependency, ...] = field(default_factory=tuple)
    assigned_to: Optional[AssignedUser] = None
    description: str = ""
    progress: Optional[float] = None

    @property
    def blocking_dependency_ids(self) -> tuple[TaskId, ...]:
        return tuple(dep.depends_on_task_id for dep in self.dependencies if dep.is_blocking)

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None and self.due_date is not None

    @staticmethod
    def create(
        task_id: TaskId,
        title: str = "",
        depends_on: tuple[TaskId, ...] | list[TaskId] = (),
        **extra,
    ) -> "Task":
        return Task(
            id=task_id,
            title=title,
            dependencies=tuple(TaskDependency(dep_id) for dep_id in depends_on),
            **extra,
        )


__all__ = ["AssignedUser", "TaskDependency", "Task"]
