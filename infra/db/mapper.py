from __future__ import annotations

from typing import Iterable

from core.domain import AssignedUser, Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM


def task_to_orm(project_id: str, task: Task) -> TaskORM:
    obj = TaskORM(
        project_id=project_id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        start_date=task.start_date,
        due_date=task.due_date,
        estimated_hours=task.estimated_hours,
        progress=task.progress,
        assignee_id=task.assigned_to.id if task.assigned_to else None,
        assignee_name=task.assigned_to.name if task.assigned_to else None,
    )
    if isinstance(task.id, int):
        obj.id = task.id
    return obj


def task_from_orm(obj: TaskORM, dependencies: Iterable[TaskDependencyORM] = ()) -> Task:
    assigned = None
    if obj.assignee_id is not None:
        assigned = AssignedUser(id=obj.assignee_id, name=obj.assignee_name or "")
    return Task(
        id=obj.id,
        title=obj.title,
        description=obj.description or "",
        status=obj.status,
        priority=obj.priority,
        start_date=obj.start_date,
        due_date=obj.due_date,
        estimated_hours=obj.estimated_hours,
        progress=obj.progress,
        assigned_to=assigned,
        dependencies=tuple(dependency_from_orm(dep) for dep in dependencies),
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(depends_on_task_id=obj.depends_on_task_id, type=obj.type)


__all__ = ["task_to_orm", "task_from_orm", "dependency_from_orm"]
