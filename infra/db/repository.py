from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain import DependencyType, Task, TaskId
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import TaskRepository
from infra.db.mapper import task_from_orm, task_to_orm
from infra.db.models import TaskDependencyORM, TaskORM


def _as_row_id(task_id: TaskId) -> int:
    if isinstance(task_id, int):
        return task_id
    if isinstance(task_id, str) and task_id.strip().isdigit():
        return int(task_id)
    raise ValidationError(f"Stored tasks use integer ids, got {task_id!r}.", code="TASK_ID_INVALID")


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project_id: str, task: Task) -> Task:
        obj = task_to_orm(project_id, task)
        self.session.add(obj)
        self.session.flush()
        for dep in task.dependencies:
            self.session.add(
                TaskDependencyORM(
                    task_id=obj.id,
                    depends_on_task_id=_as_row_id(dep.depends_on_task_id),
                    type=dep.type,
                )
            )
        self.session.flush()
        return self._load(obj)

    def add_dependency(
        self,
        task_id: TaskId,
        depends_on_task_id: TaskId,
        dependency_type: DependencyType = DependencyType.BLOCKS,
    ) -> None:
        obj = self._require(task_id)
        self.session.add(
            TaskDependencyORM(
                task_id=obj.id,
                depends_on_task_id=_as_row_id(depends_on_task_id),
                type=dependency_type,
            )
        )
        self.session.flush()

    def get(self, task_id: TaskId) -> Optional[Task]:
        obj = self.session.get(TaskORM, _as_row_id(task_id))
        return self._load(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = select(TaskORM).where(TaskORM.project_id == project_id).order_by(TaskORM.id)
        rows = self.session.execute(stmt).scalars().all()
        if not rows:
            return []

        dep_stmt = (
            select(TaskDependencyORM)
            .where(TaskDependencyORM.task_id.in_([row.id for row in rows]))
            .order_by(TaskDependencyORM.id)
        )
        deps_by_task: Dict[int, List[TaskDependencyORM]] = {}
        for dep in self.session.execute(dep_stmt).scalars().all():
            deps_by_task.setdefault(dep.task_id, []).append(dep)

        return [task_from_orm(row, deps_by_task.get(row.id, [])) for row in rows]

    def update_dates(self, task_id: TaskId, start_date: Optional[date], due_date: Optional[date]) -> Task:
        obj = self._require(task_id)
        obj.start_date = start_date
        obj.due_date = due_date
        self.session.flush()
        return self._load(obj)

    def update_progress(self, task_id: TaskId, progress: float) -> Task:
        obj = self._require(task_id)
        obj.progress = float(progress)
        self.session.flush()
        return self._load(obj)

    def _require(self, task_id: TaskId) -> TaskORM:
        obj = self.session.get(TaskORM, _as_row_id(task_id))
        if obj is None:
            raise NotFoundError(f"Task {task_id!r} not found.")
        return obj

    def _load(self, obj: TaskORM) -> Task:
        stmt = (
            select(TaskDependencyORM)
            .where(TaskDependencyORM.task_id == obj.id)
            .order_by(TaskDependencyORM.id)
        )
        deps = self.session.execute(stmt).scalars().all()
        return task_from_orm(obj, deps)


__all__ = ["SqlAlchemyTaskRepository"]
