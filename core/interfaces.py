# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.domain import DependencyType, Task, TaskId


class TaskRepository(ABC):
    """Persistence collaborator for task records and their dependencies."""

    @abstractmethod
    def add(self, project_id: str, task: Task) -> Task: ...

    @abstractmethod
    def add_dependency(
        self,
        task_id: TaskId,
        depends_on_task_id: TaskId,
        dependency_type: DependencyType = DependencyType.BLOCKS,
    ) -> None: ...

    @abstractmethod
    def get(self, task_id: TaskId) -> Optional[Task]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Task]: ...

    @abstractmethod
    def update_dates(self, task_id: TaskId, start_date: Optional[date], due_date: Optional[date]) -> Task: ...

    @abstractmethod
    def update_progress(self, task_id: TaskId, progress: float) -> Task: ...


__all__ = ["TaskRepository"]
