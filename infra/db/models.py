# infra/db/models.py
from __future__ import annotations
from datetime import date
from typing import Optional

from sqlalchemy import (
    Date,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from core.domain import DependencyType, TaskPriority, TaskStatus
from infra.db.base import Base


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.TODO, nullable=False
    )
    priority: Mapped[TaskPriority] = mapped_column(
        SAEnum(TaskPriority), default=TaskPriority.NORMAL, nullable=False
    )
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    progress: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    assignee_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    assignee_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
Index("idx_tasks_project_id", TaskORM.project_id)


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    )
    # No foreign key: imported data may reference tasks that no longer exist.
    depends_on_task_id: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[DependencyType] = mapped_column(
        SAEnum(DependencyType), default=DependencyType.BLOCKS, nullable=False
    )
Index("idx_dep_task", TaskDependencyORM.task_id)
Index("idx_dep_depends_on", TaskDependencyORM.depends_on_task_id)
