from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from threading import RLock
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from core.domain import Task, TaskId
from core.events.signal import Signal
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import TaskRepository
from core.services.common.base import ServiceBase
from core.services.gantt.advice import DatasetAdvice, advise_for_dataset
from core.services.gantt.filters import GanttFilters
from core.services.gantt.mapper import GanttBar, map_tasks_to_bars
from core.services.scheduling import (
    ScheduleOutcome,
    ScheduleSummary,
    SchedulingEngine,
    summarize,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GanttView:
    generation: int
    visible_tasks: tuple[Task, ...]
    bars: tuple[GanttBar, ...]
    outcome: ScheduleOutcome
    summary: ScheduleSummary
    advice: DatasetAdvice

    @property
    def unscheduled(self) -> tuple[Task, ...]:
        return self.outcome.unscheduled

    @property
    def cycle_message(self) -> Optional[str]:
        if not self.outcome.cycles:
            return None
        titles = {task.id: (task.title or str(task.id)) for task in self.visible_tasks}
        groups = [
            ", ".join(titles.get(task_id, str(task_id)) for task_id in group)
            for group in self.outcome.cycles
        ]
        return "Dependency cycle detected between: " + "; ".join(groups)


@dataclass(frozen=True)
class ComputeRequest:
    generation: int
    tasks: tuple[Task, ...]
    filters: GanttFilters


class GanttScheduleService(ServiceBase):
    """
    Presentation adapter around the scheduling engine.

    Keeps the locally held task list and active filters, recomputes the
    whole schedule on every change and publishes the resulting view.
    Each computation carries a generation number; a result older than
    the last published one is discarded, never merged.
    """

    def __init__(
        self,
        engine: SchedulingEngine,
        task_repo: Optional[TaskRepository] = None,
        session: Optional[Session] = None,
        *,
        large_dataset_threshold: int = 100,
        high_optimization_threshold: int = 500,
    ):
        super().__init__(session)
        self._engine: SchedulingEngine = engine
        self._task_repo: Optional[TaskRepository] = task_repo
        self._large_threshold = large_dataset_threshold
        self._high_threshold = high_optimization_threshold

        self._lock = RLock()
        self._project_id: Optional[str] = None
        self._tasks: tuple[Task, ...] = ()
        self._filters: GanttFilters = GanttFilters()
        self._generation = 0
        self._published_generation = 0
        self._latest_view: Optional[GanttView] = None

        self.view_changed: Signal[GanttView] = Signal()

    # ------------------------------------------------------------------ state

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def filters(self) -> GanttFilters:
        return self._filters

    @property
    def latest_view(self) -> Optional[GanttView]:
        return self._latest_view

    def load_project(self, project_id: str) -> GanttView:
        repo = self._require_repo()
        tasks = repo.list_by_project(project_id)
        with self._lock:
            self._project_id = project_id
        return self.set_tasks(tasks)

    def set_tasks(self, tasks: Iterable[Task]) -> GanttView:
        with self._lock:
            self._tasks = tuple(tasks)
        return self.recompute()

    def set_filters(self, filters: GanttFilters) -> GanttView:
        with self._lock:
            self._filters = filters
        return self.recompute()

    def clear_filters(self) -> GanttView:
        return self.set_filters(GanttFilters())

    # ------------------------------------------------------------ computation

    def begin_computation(self) -> ComputeRequest:
        """Snapshot the current input under a fresh generation number."""
        with self._lock:
            self._generation += 1
            return ComputeRequest(self._generation, self._tasks, self._filters)

    def compute(self, request: ComputeRequest) -> GanttView:
        visible = tuple(request.filters.apply(request.tasks))
        outcome = self._engine.schedule(visible)
        bars = map_tasks_to_bars(
            visible,
            outcome.result,
            hours_per_day=self._engine.hours_per_day,
        )
        view = GanttView(
            generation=request.generation,
            visible_tasks=visible,
            bars=tuple(bars),
            outcome=outcome,
            summary=summarize(outcome.result, visible),
            advice=advise_for_dataset(
                len(visible),
                large_threshold=self._large_threshold,
                high_threshold=self._high_threshold,
            ),
        )
        logger.info(
            "Schedule generation %d: %d visible, %d scheduled, %d unscheduled, duration %d day(s).",
            view.generation,
            len(visible),
            len(outcome.result.per_task_timing),
            len(outcome.unscheduled),
            outcome.result.project_duration_days,
        )
        return view

    def publish(self, view: GanttView) -> bool:
        with self._lock:
            if view.generation <= self._published_generation:
                logger.warning(
                    "Discarding stale schedule generation %d (already published %d).",
                    view.generation,
                    self._published_generation,
                )
                return False
            self._published_generation = view.generation
            self._latest_view = view
        self.view_changed.emit(view)
        return True

    def recompute(self) -> GanttView:
        view = self.compute(self.begin_computation())
        self.publish(view)
        return view

    # --------------------------------------------------------------- edits

    def reschedule_task(
        self,
        task_id: TaskId,
        start_date: Optional[date],
        due_date: Optional[date],
    ) -> GanttView:
        if start_date and due_date and due_date < start_date:
            raise ValidationError("Due date cannot be before start date.", code="TASK_DATE_RANGE")
        self._require_local(task_id)
        if self._task_repo is not None:
            updated = self._write(lambda repo: repo.update_dates(task_id, start_date, due_date))
        else:
            updated = replace(self._require_local(task_id), start_date=start_date, due_date=due_date)
        return self._replace_local(updated)

    def update_progress(self, task_id: TaskId, progress: float) -> GanttView:
        if not 0 <= progress <= 100:
            raise ValidationError("Progress must be between 0 and 100.", code="TASK_PROGRESS_RANGE")
        self._require_local(task_id)
        if self._task_repo is not None:
            updated = self._write(lambda repo: repo.update_progress(task_id, float(progress)))
        else:
            updated = replace(self._require_local(task_id), progress=float(progress))
        return self._replace_local(updated)

    # ------------------------------------------------------------- helpers

    def _require_repo(self) -> TaskRepository:
        if self._task_repo is None:
            raise ValidationError("No task repository configured.", code="NO_REPOSITORY")
        return self._task_repo

    def _write(self, action) -> Task:
        try:
            updated = action(self._task_repo)
        except Exception:
            if self._session is not None:
                self._session.rollback()
            raise
        self.commit()
        return updated

    def _require_local(self, task_id: TaskId) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(f"Task {task_id!r} is not loaded.")

    def _replace_local(self, updated: Task) -> GanttView:
        with self._lock:
            self._tasks = tuple(updated if task.id == updated.id else task for task in self._tasks)
        return self.recompute()


__all__ = ["GanttView", "ComputeRequest", "GanttScheduleService"]
