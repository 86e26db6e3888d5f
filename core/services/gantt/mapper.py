from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from core.domain import Task, TaskPriority, TaskStatus
from core.services.scheduling.duration import (
    DEFAULT_HOURS_PER_DAY,
    hours_to_days,
    normalize_estimated_hours,
)
from core.services.scheduling.models import CPMResult, ScheduleNode

CRITICAL_CLASS = "bar-critical"

_STATUS_PROGRESS: dict[TaskStatus, float] = {
    TaskStatus.TODO: 0.0,
    TaskStatus.IN_PROGRESS: 50.0,
    TaskStatus.IN_REVIEW: 75.0,
    TaskStatus.DONE: 100.0,
    TaskStatus.CANCELLED: 0.0,
}

_STATUS_CLASS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "bar-todo",
    TaskStatus.IN_PROGRESS: "bar-progress",
    TaskStatus.IN_REVIEW: "bar-review",
    TaskStatus.DONE: "bar-completed",
    TaskStatus.CANCELLED: "bar-cancelled",
}

_PRIORITY_CLASS: dict[TaskPriority, str] = {
    TaskPriority.LOW: "bar-low",
    TaskPriority.NORMAL: "bar-normal",
    TaskPriority.MEDIUM: "bar-medium",
    TaskPriority.HIGH: "bar-high",
    TaskPriority.URGENT: "bar-urgent",
}


@dataclass(frozen=True)
class GanttBar:
    id: str
    name: str
    start: date
    end: date
    progress: float
    dependencies: tuple[str, ...]
    custom_class: str
    is_critical: bool = False
    slack: Optional[int] = None

    @property
    def dependency_string(self) -> str:
        return ",".join(self.dependencies)


def progress_for(task: Task) -> float:
    if task.progress is not None:
        return task.progress
    return _STATUS_PROGRESS.get(task.status, 0.0)


def css_class_for(task: Task, *, is_critical: bool = False) -> str:
    classes = [
        _STATUS_CLASS.get(task.status, "bar-todo"),
        _PRIORITY_CLASS.get(task.priority, "bar-normal"),
    ]
    if is_critical:
        classes.append(CRITICAL_CLASS)
    return " ".join(classes)


def _bar_dates(
    task: Task,
    timing: Optional[ScheduleNode],
    anchor: Optional[date],
    hours_per_day: int,
) -> Optional[tuple[date, date]]:
    if task.start_date is None and task.due_date is None:
        if timing is None or anchor is None:
            return None
        return (
            anchor + timedelta(days=timing.earliest_start),
            anchor + timedelta(days=timing.earliest_finish),
        )

    start = task.start_date or task.due_date
    end = task.due_date or task.start_date

    if task.due_date is None:
        hours = normalize_estimated_hours(task.estimated_hours)
        if hours is not None:
            end = start + timedelta(days=hours_to_days(hours, hours_per_day))

    if end < start:
        start, end = end, start
    return start, end


def map_task_to_bar(
    task: Task,
    *,
    timing: Optional[ScheduleNode] = None,
    critical: bool = False,
    anchor: Optional[date] = None,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> Optional[GanttBar]:
    """
    Chart-ready record for one task, or None when it cannot be drawn.

    Dated tasks keep the dates the user set. Undated tasks that the solver
    placed (duration from hours only) are drawn at ``anchor`` + their
    earliest start when an anchor date is given.
    """
    dates = _bar_dates(task, timing, anchor, hours_per_day)
    if dates is None:
        return None
    start, end = dates
    return GanttBar(
        id=str(task.id),
        name=task.title,
        start=start,
        end=end,
        progress=progress_for(task),
        dependencies=tuple(str(dep_id) for dep_id in task.blocking_dependency_ids),
        custom_class=css_class_for(task, is_critical=critical),
        is_critical=critical,
        slack=timing.slack if timing is not None else None,
    )


def project_anchor(tasks: Iterable[Task]) -> Optional[date]:
    """Earliest explicit date in the task set; day 0 of the chart."""
    dates = [d for task in tasks for d in (task.start_date, task.due_date) if d is not None]
    return min(dates) if dates else None


def map_tasks_to_bars(
    tasks: Iterable[Task],
    result: CPMResult,
    *,
    highlight_critical: bool = True,
    anchor: Optional[date] = None,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> list[GanttBar]:
    """
    Bars for every drawable task. Only tasks on the extracted critical path
    get the critical class.
    """
    task_list = list(tasks)
    on_path = set(result.critical_path) if highlight_critical else set()
    if anchor is None:
        anchor = project_anchor(task_list)

    bars: list[GanttBar] = []
    for task in task_list:
        bar = map_task_to_bar(
            task,
            timing=result.per_task_timing.get(task.id),
            critical=task.id in on_path,
            anchor=anchor,
            hours_per_day=hours_per_day,
        )
        if bar is not None:
            bars.append(bar)
    return bars


__all__ = [
    "CRITICAL_CLASS",
    "GanttBar",
    "progress_for",
    "css_class_for",
    "map_task_to_bar",
    "map_tasks_to_bars",
    "project_anchor",
]
