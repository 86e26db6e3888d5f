from __future__ import annotations

from typing import Iterable

from core.domain import Task
from core.services.scheduling.models import CPMResult, ScheduleSummary


def summarize(result: CPMResult, all_tasks: Iterable[Task]) -> ScheduleSummary:
    """
    Aggregate numbers for the "N/M tasks critical, duration D days" banner.

    ``total_tasks`` counts every task considered, scheduled or not, so the
    ratio reflects the whole (filtered) project.
    """
    tasks = list(all_tasks)
    total = len(tasks)
    timings = list(result.per_task_timing.values())
    critical = sum(1 for node in timings if node.is_critical)

    critical_percentage = round(critical / total * 100) if total else 0
    average_float = round(sum(node.slack for node in timings) / len(timings)) if timings else 0

    return ScheduleSummary(
        critical_tasks=critical,
        total_tasks=total,
        project_duration=result.project_duration_days,
        critical_percentage=critical_percentage,
        average_float=average_float,
        unscheduled_tasks=sum(1 for task in tasks if task.id not in result.per_task_timing),
    )


__all__ = ["summarize"]
