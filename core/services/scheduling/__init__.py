from .adapter import task_from_record, tasks_from_records
from .diagnostics import DateConflict, find_date_conflicts, would_create_cycle
from .duration import DEFAULT_HOURS_PER_DAY, derive_duration_days, hours_to_days
from .engine import SchedulingEngine, schedule_tasks, solve
from .graph import build_graph, find_cycles
from .models import (
    CPMResult,
    DroppedDependency,
    GraphBuildResult,
    GraphNode,
    ScheduleNode,
    ScheduleOutcome,
    ScheduleSummary,
    TaskGraph,
)
from .statistics import summarize

__all__ = [
    "DEFAULT_HOURS_PER_DAY",
    "SchedulingEngine",
    "build_graph",
    "find_cycles",
    "solve",
    "schedule_tasks",
    "summarize",
    "derive_duration_days",
    "hours_to_days",
    "task_from_record",
    "tasks_from_records",
    "would_create_cycle",
    "find_date_conflicts",
    "DateConflict",
    "CPMResult",
    "DroppedDependency",
    "GraphBuildResult",
    "GraphNode",
    "ScheduleNode",
    "ScheduleOutcome",
    "ScheduleSummary",
    "TaskGraph",
]
