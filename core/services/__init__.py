from .gantt import GanttScheduleService, GanttView
from .scheduling import CPMResult, SchedulingEngine, ScheduleOutcome, ScheduleSummary

__all__ = [
    "SchedulingEngine",
    "CPMResult",
    "ScheduleOutcome",
    "ScheduleSummary",
    "GanttScheduleService",
    "GanttView",
]
