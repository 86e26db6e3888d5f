from .advice import DatasetAdvice, OptimizationLevel, advise_for_dataset
from .filters import GanttFilters
from .mapper import GanttBar, map_task_to_bar, map_tasks_to_bars
from .service import ComputeRequest, GanttScheduleService, GanttView

__all__ = [
    "DatasetAdvice",
    "OptimizationLevel",
    "advise_for_dataset",
    "GanttFilters",
    "GanttBar",
    "map_task_to_bar",
    "map_tasks_to_bars",
    "ComputeRequest",
    "GanttScheduleService",
    "GanttView",
]
