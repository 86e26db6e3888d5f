from core.domain.enums import DependencyType, TaskPriority, TaskStatus
from core.domain.identifiers import TaskId, sorted_ids, task_id_sort_key
from core.domain.task import AssignedUser, Task, TaskDependency

__all__ = [
    "TaskId",
    "task_id_sort_key",
    "sorted_ids",
    "TaskStatus",
    "TaskPriority",
    "DependencyType",
    "AssignedUser",
    "Task",
    "TaskDependency",
]
