from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.domain import Task, TaskPriority, TaskStatus


@dataclass(frozen=True)
class GanttFilters:
    """
    Visible-subset selection for the chart. An empty set means "no filter"
    on that field. Changing filters changes the scheduler's input, so the
    critical path is computed within the filtered view.
    """

    statuses: frozenset[TaskStatus] = frozenset()
    priorities: frozenset[TaskPriority] = frozenset()
    assignee_ids: frozenset[int] = frozenset()
    search: str = ""

    @staticmethod
    def create(
        statuses: Iterable[str | TaskStatus] = (),
        priorities: Iterable[str | TaskPriority] = (),
        assignee_ids: Iterable[int | str] = (),
        search: str = "",
    ) -> "GanttFilters":
        return GanttFilters(
            statuses=frozenset(TaskStatus(s) for s in statuses),
            priorities=frozenset(TaskPriority(p) for p in priorities),
            assignee_ids=frozenset(int(a) for a in assignee_ids),
            search=(search or "").strip(),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.statuses or self.priorities or self.assignee_ids or self.search)

    def matches(self, task: Task) -> bool:
        if self.statuses and task.status not in self.statuses:
            return False
        if self.priorities and task.priority not in self.priorities:
            return False
        if self.assignee_ids and (task.assigned_to is None or task.assigned_to.id not in self.assignee_ids):
            return False
        if self.search:
            query = self.search.lower()
            haystack = f"{task.title} {task.description}".lower()
            if query not in haystack:
                return False
        return True

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        if self.is_empty:
            return list(tasks)
        return [task for task in tasks if self.matches(task)]


__all__ = ["GanttFilters"]
