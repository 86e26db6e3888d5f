from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from core.domain import Task, TaskId


@dataclass(frozen=True)
class DateConflict:
    task_id: TaskId
    depends_on_task_id: TaskId
    task_start: date
    dependency_due: date

    @property
    def overlap_days(self) -> int:
        return (self.dependency_due - self.task_start).days


def _blocking_graph(tasks: Iterable[Task]) -> dict[TaskId, list[TaskId]]:
    # edge: prerequisite -> dependent task
    graph: dict[TaskId, list[TaskId]] = {}
    for task in tasks:
        for dep_id in task.blocking_dependency_ids:
            graph.setdefault(dep_id, []).append(task.id)
    return graph


def _find_path(graph: dict[TaskId, list[TaskId]], start: TaskId, target: TaskId) -> list[TaskId] | None:
    queue = deque([(start, [start])])
    visited: set[TaskId] = set()
    while queue:
        node, path = queue.popleft()
        if node == target:
            return path
        if node in visited:
            continue
        visited.add(node)
        for nxt in graph.get(node, []):
            if nxt not in visited:
                queue.append((nxt, [*path, nxt]))
    return None


def would_create_cycle(
    task_id: TaskId,
    depends_on_id: TaskId,
    tasks: Iterable[Task],
) -> list[TaskId] | None:
    """
    Check a proposed "``task_id`` depends on ``depends_on_id``" link.

    Returns the cycle it would close as a chain of "finishes before" links
    starting and ending at ``task_id``, or None.
    """
    if task_id == depends_on_id:
        return [task_id, task_id]
    path = _find_path(_blocking_graph(tasks), task_id, depends_on_id)
    if not path:
        return None
    return [*path, task_id]


def find_date_conflicts(tasks: Iterable[Task]) -> list[DateConflict]:
    """Tasks that start before one of their blocking dependencies is due."""
    task_list = list(tasks)
    by_id = {task.id: task for task in task_list}
    conflicts: list[DateConflict] = []
    for task in task_list:
        if task.start_date is None:
            continue
        for dep_id in task.blocking_dependency_ids:
            dep = by_id.get(dep_id)
            if dep is None or dep.due_date is None:
                continue
            if task.start_date < dep.due_date:
                conflicts.append(
                    DateConflict(
                        task_id=task.id,
                        depends_on_task_id=dep_id,
                        task_start=task.start_date,
                        dependency_due=dep.due_date,
                    )
                )
    return conflicts


__all__ = ["DateConflict", "would_create_cycle", "find_date_conflicts"]
