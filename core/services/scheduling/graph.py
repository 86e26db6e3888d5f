from __future__ import annotations

import logging
from typing import Iterable, List

from core.domain import Task, TaskId, sorted_ids, task_id_sort_key
from core.exceptions import ValidationError
from core.services.scheduling.duration import DEFAULT_HOURS_PER_DAY, derive_duration_days
from core.services.scheduling.models import (
    DroppedDependency,
    GraphBuildResult,
    GraphNode,
    TaskGraph,
)

logger = logging.getLogger(__name__)


def build_graph(
    tasks: Iterable[Task],
    *,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> GraphBuildResult:
    """
    Normalize a flat task list into a dependency graph.

    Tasks with no derivable duration go to ``unscheduled``. Blocking
    dependencies on unknown or unscheduled tasks are dropped and logged.
    When the remaining graph has a cycle, ``graph`` is None and ``cycles``
    names the tasks involved.
    """
    task_list = list(tasks)
    known_ids: set[TaskId] = set()
    durations: dict[TaskId, int] = {}
    unscheduled: List[Task] = []

    for task in task_list:
        if task.id in known_ids:
            raise ValidationError(f"Duplicate task id {task.id!r}.", code="TASK_DUPLICATE_ID")
        known_ids.add(task.id)

        duration = derive_duration_days(task, hours_per_day)
        if duration is None:
            unscheduled.append(task)
        else:
            durations[task.id] = duration

    nodes: List[GraphNode] = []
    dropped: List[DroppedDependency] = []
    for task in task_list:
        if task.id not in durations:
            continue
        dep_ids: List[TaskId] = []
        for dep_id in task.blocking_dependency_ids:
            if dep_id in durations:
                if dep_id not in dep_ids:
                    dep_ids.append(dep_id)
                continue
            reason = "unscheduled" if dep_id in known_ids else "missing"
            logger.warning(
                "Dropping dependency %r -> %r: dependency is %s.",
                dep_id,
                task.id,
                reason,
            )
            dropped.append(DroppedDependency(task.id, dep_id, reason))
        nodes.append(GraphNode(task.id, durations[task.id], tuple(dep_ids)))

    graph = TaskGraph.from_nodes(nodes)
    cycles = find_cycles(graph)
    if cycles:
        logger.warning(
            "Dependency cycle detected between tasks: %s",
            "; ".join(", ".join(str(task_id) for task_id in group) for group in cycles),
        )

    return GraphBuildResult(
        graph=None if cycles else graph,
        unscheduled=tuple(unscheduled),
        dropped_dependencies=tuple(dropped),
        cycles=cycles,
        candidate_graph=graph,
    )


def find_cycles(graph: TaskGraph) -> tuple[tuple[TaskId, ...], ...]:
    """
    Groups of mutually blocking tasks: Tarjan's strongly connected
    components, walked iteratively.

    A component counts when it has more than one task, or a single task
    that depends on itself. Every task that lies on any cycle belongs to
    exactly one group, so overlapping cycles are reported together. Members
    are listed smallest id first; groups are ordered by their smallest id.
    """
    index: dict[TaskId, int] = {}
    lowlink: dict[TaskId, int] = {}
    stack: List[TaskId] = []
    on_stack: set[TaskId] = set()
    groups: List[tuple[TaskId, ...]] = []

    def visit(task_id: TaskId) -> None:
        index[task_id] = lowlink[task_id] = len(index)
        stack.append(task_id)
        on_stack.add(task_id)

    for root in sorted_ids(graph.nodes):
        if root in index:
            continue

        visit(root)
        work = [(root, iter(sorted_ids(graph.successors[root])))]
        while work:
            node, pending = work[-1]
            advanced = False
            for nxt in pending:
                if nxt not in index:
                    visit(nxt)
                    work.append((nxt, iter(sorted_ids(graph.successors[nxt]))))
                    advanced = True
                    break
                if nxt in on_stack:
                    lowlink[node] = min(lowlink[node], index[nxt])
            if advanced:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])
            if lowlink[node] != index[node]:
                continue

            members: List[TaskId] = []
            while True:
                member = stack.pop()
                on_stack.discard(member)
                members.append(member)
                if member == node:
                    break
            if len(members) > 1 or node in graph.successors[node]:
                groups.append(tuple(sorted_ids(members)))

    groups.sort(key=lambda group: task_id_sort_key(group[0]))
    return tuple(groups)


def downstream_of(graph: TaskGraph, seeds: Iterable[TaskId]) -> frozenset[TaskId]:
    """All tasks reachable from ``seeds`` along successor edges, seeds included."""
    seen: set[TaskId] = set()
    pending = [task_id for task_id in seeds if task_id in graph]
    while pending:
        task_id = pending.pop()
        if task_id in seen:
            continue
        seen.add(task_id)
        pending.extend(graph.successors.get(task_id, ()))
    return frozenset(seen)


__all__ = ["build_graph", "find_cycles", "downstream_of"]
