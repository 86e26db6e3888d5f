from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable

from core.domain import Task, TaskId
from core.services.scheduling.critical_path import extract_critical_path
from core.services.scheduling.duration import DEFAULT_HOURS_PER_DAY
from core.services.scheduling.graph import build_graph, downstream_of
from core.services.scheduling.models import (
    CPMResult,
    GraphBuildResult,
    ScheduleNode,
    ScheduleOutcome,
    TaskGraph,
)
from core.services.scheduling.passes import (
    compute_free_float,
    run_backward_pass,
    run_forward_pass,
    topological_order,
)

logger = logging.getLogger(__name__)


def solve(graph: TaskGraph) -> CPMResult:
    """
    Critical Path Method over an acyclic graph:
    - Forward pass: ES/EF
    - Backward pass: LS/LF
    - slack = LS - ES, critical when slack == 0

    Raises CycleError when ``graph`` is not acyclic, whatever the caller
    validated beforehand.
    """
    if not graph.nodes:
        return CPMResult.empty()

    topo_order = topological_order(graph)
    es, ef, project_duration = run_forward_pass(graph, topo_order)
    ls, lf = run_backward_pass(graph, topo_order, project_duration)
    free_float = compute_free_float(graph, es, ef, project_duration)

    slack: Dict[TaskId, int] = {}
    timing: Dict[TaskId, ScheduleNode] = {}
    for task_id in topo_order:
        node = graph.nodes[task_id]
        slack[task_id] = ls[task_id] - es[task_id]
        if slack[task_id] < 0:
            raise AssertionError(f"Negative slack {slack[task_id]} for task {task_id!r}")
        timing[task_id] = ScheduleNode(
            task_id=task_id,
            duration_days=node.duration_days,
            dependency_ids=node.dependency_ids,
            earliest_start=es[task_id],
            earliest_finish=ef[task_id],
            latest_start=ls[task_id],
            latest_finish=lf[task_id],
            slack=slack[task_id],
            free_float=free_float[task_id],
        )

    critical_path = extract_critical_path(graph, topo_order, es, ef, slack)
    return CPMResult(
        per_task_timing=MappingProxyType(timing),
        critical_path=tuple(critical_path),
        project_duration_days=project_duration,
        topological_order=tuple(topo_order),
    )


def schedule_tasks(
    tasks: Iterable[Task],
    *,
    hours_per_day: int = DEFAULT_HOURS_PER_DAY,
) -> ScheduleOutcome:
    """
    Full pipeline: build the graph, then solve it.

    On a cycle, the cyclic tasks and everything that depends on them are
    left out and reported; the rest of the graph is still scheduled.
    """
    built: GraphBuildResult = build_graph(tasks, hours_per_day=hours_per_day)

    if not built.has_cycle:
        return ScheduleOutcome(
            result=solve(built.graph),
            unscheduled=built.unscheduled,
            dropped_dependencies=built.dropped_dependencies,
        )

    candidate = built.candidate_graph
    blocked = downstream_of(candidate, built.cyclic_task_ids)
    remaining = candidate.subgraph(task_id for task_id in candidate.nodes if task_id not in blocked)
    logger.warning(
        "Scheduling %d of %d tasks; %d excluded by dependency cycles.",
        len(remaining),
        len(candidate),
        len(blocked),
    )
    return ScheduleOutcome(
        result=solve(remaining),
        unscheduled=built.unscheduled,
        cycles=built.cycles,
        blocked_task_ids=blocked,
        dropped_dependencies=built.dropped_dependencies,
    )


class SchedulingEngine:
    """
    Stateless facade over the scheduling pipeline.

    Holds configuration only; every call works on its own input and
    returns a fresh result.
    """

    def __init__(self, hours_per_day: int = DEFAULT_HOURS_PER_DAY):
        if hours_per_day <= 0:
            raise ValueError("hours_per_day must be positive")
        self._hours_per_day: int = hours_per_day

    @property
    def hours_per_day(self) -> int:
        return self._hours_per_day

    def build(self, tasks: Iterable[Task]) -> GraphBuildResult:
        return build_graph(tasks, hours_per_day=self._hours_per_day)

    def solve(self, graph: TaskGraph) -> CPMResult:
        return solve(graph)

    def schedule(self, tasks: Iterable[Task]) -> ScheduleOutcome:
        return schedule_tasks(tasks, hours_per_day=self._hours_per_day)


__all__ = ["solve", "schedule_tasks", "SchedulingEngine"]
