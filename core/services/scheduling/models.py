from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from core.domain import Task, TaskId


@dataclass(frozen=True)
class GraphNode:
    task_id: TaskId
    duration_days: int
    dependency_ids: tuple[TaskId, ...] = ()


@dataclass(frozen=True)
class TaskGraph:
    """
    Directed dependency graph: an edge ``d -> n`` means ``d`` must finish
    before ``n`` may start. Node order follows the order tasks were supplied.
    """

    nodes: Mapping[TaskId, GraphNode]
    successors: Mapping[TaskId, tuple[TaskId, ...]]

    @staticmethod
    def from_nodes(nodes: list[GraphNode]) -> "TaskGraph":
        """Edges to ids outside ``nodes`` are not kept."""
        known = {node.task_id for node in nodes}
        by_id: dict[TaskId, GraphNode] = {}
        succ: dict[TaskId, list[TaskId]] = {node.task_id: [] for node in nodes}
        for node in nodes:
            dep_ids = tuple(d for d in node.dependency_ids if d in known)
            if dep_ids != node.dependency_ids:
                node = GraphNode(node.task_id, node.duration_days, dep_ids)
            by_id[node.task_id] = node
            for dep_id in dep_ids:
                succ[dep_id].append(node.task_id)
        return TaskGraph(
            nodes=MappingProxyType(by_id),
            successors=MappingProxyType({k: tuple(v) for k, v in succ.items()}),
        )

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.nodes

    @property
    def edge_count(self) -> int:
        return sum(len(node.dependency_ids) for node in self.nodes.values())

    def subgraph(self, keep_ids) -> "TaskGraph":
        keep = set(keep_ids)
        return TaskGraph.from_nodes([node for node in self.nodes.values() if node.task_id in keep])


@dataclass(frozen=True)
class DroppedDependency:
    task_id: TaskId
    depends_on_task_id: TaskId
    reason: str  # "missing" | "unscheduled"


@dataclass(frozen=True)
class GraphBuildResult:
    graph: Optional[TaskGraph]
    unscheduled: tuple[Task, ...] = ()
    dropped_dependencies: tuple[DroppedDependency, ...] = ()
    cycles: tuple[tuple[TaskId, ...], ...] = ()
    # Always populated, even when a cycle keeps ``graph`` empty, so callers
    # can schedule around the cyclic part.
    candidate_graph: Optional[TaskGraph] = None

    @property
    def has_cycle(self) -> bool:
        return bool(self.cycles)

    @property
    def cyclic_task_ids(self) -> frozenset[TaskId]:
        return frozenset(task_id for cycle in self.cycles for task_id in cycle)


@dataclass(frozen=True)
class ScheduleNode:
    task_id: TaskId
    duration_days: int
    dependency_ids: tuple[TaskId, ...]
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    slack: int
    free_float: int

    @property
    def is_critical(self) -> bool:
        return self.slack == 0


@dataclass(frozen=True)
class CPMResult:
    per_task_timing: Mapping[TaskId, ScheduleNode]
    critical_path: tuple[TaskId, ...]
    project_duration_days: int
    topological_order: tuple[TaskId, ...] = ()

    @staticmethod
    def empty() -> "CPMResult":
        return CPMResult(per_task_timing=MappingProxyType({}), critical_path=(), project_duration_days=0)

    def timing(self, task_id: TaskId) -> ScheduleNode:
        return self.per_task_timing[task_id]

    @property
    def critical_task_ids(self) -> tuple[TaskId, ...]:
        return tuple(
            task_id
            for task_id in self.topological_order
            if self.per_task_timing[task_id].is_critical
        )


@dataclass(frozen=True)
class ScheduleOutcome:
    result: CPMResult
    unscheduled: tuple[Task, ...] = ()
    cycles: tuple[tuple[TaskId, ...], ...] = ()
    blocked_task_ids: frozenset[TaskId] = field(default_factory=frozenset)
    dropped_dependencies: tuple[DroppedDependency, ...] = ()

    @property
    def has_cycle(self) -> bool:
        return bool(self.cycles)


@dataclass(frozen=True)
class ScheduleSummary:
    critical_tasks: int
    total_tasks: int
    project_duration: int
    critical_percentage: int = 0
    average_float: int = 0
    unscheduled_tasks: int = 0


__all__ = [
    "GraphNode",
    "TaskGraph",
    "DroppedDependency",
    "GraphBuildResult",
    "ScheduleNode",
    "CPMResult",
    "ScheduleOutcome",
    "ScheduleSummary",
]
