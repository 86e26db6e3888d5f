from __future__ import annotations

import heapq
from typing import Dict, List

from core.domain import TaskId, task_id_sort_key
from core.exceptions import CycleError
from core.services.scheduling.graph import find_cycles
from core.services.scheduling.models import TaskGraph


def topological_order(graph: TaskGraph) -> List[TaskId]:
    """
    Kahn's algorithm. Ready nodes are released smallest id first so the
    order is independent of dict iteration order.
    """
    indegree: Dict[TaskId, int] = {
        task_id: len(node.dependency_ids) for task_id, node in graph.nodes.items()
    }

    heap: list[tuple[tuple[int, int, str], TaskId]] = []
    for task_id, degree in indegree.items():
        if degree == 0:
            heapq.heappush(heap, (task_id_sort_key(task_id), task_id))

    topo_order: List[TaskId] = []
    while heap:
        _key, task_id = heapq.heappop(heap)
        topo_order.append(task_id)
        for succ_id in graph.successors.get(task_id, ()):
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, (task_id_sort_key(succ_id), succ_id))

    if len(topo_order) != len(graph.nodes):
        cycles = find_cycles(graph)
        raise CycleError(task_id for cycle in cycles for task_id in cycle)

    return topo_order


def run_forward_pass(
    graph: TaskGraph,
    topo_order: List[TaskId],
) -> tuple[Dict[TaskId, int], Dict[TaskId, int], int]:
    es: Dict[TaskId, int] = {}
    ef: Dict[TaskId, int] = {}

    for task_id in topo_order:
        node = graph.nodes[task_id]
        start = max((ef[dep_id] for dep_id in node.dependency_ids), default=0)
        es[task_id] = start
        ef[task_id] = start + node.duration_days

    project_duration = max(ef.values(), default=0)
    return es, ef, project_duration


def run_backward_pass(
    graph: TaskGraph,
    topo_order: List[TaskId],
    project_duration: int,
) -> tuple[Dict[TaskId, int], Dict[TaskId, int]]:
    ls: Dict[TaskId, int] = {}
    lf: Dict[TaskId, int] = {}

    for task_id in reversed(topo_order):
        node = graph.nodes[task_id]
        finish = min(
            (ls[succ_id] for succ_id in graph.successors.get(task_id, ())),
            default=project_duration,
        )
        lf[task_id] = finish
        ls[task_id] = finish - node.duration_days

    return ls, lf


def compute_free_float(
    graph: TaskGraph,
    es: Dict[TaskId, int],
    ef: Dict[TaskId, int],
    project_duration: int,
) -> Dict[TaskId, int]:
    """Delay a task can absorb without pushing back any direct successor."""
    return {
        task_id: min(
            (es[succ_id] for succ_id in graph.successors.get(task_id, ())),
            default=project_duration,
        )
        - ef[task_id]
        for task_id in graph.nodes
    }


__all__ = ["topological_order", "run_forward_pass", "run_backward_pass", "compute_free_float"]
