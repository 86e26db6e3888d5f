from __future__ import annotations

from typing import Dict, List

from core.domain import TaskId, task_id_sort_key
from core.services.scheduling.models import TaskGraph


def extract_critical_path(
    graph: TaskGraph,
    topo_order: List[TaskId],
    es: Dict[TaskId, int],
    ef: Dict[TaskId, int],
    slack: Dict[TaskId, int],
) -> List[TaskId]:
    """
    Walk one longest chain through the critical subgraph.

    Only "tight" edges are followed (both ends critical and
    ``EF(pred) == ES(succ)``). At every branch, and when picking the start
    node, candidates are ranked by the longest tight chain still ahead of
    them, then by smallest task id.
    """
    critical = {task_id for task_id in topo_order if slack[task_id] == 0}
    if not critical:
        return []

    tight: Dict[TaskId, List[TaskId]] = {
        task_id: [
            succ_id
            for succ_id in graph.successors.get(task_id, ())
            if succ_id in critical and ef[task_id] == es[succ_id]
        ]
        for task_id in critical
    }

    remaining: Dict[TaskId, int] = {}
    for task_id in reversed(topo_order):
        if task_id in critical:
            remaining[task_id] = graph.nodes[task_id].duration_days + max(
                (remaining[succ_id] for succ_id in tight[task_id]),
                default=0,
            )

    def rank(task_id: TaskId):
        return (-remaining[task_id], task_id_sort_key(task_id))

    has_tight_pred = {succ_id for succs in tight.values() for succ_id in succs}
    sources = [task_id for task_id in critical if task_id not in has_tight_pred]

    current = min(sources, key=rank)
    path = [current]
    while tight[current]:
        current = min(tight[current], key=rank)
        path.append(current)
    return path


__all__ = ["extract_critical_path"]
