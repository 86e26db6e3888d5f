from __future__ import annotations

from typing import Union

TaskId = Union[int, str]


def task_id_sort_key(task_id: TaskId) -> tuple[int, int, str]:
    """
    Total order over mixed int/str ids: integers first (numerically),
    then strings (lexicographically).
    """
    if isinstance(task_id, int):
        return (0, task_id, "")
    return (1, 0, str(task_id))


def sorted_ids(task_ids) -> list[TaskId]:
    return sorted(task_ids, key=task_id_sort_key)


__all__ = ["TaskId", "task_id_sort_key", "sorted_ids"]
