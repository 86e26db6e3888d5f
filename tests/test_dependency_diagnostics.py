from datetime import date

from core.domain import DependencyType, Task, TaskDependency
from core.services.scheduling import find_date_conflicts, would_create_cycle


def test_proposed_link_closing_a_loop_is_reported(make_task):
    # 1 -> 2 -> 3
    tasks = [make_task(1), make_task(2, depends_on=[1]), make_task(3, depends_on=[2])]

    assert would_create_cycle(1, 3, tasks) == [1, 2, 3, 1]
    assert would_create_cycle(3, 1, tasks) is None


def test_self_link_is_a_cycle(make_task):
    assert would_create_cycle(4, 4, [make_task(4)]) == [4, 4]


def test_related_links_never_close_a_loop(make_task):
    tasks = [
        make_task(1),
        Task(id=2, estimated_hours=8, dependencies=(TaskDependency(1, DependencyType.RELATED),)),
    ]

    assert would_create_cycle(1, 2, tasks) is None


def test_start_before_dependency_due_is_a_conflict():
    tasks = [
        Task.create(1, start_date=date(2024, 1, 1), due_date=date(2024, 1, 10)),
        Task.create(2, depends_on=[1], start_date=date(2024, 1, 7), due_date=date(2024, 1, 12)),
        Task.create(3, depends_on=[1], start_date=date(2024, 1, 10), due_date=date(2024, 1, 11)),
        Task.create(4, depends_on=[99], start_date=date(2024, 1, 1)),
    ]

    conflicts = find_date_conflicts(tasks)

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert (conflict.task_id, conflict.depends_on_task_id) == (2, 1)
    assert conflict.overlap_days == 3
