import logging
from datetime import date

import pytest

from core.domain import DependencyType, Task, TaskDependency
from core.exceptions import CycleError, ValidationError
from core.services.scheduling import build_graph, derive_duration_days, find_cycles, schedule_tasks, solve
from core.services.scheduling.graph import downstream_of


@pytest.mark.parametrize(
    "hours, expected",
    [(1, 1), (8, 1), (9, 2), (10, 2), (16, 2), (40, 5), (0.5, 1)],
)
def test_hours_convert_to_whole_days_rounding_up(make_task, hours, expected):
    assert derive_duration_days(make_task(1, hours)) == expected


def test_hours_per_day_is_configurable(make_task):
    assert derive_duration_days(make_task(1, 12), hours_per_day=6) == 2
    assert derive_duration_days(make_task(1, 13), hours_per_day=6) == 3


@pytest.mark.parametrize("hours", [None, 0, -4, float("nan"), float("inf")])
def test_unusable_hours_give_no_duration(make_task, hours):
    assert derive_duration_days(make_task(1, hours)) is None


def test_date_range_wins_over_hours():
    task = Task.create(1, start_date=date(2024, 1, 1), due_date=date(2024, 1, 5), estimated_hours=80)
    assert derive_duration_days(task) == 4


def test_same_day_and_reversed_ranges():
    same_day = Task.create(1, start_date=date(2024, 1, 1), due_date=date(2024, 1, 1))
    reversed_range = Task.create(2, start_date=date(2024, 1, 5), due_date=date(2024, 1, 1))

    assert derive_duration_days(same_day) == 1
    assert derive_duration_days(reversed_range) == 4


def test_dangling_dependency_is_dropped_and_logged(make_task, caplog):
    tasks = [make_task(1), make_task(2, depends_on=[1, 99])]

    with caplog.at_level(logging.WARNING, logger="core.services.scheduling.graph"):
        built = build_graph(tasks)

    assert built.graph.nodes[2].dependency_ids == (1,)
    assert [(d.task_id, d.depends_on_task_id, d.reason) for d in built.dropped_dependencies] == [
        (2, 99, "missing")
    ]
    assert "Dropping dependency 99 -> 2" in caplog.text


def test_dependency_on_unscheduled_task_is_dropped(make_task):
    tasks = [Task.create(1, "No estimate"), make_task(2, depends_on=[1])]

    built = build_graph(tasks)

    assert [task.id for task in built.unscheduled] == [1]
    assert 1 not in built.graph
    assert built.graph.nodes[2].dependency_ids == ()
    assert built.dropped_dependencies[0].reason == "unscheduled"


def test_related_links_do_not_constrain_schedule(make_task):
    related = Task(
        id=2,
        estimated_hours=8,
        dependencies=(TaskDependency(1, DependencyType.RELATED),),
    )

    result = schedule_tasks([make_task(1, 16), related]).result

    assert result.timing(2).earliest_start == 0
    assert result.project_duration_days == 2


def test_duplicate_dependency_entries_collapse(make_task):
    built = build_graph([make_task(1), make_task(2, depends_on=[1, 1])])

    assert built.graph.nodes[2].dependency_ids == (1,)
    assert built.graph.edge_count == 1


def test_duplicate_task_ids_are_rejected(make_task):
    with pytest.raises(ValidationError) as excinfo:
        build_graph([make_task(1), make_task(1, 16)])
    assert excinfo.value.code == "TASK_DUPLICATE_ID"


def test_string_and_integer_ids_mix(make_task):
    tasks = [make_task("design"), make_task(2, depends_on=["design"]), make_task("api", depends_on=[2])]

    result = schedule_tasks(tasks).result

    assert result.critical_path == ("design", 2, "api")
    assert result.topological_order == ("design", 2, "api")


def test_self_dependency_is_a_cycle(make_task):
    built = build_graph([make_task(1, depends_on=[1]), make_task(2)])

    assert built.cycles == ((1,),)
    assert built.graph is None


def test_cycle_members_listed_smallest_first(make_task):
    tasks = [
        make_task(5, depends_on=[3]),
        make_task(3, depends_on=[7]),
        make_task(7, depends_on=[5]),
    ]

    cycles = find_cycles(build_graph(tasks).candidate_graph)

    assert cycles == ((3, 5, 7),)


def test_overlapping_cycles_report_every_member(make_task):
    # 1 -> 2 -> 3 -> 1 and 1 -> 4 -> 3 -> 1 share tasks 1 and 3
    tasks = [
        make_task(1, depends_on=[3]),
        make_task(2, depends_on=[1]),
        make_task(3, depends_on=[2, 4]),
        make_task(4, depends_on=[1]),
        make_task(5, depends_on=[4]),
        make_task(6),
    ]

    built = build_graph(tasks)

    assert built.cycles == ((1, 2, 3, 4),)
    assert built.cyclic_task_ids == frozenset({1, 2, 3, 4})

    with pytest.raises(CycleError) as excinfo:
        solve(built.candidate_graph)
    assert excinfo.value.task_ids == (1, 2, 3, 4)

    outcome = schedule_tasks(tasks)
    assert outcome.cycles == ((1, 2, 3, 4),)
    assert outcome.blocked_task_ids == frozenset({1, 2, 3, 4, 5})
    assert set(outcome.result.per_task_timing) == {6}


def test_separate_cycles_are_separate_groups(make_task):
    tasks = [
        make_task("b", depends_on=["a"]),
        make_task("a", depends_on=["b"]),
        make_task(9, depends_on=[8]),
        make_task(8, depends_on=[7]),
        make_task(7, depends_on=[9]),
        make_task(3, depends_on=[9]),
    ]

    cycles = find_cycles(build_graph(tasks).candidate_graph)

    assert cycles == ((7, 8, 9), ("a", "b"))


def test_cycle_excludes_downstream_and_schedules_the_rest(make_task, caplog):
    tasks = [
        make_task(1, 8),
        make_task(2, 8, depends_on=[1, 3]),
        make_task(3, 8, depends_on=[2]),
        make_task(4, 8, depends_on=[3]),
        make_task(5, 16, depends_on=[1]),
    ]

    with caplog.at_level(logging.WARNING):
        outcome = schedule_tasks(tasks)

    assert outcome.has_cycle
    assert outcome.cycles == ((2, 3),)
    assert outcome.blocked_task_ids == frozenset({2, 3, 4})
    assert set(outcome.result.per_task_timing) == {1, 5}
    assert outcome.result.critical_path == (1, 5)
    assert outcome.result.project_duration_days == 3
    assert "excluded by dependency cycles" in caplog.text


def test_downstream_of_includes_seeds(make_task):
    graph = build_graph([make_task(1), make_task(2, depends_on=[1]), make_task(3)]).graph

    assert downstream_of(graph, [1]) == frozenset({1, 2})
    assert downstream_of(graph, [42]) == frozenset()
