from datetime import date

import pytest

from core.domain import DependencyType, Task, TaskStatus
from core.exceptions import NotFoundError, ValidationError
from core.services.gantt import GanttFilters, GanttScheduleService
from core.services.scheduling import SchedulingEngine


def _seed_project(repo, project_id="P1"):
    repo.add(project_id, Task.create(1, "Design", estimated_hours=8))
    repo.add(project_id, Task.create(2, "Build", depends_on=[1], estimated_hours=24))
    repo.add(project_id, Task.create(3, "Docs", depends_on=[1], estimated_hours=8, status=TaskStatus.IN_PROGRESS))
    repo.add(project_id, Task.create(4, "Ship", depends_on=[2, 3], estimated_hours=8))
    repo.add(project_id, Task.create(5, "Backlog"))
    repo.add("OTHER", Task.create(6, "Elsewhere", estimated_hours=8))


def test_load_project_publishes_view(services):
    repo = services["task_repo"]
    gantt = services["gantt_service"]
    _seed_project(repo)

    received = []
    gantt.view_changed.connect(received.append)
    view = gantt.load_project("P1")

    assert gantt.project_id == "P1"
    assert [task.id for task in gantt.tasks] == [1, 2, 3, 4, 5]
    assert received == [view]
    assert gantt.latest_view is view

    assert view.outcome.result.critical_path == (1, 2, 4)
    assert view.outcome.result.project_duration_days == 5
    assert [task.id for task in view.unscheduled] == [5]
    assert view.summary.critical_tasks == 3
    assert view.summary.total_tasks == 5
    assert view.cycle_message is None


def test_reschedule_persists_and_moves_critical_path(services):
    repo = services["task_repo"]
    gantt = services["gantt_service"]
    _seed_project(repo)
    gantt.load_project("P1")

    # Docs now takes five days, longer than Build
    view = gantt.reschedule_task(3, date(2024, 1, 2), date(2024, 1, 7))

    assert view.outcome.result.critical_path == (1, 3, 4)
    assert view.outcome.result.project_duration_days == 7
    stored = repo.get(3)
    assert (stored.start_date, stored.due_date) == (date(2024, 1, 2), date(2024, 1, 7))


def test_update_progress_persists(services):
    repo = services["task_repo"]
    gantt = services["gantt_service"]
    _seed_project(repo)
    gantt.load_project("P1")

    gantt.reschedule_task(2, date(2024, 1, 2), date(2024, 1, 5))
    view = gantt.update_progress(2, 40)

    assert repo.get(2).progress == 40.0
    bar = next(bar for bar in view.bars if bar.id == "2")
    assert bar.progress == 40.0
    assert bar.custom_class == "bar-todo bar-normal bar-critical"


def test_invalid_edits_are_rejected(services):
    gantt = services["gantt_service"]
    _seed_project(services["task_repo"])
    gantt.load_project("P1")

    with pytest.raises(ValidationError) as excinfo:
        gantt.reschedule_task(1, date(2024, 1, 5), date(2024, 1, 1))
    assert excinfo.value.code == "TASK_DATE_RANGE"

    with pytest.raises(ValidationError):
        gantt.update_progress(1, 120)

    with pytest.raises(NotFoundError):
        gantt.update_progress(6, 10)


def test_filters_narrow_the_scheduled_view(services):
    gantt = services["gantt_service"]
    _seed_project(services["task_repo"])
    gantt.load_project("P1")

    view = gantt.set_filters(GanttFilters.create(statuses=["in_progress"]))

    assert [task.id for task in view.visible_tasks] == [3]
    assert view.outcome.result.critical_path == (3,)
    assert view.summary.total_tasks == 1

    view = gantt.clear_filters()
    assert len(view.visible_tasks) == 5


def test_stale_results_are_discarded(make_task):
    gantt = GanttScheduleService(SchedulingEngine())
    gantt.set_tasks([make_task(1), make_task(2, depends_on=[1])])

    older = gantt.begin_computation()
    gantt.set_tasks([make_task(1)])
    newer = gantt.begin_computation()

    newest_view = gantt.compute(newer)
    assert gantt.publish(newest_view)

    stale_view = gantt.compute(older)
    assert not gantt.publish(stale_view)
    assert gantt.latest_view is newest_view


def test_cycle_is_reported_by_title(make_task):
    gantt = GanttScheduleService(SchedulingEngine())

    view = gantt.set_tasks(
        [
            make_task(1, title="Alpha", depends_on=[2]),
            make_task(2, title="Beta", depends_on=[1]),
            make_task(3, title="Gamma"),
        ]
    )

    assert view.outcome.has_cycle
    assert view.cycle_message == "Dependency cycle detected between: Alpha, Beta"
    assert view.outcome.result.critical_path == (3,)


def test_local_edits_without_repository(make_task):
    gantt = GanttScheduleService(SchedulingEngine(hours_per_day=4))
    gantt.set_tasks([make_task(1, 8), make_task(2, 4, depends_on=[1])])

    assert gantt.latest_view.outcome.result.project_duration_days == 3

    view = gantt.update_progress(1, 55)
    assert gantt.tasks[0].progress == 55.0
    assert view.generation > 1

    with pytest.raises(ValidationError) as excinfo:
        gantt.load_project("P1")
    assert excinfo.value.code == "NO_REPOSITORY"


def test_repository_round_trips_related_links(services):
    repo = services["task_repo"]
    repo.add("P1", Task.create(1, "A", estimated_hours=8))
    repo.add("P1", Task.create(2, "B", estimated_hours=8))
    repo.add_dependency(2, 1, DependencyType.RELATED)

    stored = repo.get(2)

    assert stored.dependencies[0].type == DependencyType.RELATED
    assert stored.blocking_dependency_ids == ()
    assert repo.list_by_project("missing") == []
    with pytest.raises(NotFoundError):
        repo.update_progress(99, 10)
