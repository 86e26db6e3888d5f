"""
Boundary adapter: loosely-typed task records (API payloads, cache entries)
into strict ``Task`` values.

All "is this field present/valid" branching lives here so the builder and
solver can rely on well-typed fields.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from core.domain import (
    AssignedUser,
    DependencyType,
    Task,
    TaskDependency,
    TaskId,
    TaskPriority,
    TaskStatus,
)
from core.exceptions import ValidationError
from core.services.scheduling.duration import normalize_estimated_hours

logger = logging.getLogger(__name__)


def _parse_task_id(value: Any, *, field_name: str = "id") -> TaskId:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Task {field_name} is required.", code="TASK_ID_REQUIRED")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            raise ValidationError(f"Task {field_name} is required.", code="TASK_ID_REQUIRED")
        return int(cleaned) if cleaned.isdigit() else cleaned
    raise ValidationError(f"Unsupported task {field_name}: {value!r}", code="TASK_ID_INVALID")


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.debug("Ignoring unparseable date %r", value)
            return None
    raise ValidationError(f"Unsupported date value: {value!r}", code="TASK_DATE_INVALID")


def _as_status(value: Any) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(str(value or TaskStatus.TODO.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown task status: {value!r}", code="TASK_STATUS_INVALID")


def _as_priority(value: Any) -> TaskPriority:
    if isinstance(value, TaskPriority):
        return value
    try:
        return TaskPriority(str(value or TaskPriority.NORMAL.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown task priority: {value!r}", code="TASK_PRIORITY_INVALID")


def _as_dependency_type(value: Any) -> DependencyType:
    if isinstance(value, DependencyType):
        return value
    try:
        return DependencyType(str(value or DependencyType.BLOCKS.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown dependency type: {value!r}", code="DEPENDENCY_TYPE_INVALID")


def _parse_dependencies(raw: Any) -> tuple[TaskDependency, ...]:
    if not raw:
        return ()
    deps: List[TaskDependency] = []
    seen: set[tuple[TaskId, DependencyType]] = set()
    for item in raw:
        if isinstance(item, TaskDependency):
            dep = item
        elif isinstance(item, Mapping):
            dep = TaskDependency(
                depends_on_task_id=_parse_task_id(
                    item.get("depends_on_task_id", item.get("id")),
                    field_name="depends_on_task_id",
                ),
                type=_as_dependency_type(item.get("type")),
            )
        else:
            dep = TaskDependency(_parse_task_id(item, field_name="depends_on_task_id"))
        key = (dep.depends_on_task_id, dep.type)
        if key not in seen:
            seen.add(key)
            deps.append(dep)
    return tuple(deps)


def _parse_progress(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        progress = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(progress):
        return None
    return min(100.0, max(0.0, progress))


def _parse_assignee(value: Any) -> Optional[AssignedUser]:
    if value is None:
        return None
    if isinstance(value, AssignedUser):
        return value
    if isinstance(value, Mapping) and value.get("id") is not None:
        try:
            user_id = int(value["id"])
        except (TypeError, ValueError):
            raise ValidationError(f"Unsupported assignee id: {value['id']!r}", code="TASK_ASSIGNEE_INVALID")
        return AssignedUser(id=user_id, name=str(value.get("name") or ""))
    return None


def task_from_record(record: Mapping[str, Any]) -> Task:
    if not isinstance(record, Mapping):
        raise ValidationError(f"Task record must be a mapping, got {type(record).__name__}.")
    return Task(
        id=_parse_task_id(record.get("id")),
        title=str(record.get("title") or ""),
        description=str(record.get("description") or ""),
        status=_as_status(record.get("status")),
        priority=_as_priority(record.get("priority")),
        start_date=_parse_date(record.get("start_date")),
        due_date=_parse_date(record.get("due_date")),
        estimated_hours=normalize_estimated_hours(record.get("estimated_hours")),
        dependencies=_parse_dependencies(record.get("dependencies")),
        assigned_to=_parse_assignee(record.get("assigned_to")),
        progress=_parse_progress(record.get("progress")),
    )


def tasks_from_records(records: Iterable[Mapping[str, Any]]) -> list[Task]:
    return [task_from_record(record) for record in records]


__all__ = ["task_from_record", "tasks_from_records"]
