from __future__ import annotations

import logging
import math
from typing import Any, Optional

from core.domain import Task

logger = logging.getLogger(__name__)

DEFAULT_HOURS_PER_DAY = 8


def normalize_estimated_hours(value: Any) -> Optional[float]:
    """
    Return a usable positive hour estimate, or None.

    Non-numeric, non-finite and non-positive values are treated as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric estimated_hours %r", value)
        return None
    if not math.isfinite(hours) or hours <= 0:
        logger.debug("Ignoring non-positive estimated_hours %r", value)
        return None
    return hours


def hours_to_days(hours: float, hours_per_day: int = DEFAULT_HOURS_PER_DAY) -> int:
    return max(1, math.ceil(hours / hours_per_day))


def derive_duration_days(task: Task, hours_per_day: int = DEFAULT_HOURS_PER_DAY) -> Optional[int]:
    """
    Duration in whole days, or None when the task cannot be placed.

    An explicit date range wins over the hour estimate: resizing a bar
    rewrites the dates, and the old estimate must not override that.
    """
    if task.start_date is not None and task.due_date is not None:
        return max(1, abs((task.due_date - task.start_date).days))

    hours = normalize_estimated_hours(task.estimated_hours)
    if hours is None:
        return None
    return hours_to_days(hours, hours_per_day)


__all__ = [
    "DEFAULT_HOURS_PER_DAY",
    "normalize_estimated_hours",
    "hours_to_days",
    "derive_duration_days",
]
