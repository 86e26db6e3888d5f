from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OptimizationLevel(str, Enum):
    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class DatasetAdvice:
    task_count: int
    is_large: bool
    level: OptimizationLevel
    suggested_view_mode: str
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def should_warn(self) -> bool:
        return self.level == OptimizationLevel.HIGH


def suggested_view_mode(task_count: int) -> str:
    if task_count < 50:
        return "Day"
    if task_count < 100:
        return "Week"
    if task_count < 300:
        return "Month"
    return "Quarter"


def advise_for_dataset(
    task_count: int,
    *,
    large_threshold: int = 100,
    high_threshold: int = 500,
) -> DatasetAdvice:
    """
    Size-based guidance for the host UI. The scheduler always recomputes
    the whole graph; on big projects the remedy is narrowing the input.
    """
    if task_count < large_threshold:
        level = OptimizationLevel.NONE
    elif task_count < high_threshold:
        level = OptimizationLevel.MEDIUM
    else:
        level = OptimizationLevel.HIGH

    recommendations: list[str] = []
    if level == OptimizationLevel.MEDIUM:
        recommendations.append("Consider using filters to reduce visible tasks")
        recommendations.append("Use monthly or quarterly view for better performance")
    elif level == OptimizationLevel.HIGH:
        recommendations.append("Large dataset detected - filters are recommended")
        recommendations.append("Consider breaking project into smaller sub-projects")
        recommendations.append("Use quarterly or yearly view for optimal performance")

    return DatasetAdvice(
        task_count=task_count,
        is_large=task_count > large_threshold,
        level=level,
        suggested_view_mode=suggested_view_mode(task_count),
        recommendations=tuple(recommendations),
    )


__all__ = ["OptimizationLevel", "DatasetAdvice", "suggested_view_mode", "advise_for_dataset"]
