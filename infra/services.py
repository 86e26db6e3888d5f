from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.services.gantt import GanttScheduleService
from core.services.scheduling import SchedulingEngine
from infra.db.repository import SqlAlchemyTaskRepository
from infra.settings import EngineSettings, load_settings


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    settings: EngineSettings
    task_repo: SqlAlchemyTaskRepository
    scheduling_engine: SchedulingEngine
    gantt_service: GanttScheduleService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "settings": self.settings,
            "task_repo": self.task_repo,
            "scheduling_engine": self.scheduling_engine,
            "gantt_service": self.gantt_service,
        }


def build_service_graph(session: Session, settings: Optional[EngineSettings] = None) -> ServiceGraph:
    settings = settings or load_settings()
    task_repo = SqlAlchemyTaskRepository(session)
    scheduling_engine = SchedulingEngine(hours_per_day=settings.hours_per_day)
    gantt_service = GanttScheduleService(
        scheduling_engine,
        task_repo,
        session,
        large_dataset_threshold=settings.large_dataset_threshold,
        high_optimization_threshold=settings.high_optimization_threshold,
    )
    return ServiceGraph(
        session=session,
        settings=settings,
        task_repo=task_repo,
        scheduling_engine=scheduling_engine,
        gantt_service=gantt_service,
    )


def build_service_dict(session: Session, settings: Optional[EngineSettings] = None) -> dict[str, Any]:
    return build_service_graph(session, settings).as_dict()
