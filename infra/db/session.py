from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from infra.db.base import Base
from infra.db.models import TaskDependencyORM, TaskORM

_TABLES = (TaskORM.__table__, TaskDependencyORM.__table__)


def build_session_factory(engine: Engine, *, create_schema: bool = True) -> sessionmaker:
    if create_schema:
        Base.metadata.create_all(bind=engine, tables=list(_TABLES))
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


__all__ = ["build_session_factory"]
