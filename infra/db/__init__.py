from infra.db.base import Base, build_engine
from infra.db.repository import SqlAlchemyTaskRepository
from infra.db.session import build_session_factory

__all__ = ["Base", "build_engine", "build_session_factory", "SqlAlchemyTaskRepository"]
