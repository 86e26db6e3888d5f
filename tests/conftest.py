# tests/conftest.py
import pytest

from core.domain import Task
from infra.db.base import build_engine
from infra.db.session import build_session_factory
from infra.services import build_service_dict
from infra.settings import EngineSettings


@pytest.fixture
def settings():
    return EngineSettings(log_to_file=False)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = build_engine("sqlite:///:memory:")
    TestingSessionLocal = build_session_factory(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def services(session, settings):
    # Same wiring as the application host, bound to the test session
    return build_service_dict(session, settings)


@pytest.fixture
def make_task():
    """Shorthand for an hours-only task: ``make_task(1, 8, depends_on=[...])``."""

    def _make(task_id, hours=8, depends_on=(), **extra):
        extra.setdefault("title", f"Task {task_id}")
        return Task.create(task_id, depends_on=tuple(depends_on), estimated_hours=hours, **extra)

    return _make
