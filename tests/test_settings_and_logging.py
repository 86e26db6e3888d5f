import logging

import pytest

from core.exceptions import ValidationError
from infra.logging_config import setup_logging
from infra.settings import EngineSettings, load_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "HOURS_PER_DAY",
        "LARGE_DATASET_THRESHOLD",
        "HIGH_OPTIMIZATION_THRESHOLD",
        "DB_URL",
        "LOG_LEVEL",
        "LOG_TO_FILE",
    ):
        monkeypatch.delenv(f"GANTT_CPM_{name}", raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults_without_environment(clean_env):
    settings = load_settings()

    assert settings.hours_per_day == 8
    assert settings.large_dataset_threshold == 100
    assert settings.high_optimization_threshold == 500
    assert settings.db_url is None
    assert settings.log_level == "INFO"
    assert settings.log_to_file is True
    assert settings.resolved_db_url.startswith("sqlite:///")


def test_environment_overrides(clean_env):
    clean_env.setenv("GANTT_CPM_HOURS_PER_DAY", "6")
    clean_env.setenv("GANTT_CPM_LARGE_DATASET_THRESHOLD", "50")
    clean_env.setenv("GANTT_CPM_HIGH_OPTIMIZATION_THRESHOLD", "200")
    clean_env.setenv("GANTT_CPM_DB_URL", "sqlite:///:memory:")
    clean_env.setenv("GANTT_CPM_LOG_LEVEL", "debug")
    clean_env.setenv("GANTT_CPM_LOG_TO_FILE", "no")

    settings = load_settings()

    assert settings.hours_per_day == 6
    assert settings.large_dataset_threshold == 50
    assert settings.high_optimization_threshold == 200
    assert settings.resolved_db_url == "sqlite:///:memory:"
    assert settings.log_level == "DEBUG"
    assert settings.log_to_file is False


def test_non_integer_environment_value_is_rejected(clean_env):
    clean_env.setenv("GANTT_CPM_HOURS_PER_DAY", "eight")

    with pytest.raises(ValidationError) as excinfo:
        load_settings()
    assert excinfo.value.code == "CONFIG_INVALID"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"hours_per_day": 0},
        {"large_dataset_threshold": 600, "high_optimization_threshold": 500},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        EngineSettings(**kwargs)


def test_setup_logging_writes_rotating_file(tmp_path, restore_root_logger):
    log_file = setup_logging(EngineSettings(log_level="DEBUG"), log_dir=tmp_path)

    assert log_file == tmp_path / "gantt_cpm.log"
    assert restore_root_logger.level == logging.DEBUG

    logging.getLogger("core.services.scheduling").warning("Dependency cycle detected between tasks: 1 -> 2")
    for handler in restore_root_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "[WARNING] core.services.scheduling - Dependency cycle detected" in text


def test_setup_logging_does_not_stack_handlers(tmp_path, restore_root_logger):
    setup_logging(EngineSettings(), log_dir=tmp_path)
    setup_logging(EngineSettings(), log_dir=tmp_path)

    assert len(restore_root_logger.handlers) == 2


def test_console_only_logging(restore_root_logger):
    assert setup_logging(EngineSettings(log_to_file=False)) is None
    assert len(restore_root_logger.handlers) == 1
