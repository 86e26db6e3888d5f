# infra/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from core.exceptions import ValidationError
from core.services.scheduling.duration import DEFAULT_HOURS_PER_DAY
from infra.path import default_db_url

ENV_PREFIX = "GANTT_CPM_"


def _env(name: str) -> Optional[str]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}.", code="CONFIG_INVALID")


@dataclass(frozen=True)
class EngineSettings:
    hours_per_day: int = DEFAULT_HOURS_PER_DAY
    large_dataset_threshold: int = 100
    high_optimization_threshold: int = 500
    db_url: Optional[str] = None
    log_level: str = "INFO"
    log_to_file: bool = True

    def __post_init__(self) -> None:
        if self.hours_per_day <= 0:
            raise ValidationError("hours_per_day must be positive.", code="CONFIG_INVALID")
        if self.high_optimization_threshold < self.large_dataset_threshold:
            raise ValidationError(
                "high_optimization_threshold must not be below large_dataset_threshold.",
                code="CONFIG_INVALID",
            )
        if logging.getLevelName(self.log_level.upper()) not in range(0, 51):
            raise ValidationError(f"Unknown log level {self.log_level!r}.", code="CONFIG_INVALID")

    @property
    def resolved_db_url(self) -> str:
        return self.db_url or default_db_url()


def load_settings() -> EngineSettings:
    return EngineSettings(
        hours_per_day=_env_int("HOURS_PER_DAY", DEFAULT_HOURS_PER_DAY),
        large_dataset_threshold=_env_int("LARGE_DATASET_THRESHOLD", 100),
        high_optimization_threshold=_env_int("HIGH_OPTIMIZATION_THRESHOLD", 500),
        db_url=_env("DB_URL"),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
        log_to_file=_env_flag("LOG_TO_FILE", True),
    )


__all__ = ["EngineSettings", "load_settings"]
