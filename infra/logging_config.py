# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from infra.path import user_data_dir
from infra.settings import EngineSettings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(settings: Optional[EngineSettings] = None, log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Configure root logging for the scheduler host.
    Returns the log file path, or None when file logging is disabled.
    """
    settings = settings or EngineSettings()

    logger = logging.getLogger()
    logger.setLevel(settings.log_level.upper())

    # Repeated calls must not stack handlers.
    logger.handlers.clear()

    log_file: Optional[Path] = None
    if settings.log_to_file:
        log_dir = log_dir or (user_data_dir() / "logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "gantt_cpm.log"

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,  # 1 MB per file
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        logger.info("Logging initialized. Log file at %s", log_file)
    return log_file
