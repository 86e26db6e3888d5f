# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "GanttCPM"
COMPANY_NAME = "GanttCPM"


def user_data_dir() -> Path:
    """
    Per-user data directory for logs and the local task store:

    Windows:
        %APPDATA%\\GanttCPM\\GanttCPM

    macOS:
        ~/Library/Application Support/GanttCPM/GanttCPM

    Linux:
        $XDG_DATA_HOME/GanttCPM/GanttCPM (default ~/.local/share/...)
    """
    try:
        if sys.platform.startswith("win"):
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

        path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME.lower()}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / "tasks.db"


def default_db_url() -> str:
    return f"sqlite:///{default_db_path().as_posix()}"
