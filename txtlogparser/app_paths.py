"""Per-platform locations of the application's log and data files."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "TxtLogParser"


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def _is_macos() -> bool:
    return sys.platform == "darwin"


def _home_dir() -> Path:
    value = os.environ.get("USERPROFILE" if _is_windows() else "HOME")
    return Path(value) if value else Path.home()


def _app_data_dir() -> Path:
    value = os.environ.get("APPDATA")
    return Path(value) if value else _home_dir() / "AppData" / "Roaming"


def _ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def logs_dir() -> Path:
    """Directory holding the log files, created if missing."""
    if _is_windows():
        path = _app_data_dir() / APP_NAME / "Logs"
    elif _is_macos():
        path = _home_dir() / "Library" / "Logs" / APP_NAME
    else:
        path = _home_dir() / ".local" / "share" / APP_NAME / "logs"
    return _ensure_dir(path)


def app_support_dir() -> Path:
    """Directory holding the application's data, created if missing."""
    if _is_windows():
        path = _app_data_dir() / APP_NAME
    elif _is_macos():
        path = _home_dir() / "Library" / "Application Support" / APP_NAME
    else:
        path = _home_dir() / ".config" / APP_NAME
    return _ensure_dir(path)


def application_log_path() -> Path:
    return logs_dir() / "application.log"


def troubleshooting_log_path() -> Path:
    return logs_dir() / "troubleshooting.log"


def workspaces_file_path() -> Path:
    return app_support_dir() / "workspaces.json"