# src/spark_todo/config.py

"""Centralized configuration loaded from environment variables (+ optional .env).

Design goals:
- One AppConfig object for the whole app.
- Data lives in the per-user config directory unless overridden.
- Nothing is created on disk at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import appdirs
from dotenv import load_dotenv

ENV_PREFIX = "SPARK_TODO"

DEFAULT_APP_NAME = "Spark-Todo"
DB_FILENAME = "todo.db"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def user_data_dir(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Per-user config directory for the app (not created)."""
    return Path(appdirs.user_config_dir(app_name, appauthor=False))


@dataclass(frozen=True, slots=True)
class AppConfig:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path
    log_dir: Path

    # ---- Store ----
    busy_timeout_ms: int
    default_group_name: str

    # ---- Reminder ----
    reminder_interval_minutes: int

    @staticmethod
    def from_env() -> AppConfig:
        app_name = _env(_k("APP_NAME"), DEFAULT_APP_NAME)
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), user_data_dir(app_name))
        db_path = _env_path(_k("DB_PATH"), data_dir / DB_FILENAME)
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        busy_timeout_ms = max(0, _env_int(_k("BUSY_TIMEOUT_MS"), 5000))
        default_group_name = _env(_k("DEFAULT_GROUP_NAME"), "默认").strip() or "默认"

        reminder_interval_minutes = max(0, _env_int(_k("REMINDER_INTERVAL_MINUTES"), 60))

        return AppConfig(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            log_dir=log_dir,
            busy_timeout_ms=busy_timeout_ms,
            default_group_name=default_group_name,
            reminder_interval_minutes=reminder_interval_minutes,
        )


CONFIG = AppConfig.from_env()


def get_config() -> AppConfig:
    return CONFIG
