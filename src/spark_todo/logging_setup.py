# src/spark_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILENAME = "spark-todo.log"

APP_LOGGER = "spark_todo"
STORE_LOGGER = "spark_todo.store"


class _ConsoleFilter(logging.Filter):
    """
    Console shows app logs only.

    Store records below INFO are one line per statement and only go to the file;
    anything from outside the app needs ERROR to reach the console.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == STORE_LOGGER or name.startswith(STORE_LOGGER + "."):
            return record.levelno >= logging.INFO
        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def parse_level(level: int | str, default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / 10 -> logging level; unknown names fall back to default."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def setup_logging(*, log_dir: str | Path, console_level: int | str = logging.INFO) -> Path:
    """
    Send logs to stderr (filtered, at console_level) and to <log_dir>/spark-todo.log
    (everything, DEBUG included). Replaces existing root handlers.

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    return log_file
