# src/spark_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads config once,
- ensures the local data directory exists,
- builds a TodoService and opens the store.
"""

from __future__ import annotations

import logging

from ..app.service import TodoService
from ..config import AppConfig, get_config

logger = logging.getLogger(__name__)


def _ensure_local_dirs(config: AppConfig) -> None:
    config.data_dir.mkdir(parents=True, exist_ok=True)
    config.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_service(*, config: AppConfig | None = None) -> TodoService:
    """
    Build and start a TodoService.

    The returned service may be not ready (see TodoService.startup_error);
    callers report that instead of crashing.
    """
    if config is None:
        config = get_config()

    _ensure_local_dirs(config)

    service = TodoService(config)
    if service.start():
        logger.info("Store opened db=%s", config.db_path)
    return service
