# src/spark_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the store (running migrations and defaults), then
prints the board as JSON. Useful to check or upgrade a data file without the
desktop front end.
"""

from __future__ import annotations

import json
import logging
import sys

from ..cli.bootstrap import create_service
from ..config import get_config
from ..logging_setup import setup_logging
from ..store.errors import StoreError

logger = logging.getLogger(__name__)


def main() -> int:
    config = get_config()

    setup_logging(log_dir=config.log_dir, console_level=config.log_level)

    logger.info("Starting %s...", config.app_name)

    service = create_service(config=config)
    try:
        board = service.get_board()
    except StoreError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        service.shutdown()

    sys.stdout.write(json.dumps(board.to_dict(), ensure_ascii=False, indent=2))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
