# src/tasklog/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (which owns the task store), loads the
initial task list, runs the console front-end, then releases the store.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        with asyncio.Runner() as runner:
            tasks = runner.run(state.controller.refresh())
            logger.info("Loaded %d tasks from %s", len(tasks), settings.tasks_db_path)

            if settings.console_enabled:
                run_console_loop(state, runner)
            else:
                logger.info("Console disabled; nothing else to run.")
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
