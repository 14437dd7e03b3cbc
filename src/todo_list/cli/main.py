# src/todo_list/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the
main thread until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import make_console_confirm, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    # Ephemeral sessions write nothing to disk, the log file included.
    log_dir = None if settings.ephemeral else settings.data_dir
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    state.confirm = make_console_confirm()

    try:
        run_console_loop(state)
    finally:
        state.messages.shutdown()
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
