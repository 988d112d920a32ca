# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, parses arguments, builds AppState and runs exactly one
command. Exit codes: 0 on success, 1 on a reported error, 2 on bad arguments
(raised by argparse itself).
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from ..config import get_settings
from ..core.errors import TodoError
from ..core.state import AppState
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state
from .commands import registry
from .presenter import TextPresenter

logger = logging.getLogger(__name__)


def execute(state: AppState, args: argparse.Namespace) -> int:
    """Run one parsed command against state; TodoError becomes an error line and exit code 1."""
    try:
        registry.dispatch(state, args)
    except TodoError as exc:
        logger.debug("Command %s %s failed.", args.group, args.command, exc_info=True)
        state.presenter.render_error(str(exc))
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    # argparse exits with status 2 on bad arguments, before any store is touched.
    args = registry.build_parser(settings.app_name).parse_args(argv)

    presenter = TextPresenter()
    try:
        state = create_initial_state(settings=settings, presenter=presenter)
    except TodoError as exc:
        logger.debug("Bootstrap failed.", exc_info=True)
        presenter.render_error(str(exc))
        return 1

    return execute(state, args)


if __name__ == "__main__":
    raise SystemExit(main())
