"""Run logs.

Every ``plumbline run`` keeps a ``debug.log`` in its run directory with the
scripts it executed and how each test ended. ``--verbose`` mirrors the same
records to stderr while the run is in progress.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

RUN_LOG_NAME = "debug.log"
RUN_LOGGER = "plumbline.run"

FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "plumbline: %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: logging.Formatter) -> None:
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(fmt)
    logger.addHandler(handler)


def close_run_log(logger: logging.Logger) -> None:
    """Detach and close every handler on ``logger``."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def open_run_log(
    run_dir: Path, verbose: bool = False, name: str = RUN_LOGGER
) -> logging.Logger:
    """Point logger ``name`` at ``run_dir/debug.log``, and at stderr if ``verbose``.

    Handlers left over from an earlier run on the same logger are closed
    first, and records never reach the root logger.
    """
    logger = logging.getLogger(name)
    close_run_log(logger)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    run_dir.mkdir(parents=True, exist_ok=True)
    _attach(
        logger,
        logging.FileHandler(run_dir / RUN_LOG_NAME, encoding="utf-8"),
        logging.Formatter(FILE_FORMAT, DATE_FORMAT),
    )
    if verbose:
        _attach(logger, logging.StreamHandler(sys.stderr), logging.Formatter(CONSOLE_FORMAT))
    return logger
