"""
Logging setup for Tempo Insight.

Reports go to stdout through the formatters; log records go to stderr through
rich, so they never end up inside JSON or Markdown output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "tempo_insight"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach a stderr handler, and optionally a file handler, to the package logger.

    Handlers from a previous call are replaced, so the CLI can run several
    times in one process without duplicating output.

    Args:
        verbose: Log DEBUG and up
        quiet: Log ERROR and up; takes precedence over ``verbose``
        log_file: Also append plain-text records to this file

    Returns:
        The ``tempo_insight`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stderr_handler = RichHandler(
        console=Console(stderr=True),
        markup=False,  # paths may contain [brackets]
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        show_path=verbose,
    )
    stderr_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(_level(verbose, quiet))
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``tempo_insight`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger as
    is; short names such as ``"cli"`` are prefixed.
    """
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
