"""Shared logging configuration helpers."""

from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_CHOICES: Iterable[str] = tuple(LOG_LEVELS.keys())

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Third-party loggers that flood DEBUG output with per-chunk decoder messages
NOISY_LOGGERS = ("PIL",)


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q options to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Set log verbosity (debug, info, warning, error, critical)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v shows per-image resolution details)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Reduce log verbosity (-q hides progress, -qq shows errors only)",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Resolve a numeric log level; an explicit name beats -v/-q counts."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = verbose - quiet
    if offset >= 1:
        return logging.DEBUG
    if offset == 0:
        return logging.INFO
    if offset == -1:
        return logging.WARNING
    return logging.ERROR


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging on stderr and return the active level.

    Diagnostics go to stderr so that records printed by ``slidepick scan``
    on stdout stay machine-readable.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    root_logger = logging.getLogger()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    return level
