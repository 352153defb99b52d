"""Logging setup for releaseflow with verbosity-driven levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels sit between the standard ones
CHANGES_LEVEL = 25  # INFO < CHANGES < WARNING: task placements (verbosity 1)
CHECKS_LEVEL = 15  # DEBUG < CHECKS < INFO: per-task considerations (verbosity 2)

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

LOGGER_NAME = "releaseflow"

_LEVELS = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class ReleaseFlowLogger(logging.Logger):
    """Logger with one method per scheduling verbosity level.

    - changes(): where each task landed (verbosity 1)
    - checks(): blocker resolution and capacity lookups (verbosity 2)
    - debug(): day-by-day allocation (verbosity 3)
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at CHANGES level."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log at CHECKS level."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> ReleaseFlowLogger:
    """Return the shared releaseflow logger.

    The first call installs ReleaseFlowLogger as the logger class so the
    named logger is created with the extra methods.
    """
    logging.setLoggerClass(ReleaseFlowLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, ReleaseFlowLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """(Re)configure the releaseflow logger.

    Args:
        verbosity: 0=errors only, 1=changes, 2=checks, 3=debug
        stream: Output stream, stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only; used between tests."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def changes_enabled() -> bool:
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
