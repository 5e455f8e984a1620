"""
Logging setup for the node shell.

Verbosity levels follow the ledger node's convention, 0 for CRITICAL and 5 for DEBUG.
Level 3 maps to NOTICE, which sits between INFO and WARNING.
"""

from __future__ import annotations

import logging

NOTICE = 25
"""Normal but significant events: node started, node stopped."""

logging.addLevelName(NOTICE, "NOTICE")

VERBOSITY_LEVELS: dict[int, int] = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: NOTICE,
    4: logging.INFO,
    5: logging.DEBUG,
}
"""Verbosity level to logging level."""


def level_for_verbosity(verbose: int) -> int:
    """Map a verbosity level to a logging level, clamping out-of-range values."""
    return VERBOSITY_LEVELS[min(max(verbose, 0), 5)]


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    MAGENTA = "\x1b[38;5;170m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        NOTICE: MAGENTA,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"

        levelname = f"{color}{record.levelname:8}{self.RESET}"

        name = f"{self.BLUE}{record.name}{self.RESET}"

        message = record.getMessage()

        return f"{colored_time} {levelname} {name}: {message}"


def setup_logging(verbose: int = 3, no_color: bool = False) -> None:
    """Configure root logging for the given verbosity level with optional colors."""
    level = level_for_verbosity(verbose)

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
