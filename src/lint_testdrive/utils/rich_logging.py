"""Console logging with compact, colored formatting."""

import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

ROOT_LOGGER = "lint_testdrive"


class LintLogFormatter(logging.Formatter):
    """Timestamped formatter with optional level colors."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        if self.use_colors:
            level_color = self.LEVEL_COLORS.get(record.levelname, "")
            reset = self.RESET
        else:
            level_color = ""
            reset = ""

        message = f"{timestamp} {level_color}{record.levelname:8s}{reset} {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def setup_rich_logging(
    log_level: str = "INFO",
    use_colors: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_colors: Force colors on or off (default: only on a TTY)
        stream: Output stream (default: stderr, keeping stdout for the report)

    Returns:
        The configured package logger
    """
    stream = stream or sys.stderr
    if use_colors is None:
        use_colors = hasattr(stream, "isatty") and stream.isatty()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Close existing handlers before clearing (prevents duplicate output on re-setup)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LintLogFormatter(use_colors=use_colors))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
