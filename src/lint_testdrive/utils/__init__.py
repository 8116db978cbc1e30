"""Shared utility functions."""

from .rich_logging import setup_rich_logging
from .subprocess_utils import SubprocessError, check_command_exists, run_command

__all__ = [
    # Logging
    "setup_rich_logging",
    # Subprocess utilities
    "SubprocessError",
    "run_command",
    "check_command_exists",
]
