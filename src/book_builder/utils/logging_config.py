"""
Logging configuration.

All modules log through ``logging.getLogger(__name__)``. The CLI configures
the root logger once with a rich handler writing to stderr, so stdout only
carries command output.
"""

import logging
from enum import Enum
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Accept a level name (any case), a numeric level or a LogLevel."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


def setup_logging(
    level: Union[str, int, LogLevel] = LogLevel.WARNING,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Level used when not verbose
        verbose: Enable verbose (DEBUG) logging
        console: Console the handler writes to (default: stderr)

    Returns:
        The package logger
    """
    logging.getLogger().handlers.clear()

    log_level = logging.DEBUG if verbose else LogLevel.parse(level).value

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(log_level)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
    )

    logger = logging.getLogger("book_builder")
    logger.setLevel(log_level)
    return logger
