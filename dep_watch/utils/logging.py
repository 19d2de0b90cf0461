"""Logging utilities for DepWatch."""

import logging
from typing import Any
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "dep_watch"


class DepWatchLogger:
    """Custom logger with rich formatting written to stderr."""

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        """Log critical message."""
        self.logger.critical(msg, extra=kwargs)


def setup_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """Setup logging configuration for DepWatch.

    Child loggers created by :func:`get_logger` keep ``NOTSET`` and inherit
    the level configured here.

    Args:
        level: Logging level
        verbose: Enable verbose logging
    """
    if verbose:
        level = logging.DEBUG

    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> DepWatchLogger:
    """Get a DepWatch logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return DepWatchLogger(name)
