"""
Logger Configuration
Rich console logging for the reader packages
"""
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.logging import RichHandler
from rich.console import Console


# Shared console instance (CLI output and log records)
console = Console()

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_FORMAT_SIMPLE = "%(message)s"

LOG_DIR = Path(__file__).parent.parent / "logs"

# Top-level packages whose module loggers inherit the configured handlers
PACKAGE_LOGGERS = ("clearview", "intelligence", "storage", "outputs", "webapp")


def _console_handler(level: int, use_rich: bool) -> logging.Handler:
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logger(
    name: str = "clearview",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Configure a logger.

    Calling again only adjusts the level of the existing handlers.

    Args:
        name: logger name
        level: log level
        log_file: optional log file name, written under LOG_DIR
        use_rich: render console output through Rich
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.addHandler(_console_handler(level, use_rich))

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def configure_logging(
    level: int = logging.INFO,
    names: Iterable[str] = PACKAGE_LOGGERS,
    log_file: Optional[str] = None,
) -> None:
    """Set up every package logger for an entry point (CLI, server)."""
    for name in names:
        setup_logger(name, level=level, log_file=log_file)


def get_logger(name: str = "clearview") -> logging.Logger:
    """Child of the `clearview` logger, so entry points share its handlers."""
    if name != "clearview" and not name.startswith("clearview."):
        name = f"clearview.{name}"
    return logging.getLogger(name)
