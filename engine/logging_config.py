"""Logging configuration with a rich console handler"""
import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO, console: Console | None = None) -> None:
    """
    Route all loggers to a single RichHandler on the root logger.

    Args:
        level: Root logging level (DEBUG shows index build summaries)
        console: Console to write to (default: stderr)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=level <= logging.DEBUG,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
