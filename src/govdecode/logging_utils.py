import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """
    Configure the root logger with a rich handler.
    Call once at the application entry point; library modules only create loggers.

    Args:
        level: The logging level (e.g., logging.INFO, "DEBUG").
        console: Optional rich console (defaults to stderr).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplicate logging
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format=LOG_DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root_logger.addHandler(handler)
