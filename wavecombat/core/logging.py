"""
Logging configuration module for the combat engine.

Provides centralized logging setup with colored output using rich. catchery
reports through the standard logging module, so it shares the same handlers.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO, log_path: str | None = None) -> None:
    """
    Sets up logging configuration with rich colored output.

    Args:
        level (int): The logging level to set. Defaults to logging.INFO.
        log_path (str | None): Optional file that also receives every record.

    """
    # Create a rich console for logging
    console = Console(width=120, force_terminal=True, force_jupyter=False)

    # Configure the rich handler
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    handlers: list[logging.Handler] = [rich_handler]
    if log_path:
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    # Configure the root logger; catchery's logger propagates to it.
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
