"""Package logger setup with a Rich handler on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "i2c_eeprom"


def setup_logging(level: int = logging.INFO, console: Console | None = None) -> logging.Logger:
    """Configure the logger for the i2c_eeprom namespace.

    Args:
        level: Logging level (logging.DEBUG shows every transient bus failure).
        console: Console to log to; a new stderr console if None.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate output when main() runs more than once in a process
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        show_time=level <= logging.DEBUG,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
