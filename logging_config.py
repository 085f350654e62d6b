"""Logger setup for the dune simulator frontend and benchmark."""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach a stdout handler (and optionally a file handler) to the root logger.

    Modules are imported by bare name (main, simulation.settling, ...), so
    every logging.getLogger(__name__) logger sits directly under the root.
    Calling this again replaces the handlers instead of stacking them.

    Args:
        level: Logging level for the root logger and every handler
        log_file: Path of a log file to overwrite, or None for console only
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info("Logging initialized.")
