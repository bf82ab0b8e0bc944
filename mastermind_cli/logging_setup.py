import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "mastermind_cli"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up the package logger once per process.

    With a log file everything down to DEBUG goes to that file. Without one,
    records at `level` and above go to stderr so they never interleave with
    the prompts on stdout.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a")
        handler.setLevel(logging.DEBUG)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level.upper())

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
