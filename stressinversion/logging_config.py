import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_global_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Send the records of the inversion modules to stdout, and to a file if given.

    Data initialization details, rejected conjugate axes and search progress
    are logged at debug level, shown with ``verbose`` only. Calling again
    replaces the handlers installed before.

    Args:
        verbose: Log at debug level instead of info
        log_file: Path of an additional log file
    """
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    root_logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level))
    if log_file is not None:
        root_logger.addHandler(_handler(logging.FileHandler(log_file), level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger of a module, the root logger when ``name`` is None."""
    return logging.getLogger(name)
