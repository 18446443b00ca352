import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _make_handler(log_file: str | None) -> logging.Handler:
    if log_file:
        # Append so restarts keep the history of earlier runs
        return logging.FileHandler(log_file, mode="a")
    return logging.StreamHandler(sys.stdout)


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> logging.Handler:
    """
    Route every flowfield logger through one root handler.

    Calling this again replaces the previous handler and closes it, so a log
    file opened by an earlier call is released. Unknown level names fall back
    to INFO.

    Args:
        log_level: Minimum level name, e.g. "DEBUG" or "info".
        log_file: Append to this file instead of writing to stdout.

    Returns:
        The handler now attached to the root logger.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
        old.close()

    handler = _make_handler(log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Returns a logger instance for the given name (typically __name__)."""
    return logging.getLogger(name)
