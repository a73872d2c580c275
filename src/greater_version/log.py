"""Console logger for assertion results."""

import logging

from rich.logging import RichHandler

TAP_FORMAT = "%(message)s"


def get_tap_logger(name: str) -> logging.Logger:
    """
    Get a logger printing one TAP-like line per record through Rich.

    Records are printed as-is ("ok 1 - pkg has greater version"): no time
    column, no path and no Rich markup, so module names with brackets are not
    mangled. The level column is kept to tell failures from passes. Handlers
    are replaced, not added, so repeated calls do not duplicate output.

    Parameters:
        name (str): Name of the logger to retrieve or create.

    Returns:
        logging.Logger: The configured logger, INFO level, not propagating.
    """
    handler = RichHandler(show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter(TAP_FORMAT))
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers = [handler]
    logger.propagate = False
    return logger
