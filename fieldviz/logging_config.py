"""
Logging setup for the 'fieldviz' namespace.

Library modules only call logging.getLogger(__name__); the package root
carries a NullHandler (see __init__.py) so nothing is printed unless an
application calls setup_logging(...).
"""
import logging
import sys
from typing import Optional, Union

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Accept logging.DEBUG or a CLI-style name such as 'debug'."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    assert isinstance(value, int), f"unknown logging level {level!r}"
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    capture_warnings: bool = False,
) -> logging.Logger:
    """
    Configure the package logger with a stdout handler and an optional file.

    Args:
        level: logging level or its name
        log_file: optional path; overwritten on each call
        capture_warnings: route warnings.warn(...) output (e.g. numpy
            RuntimeWarnings from degenerate numerics) into 'py.warnings',
            which gets the same handlers
    """
    level = resolve_level(level)
    logger = logging.getLogger("fieldviz")
    warn_logger = logging.getLogger("py.warnings")
    logger.setLevel(level)
    # Only our own stream/file handlers are replaced; the NullHandler stays.
    for h in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)
        warn_logger.removeHandler(h)
        h.close()

    formatter = logging.Formatter(FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        logger.addHandler(h)
        if capture_warnings:
            warn_logger.addHandler(h)
    logging.captureWarnings(capture_warnings)

    logger.debug("Logging initialized at %s.", logging.getLevelName(level))
    return logger
