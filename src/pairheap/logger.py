"""Logging setup shared by the pairheap modules."""

import logging
import sys

_FORMAT = "%(levelname)s %(asctime)s %(filename)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"

_root_logger = logging.getLogger("pairheap")
_default_handler = None


def _setup_logger() -> None:
    global _default_handler
    if _default_handler is None:
        _default_handler = logging.StreamHandler(sys.stdout)
        _default_handler.flush = sys.stdout.flush  # type: ignore
        _default_handler.setLevel(logging.DEBUG)
        _default_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        _root_logger.addHandler(_default_handler)
    _root_logger.setLevel(logging.WARNING)
    _root_logger.propagate = False


_setup_logger()


def init_logger(name: str) -> logging.Logger:
    """
    Get a logger that writes through the package handler.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger nested under the ``pairheap`` logger
    """
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Set the level of the ``pairheap`` logger (e.g. ``logging.DEBUG``)."""
    _root_logger.setLevel(level)
