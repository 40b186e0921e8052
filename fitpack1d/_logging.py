"""Logging helpers for fitpack1d."""

import logging

ROOT_LOGGER_NAME = "fitpack1d"
_NULL_HANDLER = logging.NullHandler()


def get_logger(name=ROOT_LOGGER_NAME):
    """
    Return a logger with a null handler attached.

    Parameters
    ----------
    name : str
        Fully qualified logger name, usually ``__name__``.

    Returns
    -------
    logger : logging.Logger
    """
    logger = logging.getLogger(name)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(_NULL_HANDLER)
    return logger


def configure_logging(level=logging.INFO, handlers=None, format_string=None):
    """
    Attach handlers to the package root logger.

    Parameters
    ----------
    level : int
        Level applied to the ``fitpack1d`` logger.
    handlers : iterable of logging.Handler or None
        Handlers to attach.
    format_string : str or None
        Optional format applied to the given handlers.
    """
    logger = get_logger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in handlers or ():
        if format_string:
            handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)


def report(logger, verbose, msg, level=logging.DEBUG):
    """Log msg at the given level and echo it to stdout when verbose is set."""
    logger.log(level, msg)
    if verbose:
        print(msg)
