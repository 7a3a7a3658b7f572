# resreg/log.py
"""Logging setup for resreg processes and the CLI."""

import logging
import sys
from typing import Optional

_HANDLER_NAME = "_resreg_stream_handler"


def configure_logging(level: int = logging.INFO, formatter: Optional[logging.Formatter] = None) -> logging.Logger:
    """
    Attach a single stderr handler to the resreg logger.

    Calling this again replaces the handler installed by a previous call
    instead of adding another.
    """
    logger = logging.getLogger("resreg")
    if formatter is None:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_NAME, False):
            logger.removeHandler(handler)

    # sys.stderr is looked up on each call so redirected streams are honoured
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    setattr(stream_handler, _HANDLER_NAME, True)
    logger.addHandler(stream_handler)
    logger.setLevel(level)
    return logger
