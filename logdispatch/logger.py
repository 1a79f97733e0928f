"""
Structured JSON console logger for logdispatch.
"""

import logging
import sys
from typing import Optional, TextIO, Union

from pythonjsonlogger import jsonlogger

FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def make_console_logger(
    name: str = "logdispatch",
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Build a standalone JSON logger writing to ``stream`` (stdout by default).

    The logger is not registered with ``logging.getLogger`` so every
    dispatcher owns its own writer.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(FORMAT))

    logger = logging.Logger(name)
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
