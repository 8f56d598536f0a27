from __future__ import annotations

import logging
import sys
from typing import IO, Optional

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Attach a console handler called *handler_name* to *logger* once.

    Calling again with the same name only adjusts the level, so repeated CLI
    invocations in one process do not duplicate output.  Diagnostics go to
    stderr unless *stream* says otherwise; stdout belongs to command output.
    """
    for handler in logger.handlers:
        if handler.get_name() == handler_name:
            handler.setLevel(level)
            logger.setLevel(level)
            return handler
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(handler_name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
