from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(levelname)s %(name)s %(message)s"
_HANDLER_MARKER = "_histlint_handler"


def configure_logging(*, level: str = "WARNING") -> None:
    """Route histlint loggers to stderr, keeping stdout free for reports."""
    package_logger = logging.getLogger("histlint")
    package_logger.setLevel(level.upper())
    for handler in package_logger.handlers:
        if getattr(handler, _HANDLER_MARKER, False):
            handler.setLevel(level.upper())
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.setLevel(level.upper())
    setattr(handler, _HANDLER_MARKER, True)
    package_logger.addHandler(handler)
