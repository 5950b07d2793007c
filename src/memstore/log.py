from __future__ import annotations

import logging
import sys
from typing import TextIO

from .config import normalize_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"

_HANDLER_ATTR = "_memstore_handler"


def configure_logging(level: str = "WARNING", *, stream: TextIO | None = None) -> logging.Logger:
    """Attach one stream handler to the ``memstore`` logger.

    Library code only creates module loggers; handlers are installed here by
    the command line entry point. Calling this again replaces the handler
    rather than stacking a second one.
    """

    root = logging.getLogger("memstore")
    root.setLevel(normalize_log_level(level))

    for h in list(root.handlers):
        if getattr(h, _HANDLER_ATTR, False):
            root.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
    return root
