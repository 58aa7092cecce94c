"""Process-wide diagnostic logging.

Nothing in this package configures logging at import time; entry points
(the vector harness, the CLI) call :func:`setup_logging` explicitly.
"""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGERS = ("sequencer_types", "reference_vectors")


def setup_logging(level: int = logging.INFO) -> None:
    """Initialise logging once per process.

    The first call wins.  Once this package's loggers carry a level, later
    calls (the harness calls this for every vector) change nothing, so a
    level chosen by the CLI survives a ``verify`` run.  A root logger that
    already has handlers (pytest capture, an embedding application) keeps
    them.
    """
    if logging.getLogger(PACKAGE_LOGGERS[0]).level != logging.NOTSET:
        return
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level)
