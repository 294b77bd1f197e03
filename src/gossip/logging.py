from __future__ import annotations

import logging
import sys
import time
from typing import Optional, TextIO

_HANDLER_NAME = "gossip.stderr"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def init_logging(level: str = "INFO", *, stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger for the command-line tool.

    Logs go to stderr so that stdout carries only command output (templates, keys).
    Calling this again replaces the handler installed by a previous call.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    formatter.converter = time.gmtime

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(resolved)
