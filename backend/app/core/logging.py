"""Process-wide logging setup."""
from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(log_level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, "_performance_tracker", False):
            handler.setLevel(level)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    handler._performance_tracker = True  # type: ignore[attr-defined]
    root.addHandler(handler)
