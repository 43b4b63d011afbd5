"""Bladework logging.

Every library logger lives under the ``bladework`` logger, so one level
setting (environment, config node or :func:`set_level`) governs table
builds, cache traffic and configuration messages together.

Environment variables:
    BLADEWORK_LOG_LEVEL  : DEBUG / INFO (default) / WARNING / ERROR
    BLADEWORK_LOG_FILE   : optional path; appends plain-text log lines
"""

import logging
import os
import sys
from typing import Optional, Union

_CONFIGURED = False

# ANSI colour codes (used only when stderr is a TTY)
_COLORS = {
    logging.DEBUG: "\033[36m",     # cyan
    logging.INFO: "\033[32m",      # green
    logging.WARNING: "\033[33m",   # yellow
    logging.ERROR: "\033[31m",     # red
    logging.CRITICAL: "\033[35m",  # magenta
}
_RESET = "\033[0m"


class _ColorFormatter(logging.Formatter):
    """Colours the level name on a TTY without touching the shared record."""

    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        record = logging.makeLogRecord(record.__dict__)
        color = _COLORS.get(record.levelno, "")
        record.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(record)


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def _package_logger() -> logging.Logger:
    root = logging.getLogger("bladework")
    global _CONFIGURED
    if _CONFIGURED:
        return root
    _CONFIGURED = True

    try:
        root.setLevel(_parse_level(os.environ.get("BLADEWORK_LOG_LEVEL", "INFO")))
    except ValueError:
        root.setLevel(logging.INFO)

    use_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_ColorFormatter("%(levelname)s %(name)s: %(message)s",
                                         use_color=use_color))
    root.addHandler(console)

    log_file = os.environ.get("BLADEWORK_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))
        root.addHandler(fh)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for *name* under the ``bladework`` hierarchy.

    Args:
        name: Typically ``__name__``. A leading ``bladework.`` is not
            repeated; ``None`` gives the package logger itself.
    """
    root = _package_logger()
    if not name or name == root.name:
        return root
    if name.startswith(root.name + "."):
        name = name[len(root.name) + 1:]
    return root.getChild(name)


def set_level(level: Union[str, int]) -> None:
    """Sets the level of every Bladework logger (``'DEBUG'``, ``logging.INFO``, ...).

    Raises:
        ValueError: If *level* names no logging level.
    """
    _package_logger().setLevel(_parse_level(level))
