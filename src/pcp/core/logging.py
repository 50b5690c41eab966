from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "pcp"

_STDERR_HANDLER: logging.Handler | None = None
_FILE_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Route ``pcp`` log records to stderr, and to ``log_file`` when given.

    Records never reach stdout, which carries compiled output only. Safe to
    call repeatedly: previously installed pcp handlers are replaced.
    """
    global _STDERR_HANDLER, _FILE_HANDLER

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_name(level))
    logger.propagate = False

    for handler in (_STDERR_HANDLER, _FILE_HANDLER):
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
    _STDERR_HANDLER = None
    _FILE_HANDLER = None

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stderr_handler)
    _STDERR_HANDLER = stderr_handler

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(fh)
        _FILE_HANDLER = fh


def reset_logging_for_tests() -> None:
    """Test-only: remove pcp handlers and restore propagation."""
    global _STDERR_HANDLER, _FILE_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    for handler in (_STDERR_HANDLER, _FILE_HANDLER):
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
    _STDERR_HANDLER = None
    _FILE_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["LOGGER_NAME", "configure_logging", "reset_logging_for_tests"]
