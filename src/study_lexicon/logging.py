"""Logging setup shared by the library and the command line."""

from __future__ import annotations

import logging
from typing import Optional, Union

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    handler: Optional[logging.Handler] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Configure root logging and return the logger called ``logger_name``.

    ``level`` may be a numeric level or a name such as ``"debug"``.
    """
    numeric = _coerce_level(level)
    logging.basicConfig(level=numeric, format=_DEFAULT_FORMAT, handlers=[handler] if handler else None)
    logging.getLogger().setLevel(numeric)
    return logging.getLogger(logger_name or "study_lexicon")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
