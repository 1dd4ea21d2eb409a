"""Logging helpers for the refquad package.

All modules log through ``logging.getLogger(__name__)`` and thus below the
``refquad`` logger; handlers are left to the application.

"""

import logging
from typing import Union

logger = logging.getLogger("refquad")


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of the package logger.

    Args:
        level (int or str): logging level, e.g., logging.DEBUG or "DEBUG".

    Raises:
        ValueError: if the level is not known to the logging module.

    """
    if isinstance(level, str):
        name = level.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown logging level {level}.")
        level = name
    logger.setLevel(level)
