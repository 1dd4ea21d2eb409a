"""Timing of function calls, reported through logging."""

import logging
from functools import wraps
from time import time

logger = logging.getLogger(__name__)


def timing_decorator(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time()
        result = func(*args, **kwargs)
        end = time()
        logger.debug(
            f"{func.__module__}.{func.__name__} executed in {end - start:.3f} seconds"
        )
        return result

    return wrapper
