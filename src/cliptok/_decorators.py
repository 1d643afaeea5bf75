"""Decorators shared by the resource loaders."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def log_duration(label: str) -> Callable[[Callable], Callable]:
    """
    Log how long each call of the decorated loader takes.

    A call that returns is logged at info level, one that raises at warning
    level. The exception itself is left to propagate.

    :param label: Name of the resource or step, used as the log prefix.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                ms = (time.perf_counter() - start) * 1000
                log.warning(f"{label}: failed after {ms:.1f} ms")
                raise
            ms = (time.perf_counter() - start) * 1000
            log.info(f"{label}: loaded in {ms:.1f} ms")
            return result

        return wrapper

    return decorator
