"""Execution timing for tool methods."""

import functools
import logging
import time

logger = logging.getLogger(__name__)


def measure_performance(slow_threshold: float = 2.0):
    """Log how long the wrapped coroutine took.

    Args:
        slow_threshold: Seconds above which the call is logged as a warning.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            success = False
            try:
                result = await func(*args, **kwargs)
                success = True
                return result
            finally:
                elapsed = time.perf_counter() - start
                if elapsed > slow_threshold:
                    logger.warning(
                        "Slow tool call %s: %.3fs (success=%s)",
                        func.__name__,
                        elapsed,
                        success,
                    )
                else:
                    logger.debug(
                        "Tool call %s took %.3fs (success=%s)",
                        func.__name__,
                        elapsed,
                        success,
                    )

        return wrapper

    return decorator
