"""Contexts for performance timing."""

import contextlib
import time


@contextlib.contextmanager
def capture_time():
    """Capture the time elapsed in a context.

    Yields:
        A function that returns the time elapsed since the context was entered,
        frozen at the moment the context exits.

    Example:
        >>> with capture_time() as elapsed:
        ...     time.sleep(1)
        ...
        >>> elapsed()
        1.0
    """
    start = time.perf_counter()
    end = None

    def fn():
        if end is not None:
            return end - start
        return time.perf_counter() - start

    try:
        yield fn
    finally:
        end = time.perf_counter()
