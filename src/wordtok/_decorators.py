"""Decorators shared by vocabulary building code."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """
    Log how long a corpus-level call took and how many texts it consumed.

    The corpus is taken to be the last positional argument; when it is a
    list or tuple its length is included in the log line.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        corpus = args[-1] if args else None
        n_texts = len(corpus) if isinstance(corpus, (list, tuple)) else None
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        # failed builds are timed too
        finally:
            elapsed = time.perf_counter() - start
            what = f" over {n_texts} texts" if n_texts is not None else ""
            log.info(f"{func.__name__}{what} finished in {elapsed * 1000:.1f} ms")

    return wrapper
