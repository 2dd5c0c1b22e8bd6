"""Decorator that reports how long a function call took.

Unlike a print-based timer, the elapsed time goes to the ``fibo_add.timing``
logger so it never mixes with program output on stdout.

Example usage::

    from fibo_add.timing import timed

    @timed
    def slow():
        ...

    @timed(level=logging.INFO)
    def also_slow():
        ...
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

__all__ = ["timed"]


def timed(func: Optional[T] = None, *, level: int = logging.DEBUG):
    """Log the wall-clock duration of each call to *func*.

    Usable bare (``@timed``) or with a level (``@timed(level=logging.INFO)``).
    The duration is logged even when the call raises; the exception then
    propagates unchanged.
    """

    def decorator(fn: T) -> T:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start
                logger.log(level, {
                    "event": "timing",
                    "function": fn.__name__,
                    "elapsed_seconds": round(elapsed, 6),
                })

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator
