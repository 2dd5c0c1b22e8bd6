"""Fibonacci numbers by plain recursion.

The sequence is 1-indexed::

    F(1) = 1
    F(2) = 1
    F(n) = F(n-1) + F(n-2) for n >= 3

Each step delegates the sum to :func:`fibo_add.adder.add`. Nothing is
cached, so the running time grows exponentially with ``n`` and the
recursion depth is ``n - 1``.

Example
-------
>>> fibonacci(1)
1
>>> fibonacci(10)
55
"""

from __future__ import annotations

from . import adder
from .errors import InvalidInputError

__all__ = ["fibonacci"]


def fibonacci(n: int) -> int:
    """Return the ``n``-th Fibonacci number.

    Parameters
    ----------
    n : int
        1-based index into the sequence. Must be a positive ``int``.

    Returns
    -------
    int
        The value of ``F(n)``.

    Raises
    ------
    InvalidInputError
        If ``n`` is not an integer or is not positive. The check runs
        even under ``python -O``.
    """
    # bool is an int subclass; True would otherwise pass as 1
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInputError(n, "n must be an integer")
    if n <= 0:
        raise InvalidInputError(n, "n must be positive")
    if n == 1 or n == 2:
        return 1
    return adder.add(fibonacci(n - 1), fibonacci(n - 2))
