"""Integer addition primitive.

Python integers are arbitrary precision, so :func:`add` never wraps,
saturates or raises on large operands: the result is always the exact
mathematical sum.

Example
-------
>>> add(1, 2)
3
>>> add(1, -2)
-1
"""

from __future__ import annotations

__all__ = ["add"]


def add(a: int, b: int) -> int:
    """Return the sum of ``a`` and ``b``.

    Parameters
    ----------
    a : int
        First operand.
    b : int
        Second operand.

    Returns
    -------
    int
        ``a + b``.
    """
    return a + b
