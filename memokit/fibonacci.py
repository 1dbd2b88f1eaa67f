"""
Recursive Fibonacci numbers, plain and wrapped.

``fib`` is the textbook exponential-time definition. ``make_fib`` builds a
fresh copy whose recursive calls go through the wrapped callable, so that
``make_fib(memoize)`` runs in linear time and ``make_fib(memoize, trace)``
traces only cache misses::

    >>> from memokit import make_fib, memoize
    >>> make_fib(memoize)(80)
    23416728348467685
"""

from typing import Any, Callable


def fib(n: int) -> int:
    """Return the n-th Fibonacci number (``fib(0) == 0``, ``fib(1) == 1``)."""
    if n < 0:
        raise ValueError(f"fib is undefined for negative n: {n}")
    if n < 2:
        return n
    return fib(n - 1) + fib(n - 2)


def make_fib(*wrappers: Callable[[Callable], Callable]) -> Callable[[int], Any]:
    """Build a Fibonacci function wrapped in ``wrappers``.

    Wrappers are listed in decorator order, outermost first:
    ``make_fib(memoize, trace)`` is ``memoize(trace(fib))``. Every call
    returns an independent function, with its own caches.
    """

    def fib(n: int) -> int:
        if n < 0:
            raise ValueError(f"fib is undefined for negative n: {n}")
        if n < 2:
            return n
        return wrapped(n - 1) + wrapped(n - 2)

    wrapped = fib
    for wrap in reversed(wrappers):
        wrapped = wrap(wrapped)
    return wrapped
