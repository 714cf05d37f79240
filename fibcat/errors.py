"""Exceptions raised by the Fibonacci strategies."""

from __future__ import annotations


class FibonacciError(Exception):
    """Base class for fibcat errors."""


class InvalidArgument(FibonacciError, ValueError):
    """Raised for a negative or non-integer index, or an unknown algorithm."""


class PrecisionLoss(FibonacciError, ArithmeticError):
    """Raised when Binet's formula can no longer guarantee an exact result."""


def require_index(n: object) -> int:
    """Return *n* unchanged if it is a non-negative int (not bool)."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgument(f"index must be an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidArgument(f"index must be non-negative, got {n}")
    return n
