"""Fibonacci strategies over Python's arbitrary-precision integers.

Every function takes a non-negative index and returns F(n), where
F(0) = 0, F(1) = 1 and F(n) = F(n-1) + F(n-2).  Matrix exponentiation
lives in :mod:`fibcat.matrix`.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from fibcat.errors import PrecisionLoss, require_index

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Recursive strategies
# ---------------------------------------------------------------------------


def recursive(n: int) -> int:
    """Textbook recursion.  Exponential time; only usable for small n."""
    require_index(n)
    return _recursive(n)


def _recursive(n: int) -> int:
    if n < 2:
        return n
    return _recursive(n - 1) + _recursive(n - 2)


def cached(n: int) -> int:
    """Recursion memoized in a cache that lives for this call only."""
    require_index(n)
    cache: list[int | None] = [None] * (n + 1)
    return _cached(cache, n)


def _cached(cache: list[int | None], n: int) -> int:
    if n < 2:
        return n
    value = cache[n]
    if value is None:
        value = _cached(cache, n - 1) + _cached(cache, n - 2)
        cache[n] = value
    return value


# ---------------------------------------------------------------------------
# Iterative strategies
# ---------------------------------------------------------------------------


def dynamic(n: int) -> int:
    """Bottom-up dynamic programming: F(i+2) = F(i+1) + F(i)."""
    require_index(n)
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


def doubling(n: int) -> int:
    """Fast doubling, scanning the bits of *n* from the top.

    F(2k)   = F(k) * (2*F(k+1) - F(k))
    F(2k+1) = F(k+1)^2 + F(k)^2
    """
    require_index(n)
    a, b = 0, 1  # (F(m), F(m+1)) with m = 0
    for shift in range(n.bit_length() - 1, -1, -1):
        # Double it
        a, b = a * ((b << 1) - a), a * a + b * b
        # Advance by one conditionally
        if (n >> shift) & 1:
            a, b = b, a + b
    return a


# ---------------------------------------------------------------------------
# Binet's closed form
# ---------------------------------------------------------------------------

# The irrational constants are seeded from doubles, so the result is only as
# good as a 53-bit mantissa allows.
_SQRT5 = Decimal(math.sqrt(5))
_PHI = Decimal((1 + math.sqrt(5)) / 2)
_PSI = Decimal((1 - math.sqrt(5)) / 2)
_SEED_EPSILON = Decimal(2) ** -52

# Highest index asserted exact with double-precision seeds.  The seed error
# grows like n * F(n) * 2^-55; the first wrong result is F(71).
BINET_EXACT_LIMIT = 60

# Extra significant digits beyond those of F(n) in the decimal context.
_GUARD_DIGITS = 30
_LOG10_PHI = math.log10((1 + math.sqrt(5)) / 2)


def binet(n: int, *, strict: bool = False) -> int:
    """Approximate F(n) with (phi^n - psi^n) / sqrt(5), rounded half-up.

    Args:
        n: Non-negative index.
        strict: Raise instead of returning a result whose error bound
            reaches 0.5.

    Returns:
        The nearest integer to the closed-form value.  Exact for
        ``n <= BINET_EXACT_LIMIT``; beyond that it may be off.

    Raises:
        PrecisionLoss: If *strict* is set and the error bound reaches 0.5.
    """
    require_index(n)
    with localcontext() as ctx:
        ctx.prec = int(n * _LOG10_PHI) + _GUARD_DIGITS
        approx = (_PHI**n - _PSI**n) / _SQRT5
        error_bound = (n + 2) * _SEED_EPSILON * abs(approx)
        result = int(approx.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    if error_bound >= Decimal("0.5"):
        if strict:
            raise PrecisionLoss(
                f"Binet's formula cannot resolve F({n}) exactly "
                f"(error bound {error_bound:.3e})"
            )
        logger.warning(
            "Binet result for n=%d may be inexact (error bound %.3e)",
            n,
            float(error_bound),
        )
    return result
