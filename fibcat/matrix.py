"""Matrix exponentiation for Fibonacci numbers.

Raising Q = [[1, 1], [1, 0]] to the n-th power gives::

    Q^n = [[F(n+1), F(n)  ],
           [F(n),   F(n-1)]]

Matrices are packed in row-major order as 4-tuples.
"""

from __future__ import annotations

from fibcat.errors import InvalidArgument, require_index
from fibcat.types import Matrix2

IDENTITY: Matrix2 = (1, 0, 0, 1)
Q_MATRIX: Matrix2 = (1, 1, 1, 0)


def matrix_multiply(x: Matrix2, y: Matrix2) -> Matrix2:
    """Multiply two 2x2 matrices."""
    return (
        x[0] * y[0] + x[1] * y[2],
        x[0] * y[1] + x[1] * y[3],
        x[2] * y[0] + x[3] * y[2],
        x[2] * y[1] + x[3] * y[3],
    )


def matrix_power(matrix: Matrix2, n: int) -> Matrix2:
    """Raise *matrix* to the n-th power by repeated squaring.

    Args:
        matrix: Base matrix in row-major order.
        n: Non-negative exponent.

    Returns:
        ``matrix ** n``; the identity for ``n == 0``.

    Raises:
        InvalidArgument: If *n* is negative.
    """
    if n < 0:
        raise InvalidArgument(f"matrix exponent must be non-negative, got {n}")
    result = IDENTITY
    while n != 0:
        if n % 2 != 0:
            result = matrix_multiply(result, matrix)
        n //= 2
        matrix = matrix_multiply(matrix, matrix)
    return result


def fibonacci(n: int) -> int:
    """Return F(n) as the top-right element of Q^n."""
    require_index(n)
    return matrix_power(Q_MATRIX, n)[1]
