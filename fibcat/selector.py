"""Strategy selector: one enum member per Fibonacci algorithm."""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Callable

from fibcat import algorithms, matrix
from fibcat.errors import InvalidArgument


class Algorithm(str, Enum):
    """The available Fibonacci strategies, keyed by their short name."""

    RECURSIVE = "recursive"
    CACHED = "cached"
    DYNAMIC = "dynamic"
    BINET = "binet"
    MATRIX = "matrix"
    DOUBLING = "doubling"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def exact(self) -> bool:
        """False for strategies that only approximate F(n) at scale."""
        return self is not Algorithm.BINET

    def calculate(self, n: int, *, strict: bool = False) -> int:
        """Compute F(n) with this strategy.

        *strict* only affects Binet, turning silent precision loss into
        :class:`~fibcat.errors.PrecisionLoss`.
        """
        fn = _FUNCTIONS[self]
        if self is Algorithm.BINET:
            fn = partial(fn, strict=strict)
        return fn(n)

    @classmethod
    def from_name(cls, name: str) -> Algorithm:
        """Look up a member by short name, ignoring case."""
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise InvalidArgument(
                f"unknown algorithm '{name}' (expected one of: {choices})"
            ) from None

    def __str__(self) -> str:
        return self.display_name


_FUNCTIONS: dict[Algorithm, Callable[[int], int]] = {
    Algorithm.RECURSIVE: algorithms.recursive,
    Algorithm.CACHED: algorithms.cached,
    Algorithm.DYNAMIC: algorithms.dynamic,
    Algorithm.BINET: algorithms.binet,
    Algorithm.MATRIX: matrix.fibonacci,
    Algorithm.DOUBLING: algorithms.doubling,
}

_DISPLAY_NAMES: dict[Algorithm, str] = {
    Algorithm.RECURSIVE: "Textbook recursive (extremely slow)",
    Algorithm.CACHED: "Cached recursive",
    Algorithm.DYNAMIC: "Dynamic programming",
    Algorithm.BINET: "Binet closed formula",
    Algorithm.MATRIX: "Matrix exponentiation",
    Algorithm.DOUBLING: "Fast doubling",
}
