"""fibcat: a catalog of Fibonacci algorithms over arbitrary-precision integers."""

__version__ = "0.1.0"
