"""Shared type definitions and utilities for fibcat."""

from __future__ import annotations

from dataclasses import dataclass

# Reusable decorator for immutable, slot-based dataclasses.
frozen_slots = dataclass(frozen=True, slots=True)

# 2x2 integer matrix packed in row-major order: (m00, m01, m10, m11).
Matrix2 = tuple[int, int, int, int]

# Semantic alias for CLI positional index arguments.
Indices = tuple[int, ...]
