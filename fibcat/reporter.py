"""Output formatting for Fibonacci runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TextIO

from fibcat.selector import Algorithm


@dataclass(frozen=True, slots=True)
class FibResult:
    """One strategy evaluated at one index."""

    index: int
    algorithm: Algorithm
    value: int
    elapsed: float  # seconds


@dataclass(frozen=True, slots=True)
class Mismatch:
    """A result that disagrees with the dynamic-programming reference."""

    index: int
    algorithm: Algorithm
    value: int
    expected: int


@dataclass(frozen=True, slots=True)
class ComparisonReport:
    """All results of a run, plus any disagreements found while checking."""

    results: list[FibResult]
    mismatches: list[Mismatch]
    checked: bool = False

    @property
    def ok(self) -> bool:
        return not self.mismatches


def format_human(report: ComparisonReport, out: TextIO) -> None:
    """Write a human-readable report."""
    if not report.results:
        out.write("Nothing to compute.\n")
        return

    for r in report.results:
        out.write(
            f"F({r.index}) = {r.value}"
            f"  [{r.algorithm.display_name}, {r.elapsed:.6f} s]\n"
        )

    if report.mismatches:
        out.write(f"\n{len(report.mismatches)} mismatch(es) against dynamic programming:\n")
        for m in report.mismatches:
            out.write(
                f"  F({m.index}) by {m.algorithm.display_name}:"
                f" got {m.value}, expected {m.expected}\n"
            )
    elif report.checked:
        out.write("\nAll results agree with dynamic programming.\n")


def format_json(report: ComparisonReport, out: TextIO) -> None:
    """Write a JSON report.  Integers are emitted as decimal strings."""
    data = {
        "results": [
            {
                "index": r.index,
                "algorithm": r.algorithm.value,
                "name": r.algorithm.display_name,
                "value": str(r.value),
                "elapsed": r.elapsed,
            }
            for r in report.results
        ],
        "mismatches": [
            {
                "index": m.index,
                "algorithm": m.algorithm.value,
                "value": str(m.value),
                "expected": str(m.expected),
            }
            for m in report.mismatches
        ],
        "ok": report.ok,
    }
    json.dump(data, out, indent=2)
    out.write("\n")
