"""Run pipeline: evaluates the configured strategies and writes a report."""

from __future__ import annotations

import logging
import sys
import time
from typing import TextIO

from fibcat.algorithms import dynamic
from fibcat.config import Config
from fibcat.reporter import ComparisonReport, FibResult, Mismatch, format_human, format_json
from fibcat.selector import Algorithm
from fibcat.types import Indices

logger = logging.getLogger(__name__)


def run(config: Config, indices: Indices) -> ComparisonReport:
    """Evaluate every configured algorithm at every index.

    Args:
        config: Runtime configuration selecting algorithms and checking.
        indices: Non-negative Fibonacci indices.

    Returns:
        A report with one result per (index, algorithm) pair, in index
        order, and the mismatches found when ``config.check`` is set.
    """
    results: list[FibResult] = []
    mismatches: list[Mismatch] = []

    for n in indices:
        expected = dynamic(n) if config.check else None
        for algorithm in config.algorithms:
            result = _evaluate(algorithm, n, strict=config.strict_binet)
            results.append(result)
            if expected is not None and result.value != expected:
                logger.info(
                    "%s disagrees with dynamic programming at n=%d",
                    algorithm.value,
                    n,
                )
                mismatches.append(
                    Mismatch(
                        index=n,
                        algorithm=algorithm,
                        value=result.value,
                        expected=expected,
                    )
                )

    return ComparisonReport(results=results, mismatches=mismatches, checked=config.check)


def run_and_report(
    config: Config,
    indices: Indices,
    out: TextIO = sys.stdout,
) -> ComparisonReport:
    """Run and write formatted output.

    Args:
        config: Runtime configuration.
        indices: Non-negative Fibonacci indices.
        out: Output stream for the report.

    Returns:
        The report (also written to out).
    """
    report = run(config, indices)

    if config.output_format == "json":
        format_json(report, out)
    else:
        format_human(report, out)

    return report


def _evaluate(algorithm: Algorithm, n: int, *, strict: bool) -> FibResult:
    """Time a single strategy call."""
    start = time.perf_counter()
    value = algorithm.calculate(n, strict=strict)
    elapsed = time.perf_counter() - start
    logger.debug("%s(%d) took %.6f s", algorithm.value, n, elapsed)
    return FibResult(index=n, algorithm=algorithm, value=value, elapsed=elapsed)
