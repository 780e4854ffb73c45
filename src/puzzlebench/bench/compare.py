"""Ranking of candidate solutions by mean runtime.

Takes the RunStats of several candidates measured against the same
input, orders them fastest first and computes each one's overhead
relative to the fastest.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from puzzlebench.bench.stats import RunStats
from puzzlebench.errors import UsageError


@dataclass
class ComparisonRow:
    """One candidate's line in a comparison table."""

    name: str
    stats: RunStats
    relative_pct: float  # overhead versus the fastest candidate
    position: int  # registration order, 0-based


def relative_overhead(mean: float, fastest_mean: float) -> float:
    """Percentage by which *mean* exceeds *fastest_mean*.

    A zero fastest mean has no meaningful ratio: equal means give 0%,
    anything slower gives infinity.
    """
    if fastest_mean > 0:
        return (mean - fastest_mean) / fastest_mean * 100
    return 0.0 if mean <= fastest_mean else math.inf


def check_names(names: Sequence[str]) -> None:
    """Raise UsageError for an empty or non-unique set of candidate names."""
    if not names:
        raise UsageError("Nothing to compare: no solutions were given")
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise UsageError(f"Solution names must be unique; '{name}' appears twice")
        seen.add(name)


def rank_runs(runs: Sequence[tuple[str, RunStats]]) -> list[ComparisonRow]:
    """Order *runs* by mean ascending and attach relative overheads.

    Args:
        runs: ``(name, stats)`` pairs in registration order.

    Returns:
        ComparisonRows fastest first. Equal means keep registration order.

    Raises:
        UsageError: If *runs* is empty or names repeat.
    """
    check_names([name for name, _ in runs])

    ordered = sorted(enumerate(runs), key=lambda item: item[1][1].mean)
    fastest_mean = ordered[0][1][1].mean

    return [
        ComparisonRow(
            name=name,
            stats=stats,
            relative_pct=0.0 if rank == 0 else relative_overhead(stats.mean, fastest_mean),
            position=position,
        )
        for rank, (position, (name, stats)) in enumerate(ordered)
    ]
