"""Streaming statistics for benchmark samples.

A benchmark session can produce millions of samples, so nothing here
holds the full sample sequence. Count, mean and variance use Welford's
online update, minimum and maximum are running extrema, and the median
comes from a fixed-size reservoir of samples.

The reservoir median is exact while the number of samples is at most
the reservoir capacity. Past that point it is the median of a uniform
random subset of the stream and is reported as approximate.

References:
    Welford, B. P. (1962). "Note on a method for calculating corrected
        sums of squares and products." Technometrics 4(3): 419-420.
    Vitter, J. S. (1985). "Random sampling with a reservoir." ACM
        Transactions on Mathematical Software 11(1): 37-57.
"""

from __future__ import annotations

import math
import random
import statistics
from dataclasses import dataclass
from typing import Iterable

DEFAULT_RESERVOIR_CAPACITY = 4096


# ---------------------------------------------------------------------------
# RunStats
# ---------------------------------------------------------------------------


@dataclass
class RunStats:
    """Summary statistics for one benchmark session (seconds)."""

    iterations: int
    mean: float
    stdev: float
    min: float
    median: float
    max: float
    median_exact: bool = True
    measured_s: float = 0.0  # sum of all samples
    total_s: float = 0.0  # wall time of the session, bookkeeping included
    overhead_s: float = 0.0  # total_s - measured_s
    clock_overhead_s: float = 0.0  # per-call cost of reading the clock


# ---------------------------------------------------------------------------
# StreamStats
# ---------------------------------------------------------------------------


class StreamStats:
    """Online aggregator for a stream of nonnegative durations.

    Usage::

        agg = StreamStats(capacity=1024, seed=0)
        for d in durations:
            agg.add(d)
        stats = agg.snapshot()

    Args:
        capacity: Maximum number of samples kept for the median.
        seed: Seed for the reservoir's private random generator.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_RESERVOIR_CAPACITY,
        *,
        seed: int | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Reservoir capacity must be at least 1 (got {capacity})")
        self.capacity = capacity
        self._rng = random.Random(seed)
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0  # sum of squared deviations from the running mean
        self._total = 0.0
        self._min = math.inf
        self._max = -math.inf
        self._reservoir: list[float] = []

    def add(self, value: float) -> None:
        """Feed one sample. O(1) time and memory."""
        if math.isnan(value) or value < 0:
            raise ValueError(f"Durations must be nonnegative numbers (got {value!r})")

        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (value - self._mean)
        self._total += value

        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

        # Algorithm R: keep the first `capacity` samples, then replace a
        # random slot with probability capacity / count.
        if len(self._reservoir) < self.capacity:
            self._reservoir.append(value)
        else:
            j = self._rng.randrange(self._count)
            if j < self.capacity:
                self._reservoir[j] = value

    def extend(self, values: Iterable[float]) -> None:
        """Feed every value of *values* in order."""
        for value in values:
            self.add(value)

    # -- current state -------------------------------------------------------

    @property
    def count(self) -> int:
        return self._count

    @property
    def total(self) -> float:
        """Sum of all samples seen so far."""
        return self._total

    @property
    def mean(self) -> float:
        if self._count == 0:
            return math.nan
        # Rounding in the running update can leave the mean a hair outside
        # the observed range.
        return min(max(self._mean, self._min), self._max)

    @property
    def variance(self) -> float:
        """Sample variance (n - 1 denominator); 0.0 for a single sample."""
        if self._count == 0:
            return math.nan
        if self._count == 1:
            return 0.0
        return max(self._m2, 0.0) / (self._count - 1)

    @property
    def stdev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def min(self) -> float:
        return self._min if self._count else math.nan

    @property
    def max(self) -> float:
        return self._max if self._count else math.nan

    @property
    def median(self) -> float:
        """Median of the reservoir; exact while count <= capacity."""
        if not self._reservoir:
            return math.nan
        return statistics.median(self._reservoir)

    @property
    def median_exact(self) -> bool:
        return self._count <= self.capacity

    @property
    def reservoir_size(self) -> int:
        return len(self._reservoir)

    def snapshot(
        self,
        *,
        total_s: float | None = None,
        clock_overhead_s: float = 0.0,
    ) -> RunStats:
        """Return the current statistics as a RunStats.

        Args:
            total_s: Wall time of the session. Defaults to the sum of the
                samples (no bookkeeping overhead).
            clock_overhead_s: Per-call instrumentation cost estimate.

        Raises:
            ValueError: If no sample has been added yet.
        """
        if self._count == 0:
            raise ValueError("Cannot summarize a session with no samples")

        measured = self._total
        total = measured if total_s is None else total_s
        return RunStats(
            iterations=self._count,
            mean=self.mean,
            stdev=self.stdev,
            min=self._min,
            median=self.median,
            max=self._max,
            median_exact=self.median_exact,
            measured_s=measured,
            total_s=total,
            overhead_s=max(total - measured, 0.0),
            clock_overhead_s=clock_overhead_s,
        )


def describe(
    values: Iterable[float],
    *,
    capacity: int = DEFAULT_RESERVOIR_CAPACITY,
    seed: int | None = None,
) -> RunStats:
    """Compute RunStats for a finite sequence of durations."""
    agg = StreamStats(capacity, seed=seed)
    agg.extend(values)
    return agg.snapshot()
