"""Timing capture for benchmark sessions.

Runs a candidate solution repeatedly against one input until a time
budget is spent, timing every call in isolation and feeding each
duration straight into a :class:`~puzzlebench.bench.stats.StreamStats`.
Only the decision to start another call is checked against the budget,
so a session may overrun by up to one call.

Before each session a no-op callable is timed under the same loop to
estimate the fixed cost of the two clock reads that bracket every call.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable

from puzzlebench.bench.stats import DEFAULT_RESERVOIR_CAPACITY, RunStats, StreamStats
from puzzlebench.errors import CandidateError, ClockError
from puzzlebench.logging import get_logger

log = get_logger("bench.timing")

DEFAULT_BUDGET_S = 1.0
DEFAULT_CALIBRATION_ROUNDS = 1000

Clock = Callable[[], float]


# ---------------------------------------------------------------------------
# Candidate
# ---------------------------------------------------------------------------


@dataclass
class Candidate:
    """One named solution variant under measurement."""

    name: str
    func: Callable[[Any], Any]
    last_output: Any = None

    def __call__(self, payload: Any) -> Any:
        self.last_output = self.func(payload)
        return self.last_output


# ---------------------------------------------------------------------------
# Sampling loop
# ---------------------------------------------------------------------------


def _read(clock: Clock) -> float:
    """Read *clock*, turning any failure into a ClockError."""
    try:
        value = clock()
    except Exception as exc:
        raise ClockError(f"Could not read the clock: {exc}") from exc
    if not math.isfinite(value):
        raise ClockError(f"Clock returned a non-finite reading: {value!r}")
    return value


def _noop(payload: Any) -> None:
    return None


def _run_loop(
    name: str,
    func: Callable[[Any], Any],
    payload: Any,
    agg: StreamStats,
    clock: Clock,
    *,
    budget_s: float,
    limit: int | None = None,
) -> tuple[Any, float]:
    """Call *func* until *budget_s* has elapsed or *limit* calls were made.

    Returns the last output and the wall time of the whole loop.
    """
    result = None
    start = _read(clock)
    calls = 0
    while True:
        t0 = _read(clock)
        try:
            result = func(payload)
        except Exception as exc:
            raise CandidateError(name, calls + 1, str(exc) or type(exc).__name__) from exc
        t1 = _read(clock)
        calls += 1
        agg.add(max(t1 - t0, 0.0))

        if t1 - start >= budget_s:
            break
        if limit is not None and calls >= limit:
            break
    total = _read(clock) - start
    return result, max(total, 0.0)


def measure_clock_overhead(
    *,
    rounds: int = DEFAULT_CALIBRATION_ROUNDS,
    clock: Clock = time.perf_counter,
) -> float:
    """Estimate the per-call instrumentation cost of the sampling loop.

    Times a no-op callable *rounds* times and returns the mean duration
    in seconds.
    """
    if rounds < 1:
        raise ValueError(f"Calibration needs at least 1 round (got {rounds})")
    agg = StreamStats(capacity=1)
    _run_loop("<no-op>", _noop, None, agg, clock, budget_s=math.inf, limit=rounds)
    return agg.mean


def sample(
    candidate: Candidate,
    payload: Any,
    budget_s: float = DEFAULT_BUDGET_S,
    *,
    capacity: int = DEFAULT_RESERVOIR_CAPACITY,
    seed: int | None = None,
    calibrate: bool = True,
    calibration_rounds: int = DEFAULT_CALIBRATION_ROUNDS,
    clock: Clock = time.perf_counter,
) -> RunStats:
    """Benchmark *candidate* against *payload* for *budget_s* seconds.

    The candidate is always called at least once, so a budget of zero
    yields exactly one sample.

    Args:
        candidate: The solution to measure. Its ``last_output`` is set to
            the value returned by the final call.
        payload: The puzzle input, passed unchanged to every call.
        budget_s: Time budget in seconds; sampling stops once this much
            time has elapsed since the first call started.
        capacity: Reservoir capacity used for the median.
        seed: Seed for the reservoir sampling.
        calibrate: Whether to estimate the per-call clock overhead first.
        calibration_rounds: Number of no-op calls used for calibration.
        clock: Monotonic clock returning seconds.

    Returns:
        RunStats for the completed session.

    Raises:
        CandidateError: If the candidate raises. No statistics are
            returned for a session that failed part way.
        ClockError: If the clock cannot be read.
        ValueError: If *budget_s* is negative, NaN or infinite.
    """
    if not math.isfinite(budget_s):
        raise ValueError(f"Budget must be a finite number (got {budget_s})")
    if budget_s < 0:
        raise ValueError(f"Budget cannot be negative (got {budget_s})")

    clock_overhead = 0.0
    if calibrate:
        clock_overhead = measure_clock_overhead(rounds=calibration_rounds, clock=clock)
        log.debug("Clock overhead estimate: %.3e s per call", clock_overhead)

    agg = StreamStats(capacity, seed=seed)
    log.debug("Sampling %s for %.3f s", candidate.name, budget_s)
    output, total = _run_loop(candidate.name, candidate.func, payload, agg, clock, budget_s=budget_s)
    candidate.last_output = output

    stats = agg.snapshot(total_s=total, clock_overhead_s=clock_overhead)
    log.debug(
        "%s: %d iterations, mean %.3e s, %.3f s measured of %.3f s",
        candidate.name,
        stats.iterations,
        stats.mean,
        stats.measured_s,
        stats.total_s,
    )
    return stats
