"""Tests for puzzlebench.bench.timing: the sampling loop."""

from __future__ import annotations

import math
import unittest

from bench_test_helpers import FakeClock, make_timed_candidate

from puzzlebench.bench.timing import (
    DEFAULT_BUDGET_S,
    Candidate,
    measure_clock_overhead,
    sample,
)
from puzzlebench.errors import CandidateError, ClockError


# ---------------------------------------------------------------------------
# Candidate
# ---------------------------------------------------------------------------


class TestCandidate(unittest.TestCase):
    """Tests for the Candidate dataclass."""

    def test_call_records_output(self) -> None:
        c = Candidate("double", lambda text: text * 2)
        self.assertEqual(c("ab"), "abab")
        self.assertEqual(c.last_output, "abab")

    def test_last_output_starts_empty(self) -> None:
        self.assertIsNone(Candidate("noop", lambda text: None).last_output)


# ---------------------------------------------------------------------------
# Budget handling
# ---------------------------------------------------------------------------


class TestSampleBudget(unittest.TestCase):
    """How many calls a budget buys."""

    def test_default_budget_is_one_second(self) -> None:
        self.assertEqual(DEFAULT_BUDGET_S, 1.0)

    def test_zero_budget_yields_one_sample(self) -> None:
        c = Candidate("upper", str.upper)
        stats = sample(c, "abc", 0, calibrate=False)
        self.assertEqual(stats.iterations, 1)
        self.assertEqual(c.last_output, "ABC")

    def test_zero_budget_with_calibration(self) -> None:
        stats = sample(Candidate("len", len), "abc", 0.0, calibration_rounds=10)
        self.assertEqual(stats.iterations, 1)
        self.assertGreaterEqual(stats.clock_overhead_s, 0.0)

    def test_stops_when_budget_is_met(self) -> None:
        clock = FakeClock()
        c = make_timed_candidate("quarter", clock, 0.25)
        stats = sample(c, "x", 1.0, calibrate=False, clock=clock)
        self.assertEqual(stats.iterations, 4)
        self.assertEqual(stats.mean, 0.25)
        self.assertEqual(stats.stdev, 0.0)
        self.assertEqual(stats.measured_s, 1.0)
        self.assertEqual(stats.total_s, 1.0)
        self.assertEqual(stats.overhead_s, 0.0)

    def test_overrun_by_one_call_is_tolerated(self) -> None:
        clock = FakeClock()
        c = make_timed_candidate("slow", clock, 0.75)
        stats = sample(c, "x", 1.0, calibrate=False, clock=clock)
        self.assertEqual(stats.iterations, 2)
        self.assertEqual(stats.total_s, 1.5)

    def test_call_longer_than_budget(self) -> None:
        clock = FakeClock()
        c = make_timed_candidate("glacial", clock, 10.0)
        stats = sample(c, "x", 1.0, calibrate=False, clock=clock)
        self.assertEqual(stats.iterations, 1)
        self.assertEqual(stats.mean, 10.0)

    def test_zero_cost_candidate_terminates(self) -> None:
        """Clock reads still advance time when the candidate costs nothing."""
        clock = FakeClock(tick=1.0)
        c = make_timed_candidate("free", clock, 0.0)
        stats = sample(c, "x", 10.0, calibrate=False, clock=clock)
        self.assertGreaterEqual(stats.iterations, 1)
        self.assertEqual(stats.mean, 1.0)
        self.assertGreater(stats.overhead_s, 0.0)

    def test_negative_budget_rejected(self) -> None:
        with self.assertRaises(ValueError):
            sample(Candidate("len", len), "abc", -1.0, calibrate=False)

    def test_non_finite_budget_rejected(self) -> None:
        clock = FakeClock()
        calls: list[str] = []
        c = make_timed_candidate("second", clock, 1.0, calls=calls)
        for budget in (math.nan, math.inf):
            with self.subTest(budget=budget):
                with self.assertRaises(ValueError):
                    sample(c, "abc", budget, calibrate=False, clock=clock)
        self.assertEqual(calls, [])

    def test_payload_passed_unchanged(self) -> None:
        seen: list[object] = []
        payload = "input"
        clock = FakeClock()

        def func(text: str) -> int:
            seen.append(text)
            clock.advance(1.0)
            return len(text)

        sample(Candidate("len", func), payload, 5.0, calibrate=False, clock=clock)
        self.assertEqual(len(seen), 5)
        self.assertTrue(all(item is payload for item in seen))

    def test_many_samples_with_small_reservoir(self) -> None:
        clock = FakeClock()
        c = make_timed_candidate("fast", clock, 1.0)
        stats = sample(c, "x", 1000.0, capacity=16, seed=0, calibrate=False, clock=clock)
        self.assertEqual(stats.iterations, 1000)
        self.assertFalse(stats.median_exact)
        self.assertEqual(stats.median, 1.0)


# ---------------------------------------------------------------------------
# Calibration
# ---------------------------------------------------------------------------


class TestClockOverhead(unittest.TestCase):
    """Tests for measure_clock_overhead()."""

    def test_overhead_is_mean_noop_duration(self) -> None:
        clock = FakeClock(tick=1.0)
        self.assertEqual(measure_clock_overhead(rounds=10, clock=clock), 1.0)

    def test_runs_requested_rounds(self) -> None:
        clock = FakeClock(tick=1.0)
        measure_clock_overhead(rounds=10, clock=clock)
        # start + two reads per round + final read
        self.assertEqual(clock.reads, 22)

    def test_zero_rounds_rejected(self) -> None:
        with self.assertRaises(ValueError):
            measure_clock_overhead(rounds=0)

    def test_overhead_reported_in_stats(self) -> None:
        clock = FakeClock(tick=0.5)
        c = make_timed_candidate("c", clock, 2.0)
        stats = sample(c, "x", 0.0, calibration_rounds=5, clock=clock)
        self.assertEqual(stats.clock_overhead_s, 0.5)
        self.assertEqual(stats.iterations, 1)
        self.assertEqual(stats.mean, 2.5)

    def test_real_clock_overhead_is_small(self) -> None:
        overhead = measure_clock_overhead(rounds=100)
        self.assertGreaterEqual(overhead, 0.0)
        self.assertLess(overhead, 0.01)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestSampleFailures(unittest.TestCase):
    """Candidate and clock failures abort the session."""

    def test_candidate_failure_on_third_call(self) -> None:
        clock = FakeClock()
        calls: list[str] = []
        c = make_timed_candidate("flaky", clock, 1.0, calls=calls, fail_on=3)
        with self.assertRaises(CandidateError) as ctx:
            sample(c, "x", 100.0, calibrate=False, clock=clock)
        self.assertEqual(ctx.exception.invocation, 3)
        self.assertEqual(ctx.exception.name, "flaky")
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertEqual(len(calls), 3)

    def test_candidate_failure_on_first_call(self) -> None:
        def boom(text: str) -> None:
            raise ValueError("bad input")

        with self.assertRaises(CandidateError) as ctx:
            sample(Candidate("boom", boom), "x", 0, calibrate=False)
        self.assertIn("bad input", str(ctx.exception))
        self.assertEqual(ctx.exception.invocation, 1)

    def test_clock_exception_is_fatal(self) -> None:
        def broken() -> float:
            raise OSError("no clock")

        with self.assertRaises(ClockError):
            sample(Candidate("len", len), "abc", 0, calibrate=False, clock=broken)

    def test_clock_failure_during_calibration(self) -> None:
        def broken() -> float:
            raise OSError("no clock")

        c = Candidate("len", len)
        with self.assertRaises(ClockError):
            sample(c, "abc", 0, clock=broken)
        self.assertIsNone(c.last_output)

    def test_non_finite_reading_is_fatal(self) -> None:
        with self.assertRaises(ClockError):
            sample(Candidate("len", len), "abc", 0, calibrate=False, clock=lambda: math.nan)


if __name__ == "__main__":
    unittest.main()
