"""Benchmark execution entry points.

Orchestrates:
1. Configuration resolution and validation
2. Sampling of one candidate, or of every candidate in turn
3. Ranking of the comparison set
4. Rendering of the report or table

Candidates in a comparison are measured one after another on the
calling thread, never concurrently, so they do not compete for caches
or CPU time.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Sequence

from puzzlebench.bench.compare import ComparisonRow, check_names, rank_runs
from puzzlebench.bench.config import BenchConfig, validate_config
from puzzlebench.bench.display import format_comparison_table, format_run_report
from puzzlebench.bench.stats import RunStats
from puzzlebench.bench.timing import Candidate, Clock, sample
from puzzlebench.errors import UsageError
from puzzlebench.logging import get_logger

log = get_logger("bench.runner")

# Called before each candidate of a comparison with (1-based index, total, name).
ProgressCallback = Callable[[int, int, str], None]


@dataclass
class SingleRun:
    """Outcome of benchmarking one candidate."""

    candidate: Candidate
    stats: RunStats
    report: str


@dataclass
class ComparisonRun:
    """Outcome of benchmarking a set of candidates."""

    rows: list[ComparisonRow] = field(default_factory=list)
    table: str = ""


def _resolve_config(config: BenchConfig | None, budget_s: float | None) -> BenchConfig:
    """Apply an explicit budget over *config* and validate the result."""
    cfg = config if config is not None else BenchConfig()
    if budget_s is not None:
        cfg = replace(cfg, budget_s=budget_s)

    errors = validate_config(cfg)
    for err in errors:
        if err.severity == "warning":
            log.warning("%s", err.message)
    fatal = [err for err in errors if err.severity == "error"]
    if fatal:
        raise UsageError("; ".join(err.message for err in fatal))
    return cfg


def _sample(candidate: Candidate, payload: Any, cfg: BenchConfig, clock: Clock) -> RunStats:
    return sample(
        candidate,
        payload,
        cfg.budget_s,
        capacity=cfg.reservoir_capacity,
        seed=cfg.seed,
        calibrate=cfg.calibrate,
        calibration_rounds=cfg.calibration_rounds,
        clock=clock,
    )


def run_single(
    candidate: Candidate,
    payload: Any,
    budget_s: float | None = None,
    *,
    config: BenchConfig | None = None,
    title: str = "",
    input_size: int | None = None,
    optimized: bool = True,
    clock: Clock = time.perf_counter,
) -> SingleRun:
    """Benchmark one candidate and render its report.

    Args:
        candidate: The solution to measure.
        payload: Puzzle input passed to every call.
        budget_s: Time budget in seconds; overrides ``config.budget_s``.
        config: Sampling configuration (defaults to a 1 second budget).
        title: Header line for the report.
        input_size: Input size in bytes shown in the report.
        optimized: False to print the debug-build warning.
        clock: Monotonic clock returning seconds.
    """
    cfg = _resolve_config(config, budget_s)
    log.info("Benchmarking %s for %.2fs", candidate.name, cfg.budget_s)
    stats = _sample(candidate, payload, cfg, clock)
    report = format_run_report(
        stats,
        title=title,
        solution=candidate.name,
        input_size=input_size,
        profile=cfg.name,
        optimized=optimized,
    )
    return SingleRun(candidate=candidate, stats=stats, report=report)


def run_comparison(
    candidates: Sequence[Candidate],
    payload: Any,
    budget_s: float | None = None,
    *,
    config: BenchConfig | None = None,
    title: str = "",
    optimized: bool = True,
    progress: ProgressCallback | None = None,
    clock: Clock = time.perf_counter,
) -> ComparisonRun:
    """Benchmark every candidate with the same input and budget, then rank them.

    Raises:
        UsageError: If *candidates* is empty or names repeat.
        CandidateError: If any candidate raises; the comparison is abandoned.
    """
    check_names([c.name for c in candidates])
    cfg = _resolve_config(config, budget_s)

    runs: list[tuple[str, RunStats]] = []
    total = len(candidates)
    for i, candidate in enumerate(candidates, 1):
        if progress is not None:
            progress(i, total, candidate.name)
        log.debug("Benchmarking %d/%d - %s", i, total, candidate.name)
        runs.append((candidate.name, _sample(candidate, payload, cfg, clock)))

    rows = rank_runs(runs)
    table = format_comparison_table(rows, title=title, profile=cfg.name, optimized=optimized)
    return ComparisonRun(rows=rows, table=table)
