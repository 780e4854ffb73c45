"""Terminal display formatting for benchmark results.

Renders a single candidate's RunStats as a short report and a set of
ranked candidates as a table drawn with Unicode box characters.
"""

from __future__ import annotations

from typing import Sequence

from puzzlebench.bench.compare import ComparisonRow
from puzzlebench.bench.stats import RunStats
from puzzlebench.formatting import format_count, format_pct, format_time

DEBUG_BUILD_WARNING = (
    "WARNING: Running benchmark on a debug build; timings are not representative"
)


def _format_median(stats: RunStats) -> str:
    """Median with a ``~`` marker when it comes from a partial reservoir."""
    text = format_time(stats.median)
    return text if stats.median_exact else f"~{text}"


# ---------------------------------------------------------------------------
# Single benchmark display
# ---------------------------------------------------------------------------


def format_run_report(
    stats: RunStats,
    *,
    title: str = "",
    solution: str = "",
    input_size: int | None = None,
    profile: str = "",
    optimized: bool = True,
) -> str:
    """Format one candidate's benchmark session for display.

    Args:
        stats: RunStats of the session.
        title: Puzzle/part header line.
        solution: Name of the measured solution.
        input_size: Input size in bytes, as reported by whoever loaded it.
        profile: Name of the benchmark profile in use, if any.
        optimized: False when the interpreter is a debug build.

    Returns:
        Formatted string for terminal output.
    """
    lines: list[str] = []

    if not optimized:
        lines.append(DEBUG_BUILD_WARNING)
        lines.append("")
    if title:
        lines.append(title)
        lines.append("")
    if solution:
        lines.append(f"Solution: {solution}")
    if input_size is not None:
        lines.append(f"Input: {format_count(input_size)} bytes")
    if profile:
        lines.append(f"Profile: {profile}")
    if solution or input_size is not None or profile:
        lines.append("")

    lines.append(
        f"Benchmark ran for {format_time(stats.measured_s)} "
        f"(plus {format_time(stats.overhead_s)} of overhead)"
    )
    lines.append(f"  Iterations: {format_count(stats.iterations)}")
    lines.append(f"  Avg±StdDev: {format_time(stats.mean)} ± {format_time(stats.stdev)}")
    lines.append(
        f" Min<Med<Max: {format_time(stats.min)} < {_format_median(stats)} "
        f"< {format_time(stats.max)}"
    )
    if stats.clock_overhead_s > 0:
        lines.append(f"  Clock cost: {format_time(stats.clock_overhead_s)} per call")
    if not stats.median_exact:
        lines.append("  (~ median is approximate, estimated from a sample reservoir)")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Comparison table
# ---------------------------------------------------------------------------

_HEADERS = ["Solution", "Average ± StdDev", "Relative", "Minimum", "Median", "Maximum"]
# Separator after each column but the last: True for a heavy rule.
_HEAVY_AFTER = [True, False, True, False, False]
_BORDERS = {
    # position: (left, heavy join, light join, right)
    "top": ("┏", "┳", "┯", "┓"),
    "mid": ("┣", "╋", "┿", "┫"),
    "bottom": ("┗", "┻", "┷", "┛"),
}


def _row_cells(row: ComparisonRow) -> list[str]:
    s = row.stats
    return [
        row.name,
        f"{format_time(s.mean)} ± {format_time(s.stdev)}",
        format_pct(row.relative_pct),
        format_time(s.min),
        _format_median(s),
        format_time(s.max),
    ]


def _rule(kind: str, widths: list[int]) -> str:
    left, heavy, light, right = _BORDERS[kind]
    parts = [left]
    for i, width in enumerate(widths):
        parts.append("━" * (width + 2))
        if i < len(_HEAVY_AFTER):
            parts.append(heavy if _HEAVY_AFTER[i] else light)
    parts.append(right)
    return "".join(parts)


def _line(cells: list[str], widths: list[int]) -> str:
    parts = ["┃"]
    for i, (cell, width) in enumerate(zip(cells, widths)):
        text = cell.ljust(width) if i == 0 else cell.rjust(width)
        parts.append(f" {text} ")
        if i < len(_HEAVY_AFTER):
            parts.append("┃" if _HEAVY_AFTER[i] else "│")
    parts.append("┃")
    return "".join(parts)


def format_comparison_table(
    rows: Sequence[ComparisonRow],
    *,
    title: str = "",
    profile: str = "",
    optimized: bool = True,
) -> str:
    """Format ranked candidates as a table, in the order given.

    Columns: name, mean ± stdev, relative overhead, min, median, max.
    """
    body = [_row_cells(row) for row in rows]
    widths = [len(h) for h in _HEADERS]
    for cells in body:
        for i, cell in enumerate(cells):
            widths[i] = max(widths[i], len(cell))

    lines: list[str] = []
    if not optimized:
        lines.append(DEBUG_BUILD_WARNING)
        lines.append("")
    if title:
        lines.append(title)
        lines.append("")
    if profile:
        lines.append(f"Profile: {profile}")
        lines.append("")

    lines.append(_rule("top", widths))
    lines.append(_line(_HEADERS, widths))
    lines.append(_rule("mid", widths))
    for cells in body:
        lines.append(_line(cells, widths))
    lines.append(_rule("bottom", widths))

    if any(not row.stats.median_exact for row in rows):
        lines.append("~ median is approximate, estimated from a sample reservoir")

    return "\n".join(lines)
