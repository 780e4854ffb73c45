"""Shared text formatting helpers for puzzlebench.

Provides functions for formatting timings, counts and percentages
used across the reports and CLI commands.
"""

from __future__ import annotations

import math

# (threshold in seconds, multiplier, unit) from the largest unit down.
_TIME_UNITS = (
    (1.0, 1.0, "s"),
    (1e-3, 1e3, "ms"),
    (1e-6, 1e6, "µs"),
)


def format_time(seconds: float, precision: int = 2) -> str:
    """Format a duration in seconds with an adaptive unit.

    Examples: ``'1.50s'``, ``'12.34ms'``, ``'3.00µs'``, ``'250.00ns'``.
    Returns ``'N/A'`` for NaN and ``'inf'`` for infinity.
    """
    if math.isnan(seconds):
        return "N/A"
    if math.isinf(seconds):
        return "inf"
    for threshold, multiplier, unit in _TIME_UNITS:
        if seconds >= threshold:
            return f"{seconds * multiplier:.{precision}f}{unit}"
    return f"{seconds * 1e9:.{precision}f}ns"


def format_count(count: int) -> str:
    """Format an integer with thousands separators: ``'1,234,567'``."""
    return f"{count:,}"


def format_pct(value: float, precision: int = 1) -> str:
    """Format a percentage: ``'12.5%'``. Infinity renders as ``'inf%'``."""
    if math.isnan(value):
        return "N/A"
    if math.isinf(value):
        return "inf%"
    return f"{value:.{precision}f}%"
