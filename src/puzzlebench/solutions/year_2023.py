"""Solutions for 2023."""

from __future__ import annotations

import re

from puzzlebench.solutions import solution

_SPELLED_DIGITS = ["one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_DIGIT_RE = re.compile(r"(?=(\d|" + "|".join(_SPELLED_DIGITS) + r"))")


# Day 1: Trebuchet?!


def _calibration_value(digits: list[int], line: str) -> int:
    if not digits:
        raise ValueError(f"no digit in line {line!r}")
    return digits[0] * 10 + digits[-1]


@solution(2023, 1, 1)
def calibration_sum(text: str) -> int:
    return sum(
        _calibration_value([int(c) for c in line if c.isdigit()], line)
        for line in text.splitlines()
        if line
    )


def _digit_at(line: str, index: int) -> int | None:
    if line[index].isdigit():
        return int(line[index])
    for value, name in enumerate(_SPELLED_DIGITS, 1):
        if line.startswith(name, index):
            return value
    return None


@solution(2023, 1, 2)
def spelled_calibration_sum(text: str) -> int:
    total = 0
    for line in text.splitlines():
        if not line:
            continue
        found = (_digit_at(line, i) for i in range(len(line)))
        left = next((d for d in found if d is not None), None)
        found = (_digit_at(line, i) for i in reversed(range(len(line))))
        right = next((d for d in found if d is not None), None)
        if left is None or right is None:
            raise ValueError(f"no digit in line {line!r}")
        total += left * 10 + right
    return total


@solution(2023, 1, 2, "regex")
def spelled_calibration_sum_regex(text: str) -> int:
    total = 0
    for line in text.splitlines():
        if not line:
            continue
        digits = [
            int(m) if m.isdigit() else _SPELLED_DIGITS.index(m) + 1
            for m in _DIGIT_RE.findall(line)
        ]
        total += _calibration_value(digits, line)
    return total
