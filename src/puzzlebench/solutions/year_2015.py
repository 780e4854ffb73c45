"""Solutions for 2015."""

from __future__ import annotations

from itertools import accumulate

from puzzlebench.solutions import solution

_STEPS = {"(": 1, ")": -1}


# Day 1: Not Quite Lisp


@solution(2015, 1, 1, "count")
def floor_by_count(text: str) -> int:
    text = text.strip()
    if set(text) - _STEPS.keys():
        raise ValueError("invalid character")
    return text.count("(") - text.count(")")


@solution(2015, 1, 1, "sum")
def floor_by_sum(text: str) -> int:
    try:
        return sum(_STEPS[char] for char in text.strip())
    except KeyError as exc:
        raise ValueError(f"invalid character {exc.args[0]!r}") from exc


@solution(2015, 1, 2, "scan")
def basement_by_scan(text: str) -> int:
    floor = 0
    for position, char in enumerate(text.strip(), 1):
        if char not in _STEPS:
            raise ValueError(f"invalid character {char!r}")
        floor += _STEPS[char]
        if floor == -1:
            return position
    raise ValueError("never entered basement")


@solution(2015, 1, 2, "accumulate")
def basement_by_accumulate(text: str) -> int:
    try:
        floors = accumulate(_STEPS[char] for char in text.strip())
        return next(position for position, floor in enumerate(floors, 1) if floor == -1)
    except KeyError as exc:
        raise ValueError(f"invalid character {exc.args[0]!r}") from exc
    except StopIteration:
        raise ValueError("never entered basement") from None
