"""Registry of puzzle solutions.

Solutions register themselves with the :func:`solution` decorator::

    @solution(2015, 1, 1, "count")
    def count_parens(text: str) -> int:
        ...

Several solutions may be registered for the same puzzle part; they are
kept in registration order, which is also the order used when they are
benchmarked against each other.
"""

from __future__ import annotations

from typing import Any, Callable

from puzzlebench.bench.timing import Candidate
from puzzlebench.errors import PuzzleError
from puzzlebench.puzzle import Puzzle

SolutionFn = Callable[[str], Any]

_REGISTRY: dict[tuple[int, int, int], list[tuple[str, SolutionFn]]] = {}


def register(year: int, day: int, part: int, name: str, func: SolutionFn) -> None:
    """Register *func* as solution *name* for the given puzzle part."""
    entries = _REGISTRY.setdefault((year, day, part), [])
    if any(existing == name for existing, _ in entries):
        raise ValueError(f"Solution '{name}' already registered for {year} day {day} part {part}")
    entries.append((name, func))


def solution(
    year: int, day: int, part: int, name: str = "solution"
) -> Callable[[SolutionFn], SolutionFn]:
    """Decorator form of :func:`register`."""

    def decorator(func: SolutionFn) -> SolutionFn:
        register(year, day, part, name, func)
        return func

    return decorator


def solution_names(puzzle: Puzzle) -> list[str]:
    return [name for name, _ in _REGISTRY.get((puzzle.year, puzzle.day, puzzle.part), [])]


def candidates_for(puzzle: Puzzle) -> list[Candidate]:
    """Fresh Candidates for every solution of *puzzle*, in registration order."""
    entries = _REGISTRY.get((puzzle.year, puzzle.day, puzzle.part), [])
    return [Candidate(name, func) for name, func in entries]


def get_candidate(puzzle: Puzzle, name: str | None = None) -> Candidate:
    """Return the solution called *name*, or the first one registered.

    Raises:
        PuzzleError: If the puzzle has no solutions or none is called *name*.
    """
    candidates = candidates_for(puzzle)
    if not candidates:
        raise PuzzleError(f"{puzzle.header} is not implemented")
    if name is None:
        return candidates[0]
    for candidate in candidates:
        if candidate.name == name:
            return candidate
    raise PuzzleError(
        f"Solution '{name}' not found; available: {', '.join(c.name for c in candidates)}"
    )


# Register bundled solutions.
from puzzlebench.solutions import year_2015, year_2023  # noqa: E402, F401
