"""Puzzle identity: which year, day and part to run.

Puzzles unlock at midnight US Eastern time on each day of December, so
defaults are derived from the current date in UTC-5.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from puzzlebench.errors import PuzzleError

FIRST_YEAR = 2015
LAST_DAY = 25
PUZZLE_TZ = timezone(timedelta(hours=-5), "EST")


def puzzle_now() -> datetime:
    """Current time in the puzzle release timezone."""
    return datetime.now(PUZZLE_TZ)


@dataclass(frozen=True, order=True)
class Puzzle:
    """One part of one day's puzzle."""

    year: int
    day: int
    part: int = 1

    def __post_init__(self) -> None:
        if self.year < FIRST_YEAR:
            raise PuzzleError(f"Invalid year {self.year}; the first year was {FIRST_YEAR}")
        if not 1 <= self.day <= LAST_DAY:
            raise PuzzleError(f"Day must be between 1 and {LAST_DAY} (got {self.day})")
        if self.part not in (1, 2):
            raise PuzzleError(f"Part must be 1 or 2 (got {self.part})")

    @classmethod
    def resolve(
        cls,
        year: int | None,
        day: int | None,
        *,
        part2: bool = False,
        now: datetime | None = None,
    ) -> Puzzle:
        """Build a Puzzle from optional CLI values, filling in defaults.

        - Neither year nor day: today's puzzle, only valid in December.
        - Day only: that day of the most recent December.
        - Year only: an error, the day cannot be guessed.
        """
        part = 2 if part2 else 1
        if year is not None and day is not None:
            return cls(year, day, part)
        if year is not None:
            raise PuzzleError(f"Please specify which day of {year} to run")

        now = now or puzzle_now()
        if day is None:
            if now.month != 12:
                raise PuzzleError("Current day can only be deduced in December; please specify")
            return cls(now.year, now.day, part)
        return cls(now.year - (1 if now.month < 12 else 0), day, part)

    @property
    def header(self) -> str:
        return f"Advent of Code {self.year} - Day {self.day} - Part {self.part}"

    @property
    def url(self) -> str:
        return f"https://adventofcode.com/{self.year}/day/{self.day}"

    @property
    def input_url(self) -> str:
        return f"{self.url}/input"
