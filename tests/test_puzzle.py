"""Tests for puzzlebench.puzzle."""

from __future__ import annotations

import unittest
from datetime import datetime

from puzzlebench.errors import PuzzleError
from puzzlebench.puzzle import PUZZLE_TZ, Puzzle


def _at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 12, 0, tzinfo=PUZZLE_TZ)


class TestPuzzle(unittest.TestCase):
    """Construction and derived values."""

    def test_header(self) -> None:
        self.assertEqual(Puzzle(2015, 1).header, "Advent of Code 2015 - Day 1 - Part 1")
        self.assertEqual(Puzzle(2023, 7, 2).header, "Advent of Code 2023 - Day 7 - Part 2")

    def test_input_url(self) -> None:
        self.assertEqual(Puzzle(2015, 3).input_url, "https://adventofcode.com/2015/day/3/input")

    def test_year_before_first(self) -> None:
        with self.assertRaises(PuzzleError):
            Puzzle(2014, 1)

    def test_day_out_of_range(self) -> None:
        for day in (0, 26):
            with self.subTest(day=day), self.assertRaises(PuzzleError):
                Puzzle(2020, day)

    def test_bad_part(self) -> None:
        with self.assertRaises(PuzzleError):
            Puzzle(2020, 1, 3)

    def test_ordering(self) -> None:
        self.assertLess(Puzzle(2015, 1, 2), Puzzle(2015, 2, 1))


class TestResolve(unittest.TestCase):
    """Tests for Puzzle.resolve() defaults."""

    def test_explicit(self) -> None:
        self.assertEqual(Puzzle.resolve(2016, 4, part2=True), Puzzle(2016, 4, 2))

    def test_today_in_december(self) -> None:
        self.assertEqual(Puzzle.resolve(None, None, now=_at(2024, 12, 5)), Puzzle(2024, 5))

    def test_today_outside_december(self) -> None:
        with self.assertRaises(PuzzleError):
            Puzzle.resolve(None, None, now=_at(2024, 6, 5))

    def test_day_only_uses_last_season(self) -> None:
        self.assertEqual(Puzzle.resolve(None, 3, now=_at(2024, 6, 5)), Puzzle(2023, 3))

    def test_day_only_in_december(self) -> None:
        self.assertEqual(Puzzle.resolve(None, 3, now=_at(2024, 12, 20)), Puzzle(2024, 3))

    def test_year_only(self) -> None:
        with self.assertRaises(PuzzleError) as ctx:
            Puzzle.resolve(2020, None)
        self.assertIn("2020", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
