"""Exception hierarchy for puzzlebench."""

from __future__ import annotations


class PuzzlebenchError(Exception):
    """Base class for all errors reported by puzzlebench."""


class PuzzleError(PuzzlebenchError):
    """Invalid puzzle identity or no matching solution."""


class InputError(PuzzlebenchError):
    """The puzzle input could not be loaded."""


class BenchError(PuzzlebenchError):
    """Base class for benchmarking failures."""


class UsageError(BenchError):
    """The benchmark was invoked with arguments it cannot work with."""


class ClockError(BenchError):
    """The clock could not be read; the session cannot be measured."""


class CandidateError(BenchError):
    """A candidate raised while being sampled.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, name: str, invocation: int, message: str) -> None:
        super().__init__(f"Solution '{name}' failed on invocation {invocation}: {message}")
        self.name = name
        self.invocation = invocation
