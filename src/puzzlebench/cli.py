"""Command-line interface for puzzlebench.

Provides the main CLI entry point with ``solve``, ``bench`` and
``solutions`` subcommands.
"""

from __future__ import annotations

import functools
import sys
from pathlib import Path
from typing import Any, Callable

import click
from dotenv import load_dotenv

from puzzlebench import __version__
from puzzlebench.errors import PuzzlebenchError, UsageError
from puzzlebench.logging import setup_logging
from puzzlebench.puzzle import Puzzle

# Timings from a debug interpreter are not representative.
OPTIMIZED_BUILD = not hasattr(sys, "gettotalrefcount")


def _puzzle_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the options that select a puzzle part."""
    func = click.option(
        "-2", "--part2", is_flag=True, help="Run part 2 of the puzzle instead of part 1."
    )(func)
    func = click.option(
        "-d", "--day", type=int, default=None, help="Puzzle day; defaults to today in December."
    )(func)
    func = click.option(
        "-y", "--year", type=int, default=None, help="Puzzle year; defaults to the current year."
    )(func)
    return func


def _logging_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--log-file",
        type=click.Path(path_type=Path),
        default=None,
        help="Also write DEBUG logs to this file.",
    )(func)
    func = click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")(
        func
    )
    func = click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")(func)
    return func


def _report_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn puzzlebench errors into a message and a non-zero exit."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PuzzlebenchError as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(1) from exc
        except KeyboardInterrupt:
            click.echo("\nInterrupted.", err=True)
            raise SystemExit(130)  # noqa: B904

    return wrapper


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """puzzlebench: run and benchmark puzzle solutions.

    \b
    A ``.env`` file in the current directory is loaded first, so
    ADVENT_OF_CODE_SESSION can be kept there. Variables already set in
    the environment take precedence.
    """
    _load_env_file(Path.cwd() / ".env")


def _load_env_file(path: Path) -> None:
    """Load *path* into the environment; a missing file is not an error."""
    if not path.exists():
        return
    try:
        load_dotenv(path, override=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Could not load {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# solve
# ---------------------------------------------------------------------------


@main.command()
@_puzzle_options
@click.option("-s", "--solution", type=str, default=None, help="Solution name (default: first).")
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Read the puzzle input from this file instead of downloading it.",
)
@_logging_options
@_report_errors
def solve(
    year: int | None,
    day: int | None,
    part2: bool,
    solution: str | None,
    input_file: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Run one solution once and print its answer."""
    from puzzlebench.inputs import load_input
    from puzzlebench.solutions import get_candidate

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    puzzle = Puzzle.resolve(year, day, part2=part2)
    candidate = get_candidate(puzzle, solution)
    click.echo(puzzle.header)
    click.echo()

    text = load_input(puzzle, input_file=input_file)
    click.echo(candidate(text))


# ---------------------------------------------------------------------------
# bench
# ---------------------------------------------------------------------------


@main.command()
@_puzzle_options
@click.option("-s", "--solution", type=str, default=None, help="Solution name (default: first).")
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Read the puzzle input from this file instead of downloading it.",
)
@click.option(
    "-b",
    "--budget",
    type=float,
    default=None,
    help="Seconds to benchmark each solution for (default: 1).",
)
@click.option("--compare", is_flag=True, help="Benchmark and rank all solutions of the part.")
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML profile with benchmark settings.",
)
@click.option("--reservoir", type=int, default=None, help="Samples kept for the median.")
@click.option("--seed", type=int, default=None, help="Seed for the median reservoir.")
@click.option(
    "--calibrate/--no-calibrate",
    default=None,
    help="Estimate the per-call clock overhead before sampling.",
)
@_logging_options
@_report_errors
def bench(  # noqa: PLR0913
    year: int | None,
    day: int | None,
    part2: bool,
    solution: str | None,
    input_file: Path | None,
    budget: float | None,
    compare: bool,
    profile_path: Path | None,
    reservoir: int | None,
    seed: int | None,
    calibrate: bool | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark one solution, or rank all of them with --compare.

    \b
    Examples:
        # Benchmark the default solution of 2015 day 1 for 1 second
        puzzlebench bench -y 2015 -d 1 -i input.txt

        # Rank every part 2 solution, 3 seconds each
        puzzlebench bench -y 2015 -d 1 -2 -i input.txt -b 3 --compare
    """
    from puzzlebench.bench.config import config_from_profile, load_profile
    from puzzlebench.bench.runner import run_comparison, run_single
    from puzzlebench.inputs import load_input
    from puzzlebench.solutions import candidates_for, get_candidate

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    if compare and solution is not None:
        raise click.UsageError("--compare always runs all solutions")

    cli_overrides: dict[str, object] = {
        "budget_s": budget,
        "reservoir_capacity": reservoir,
        "seed": seed,
        "calibrate": calibrate,
    }
    if profile_path is not None:
        try:
            config = config_from_profile(load_profile(profile_path), cli_overrides=cli_overrides)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--profile") from exc
    else:
        config = config_from_profile({}, cli_overrides=cli_overrides)

    puzzle = Puzzle.resolve(year, day, part2=part2)

    if compare:
        candidates = candidates_for(puzzle)
        if not candidates:
            raise UsageError(f"{puzzle.header} has no solutions to compare")
        text = load_input(puzzle, input_file=input_file)
        click.echo(f"Input: {len(text.encode('utf-8')):,} bytes", err=True)

        def _progress(index: int, total: int, name: str) -> None:
            click.echo(f"Benchmarking {index}/{total} - {name}", err=True)

        result = run_comparison(
            candidates,
            text,
            config=config,
            title=puzzle.header,
            optimized=OPTIMIZED_BUILD,
            progress=_progress,
        )
        click.echo(result.table)
    else:
        candidate = get_candidate(puzzle, solution)
        text = load_input(puzzle, input_file=input_file)
        single = run_single(
            candidate,
            text,
            config=config,
            title=puzzle.header,
            input_size=len(text.encode("utf-8")),
            optimized=OPTIMIZED_BUILD,
        )
        click.echo(single.report)


# ---------------------------------------------------------------------------
# solutions
# ---------------------------------------------------------------------------


@main.command("solutions")
@_puzzle_options
@_report_errors
def solutions_cmd(year: int | None, day: int | None, part2: bool) -> None:
    """List the registered solutions of a puzzle part."""
    from puzzlebench.solutions import solution_names

    puzzle = Puzzle.resolve(year, day, part2=part2)
    names = solution_names(puzzle)
    if not names:
        click.echo(f"{puzzle.header}: no solutions registered.")
        return
    click.echo(puzzle.header)
    for name in names:
        click.echo(f"  {name}")


if __name__ == "__main__":
    main()
